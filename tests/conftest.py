"""
pytest配置文件，定义全局fixtures和测试配置
"""
import os
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Generator
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# 导入 library_catalog.main 时会创建模块级应用，先把数据库指向临时目录
os.environ.setdefault("DATABASE_PATH", os.path.join(tempfile.gettempdir(), "library_catalog_test.db"))
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

from library_catalog.config import Settings
from library_catalog.main import create_app
from library_catalog.models.database import Database
from library_catalog.repositories.book_repository import BookRepository
from library_catalog.services.book_service import BookService


@pytest.fixture
def temp_db_path() -> Generator[str, None, None]:
    """创建临时数据库文件路径"""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as temp_file:
        temp_path = temp_file.name
    yield temp_path
    Path(temp_path).unlink(missing_ok=True)


@pytest.fixture
def test_db(temp_db_path: str) -> Database:
    """创建测试数据库实例"""
    return Database(temp_db_path)


@pytest.fixture
def book_repository(test_db: Database) -> BookRepository:
    """基于临时数据库的书籍仓库"""
    return BookRepository(test_db)


@pytest.fixture
def book_service(book_repository: BookRepository) -> BookService:
    """基于临时数据库的书籍服务"""
    return BookService(book_repository)


@pytest.fixture
def test_settings(temp_db_path: str) -> Settings:
    """测试配置（不写入示例数据）"""
    return Settings(database_path=temp_db_path, seed_sample_data=False)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """创建测试应用"""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """创建FastAPI测试客户端"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """创建异步HTTP客户端"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_book_data():
    """示例书籍数据（接口格式）"""
    return {
        "title": "Le Petit Prince",
        "author": "Antoine de Saint-Exupéry",
        "description": "Un conte poétique et philosophique.",
        "publicationYear": 1943,
        "isbn": "978-2-07-040850-4",
    }


# 测试标记定义
pytest_plugins = []


def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line(
        "markers", "unit: 单元测试"
    )
    config.addinivalue_line(
        "markers", "integration: 集成测试"
    )
    config.addinivalue_line(
        "markers", "e2e: 端到端测试"
    )
    config.addinivalue_line(
        "markers", "slow: 慢速测试"
    )
