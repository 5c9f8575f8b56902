#!/usr/bin/env python3
"""
主应用入口
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .config import Settings, settings as default_settings
from .models.database import Database
from .repositories.book_repository import BookRepository
from .routes.book_routes import book_router
from .services.book_service import BookService
from .services.data_initializer import seed_sample_books

# 配置日志
logging.basicConfig(
    level=default_settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """创建FastAPI应用，显式组装数据库、仓库和服务"""
    settings = settings or default_settings

    db = Database(settings.database_path)
    book_repository = BookRepository(db)
    book_service = BookService(book_repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("应用启动中...")
        if settings.seed_sample_data:
            seed_sample_books(book_repository)
        logger.info("数据库连接就绪")
        yield
        logger.info("应用关闭中...")

    app = FastAPI(
        title=settings.app_name,
        description="图书馆藏书管理系统",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.book_service = book_service

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(book_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check():
        """健康检查接口"""
        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": datetime.now().isoformat(),
        }

    return app


app = create_app()


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """运行服务器"""
    uvicorn.run(app, host=host or default_settings.api_host, port=port or default_settings.api_port)
