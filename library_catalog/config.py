"""
应用配置
从环境变量（以及 .env 文件）读取
"""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    # 应用
    app_name: str = os.getenv("APP_NAME", "Library Catalog")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8080"))
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    cors_origins: List[str] = field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:3000")
    )

    # 数据库
    database_path: str = os.getenv("DATABASE_PATH", "data/library.db")

    # 启动时写入示例数据（仅当书库为空）
    seed_sample_data: bool = _env_bool("SEED_SAMPLE_DATA", "true")


settings = Settings()
