#!/usr/bin/env python3
"""
启动脚本 - 图书馆藏书管理系统
使用方法: python run.py
"""

import logging
import uvicorn

from library_catalog.config import settings

# 配置详细日志
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('debug.log', encoding='utf-8')
    ]
)

# 设置特定模块的日志级别
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

if __name__ == "__main__":
    logging.info("=" * 60)
    logging.info(f"启动{settings.app_name} v{settings.app_version}")
    logging.info(f"数据库: {settings.database_path}")
    logging.info(f"API文档: http://{settings.api_host}:{settings.api_port}/docs")
    logging.info("=" * 60)

    uvicorn.run(
        "library_catalog.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        reload_dirs=["library_catalog"],
        log_level="debug"
    )
