#!/usr/bin/env python3
"""
数据库连接管理
使用SQLite作为持久化存储
"""
import sqlite3
from pathlib import Path
from typing import Dict, List
from contextlib import contextmanager
import logging

logger = logging.getLogger(__name__)


def _unicode_lower(value):
    # SQLite自带的lower()只处理ASCII
    return value.lower() if isinstance(value, str) else value


class Database:
    """数据库连接管理器"""

    def __init__(self, db_path: str = "data/library.db"):
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.init_database()

    @contextmanager
    def get_connection(self):
        """获取数据库连接的上下文管理器"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.create_function("unicode_lower", 1, _unicode_lower, deterministic=True)
        try:
            yield conn
            conn.commit()
        except Exception as e:
            conn.rollback()
            raise e
        finally:
            conn.close()

    def init_database(self):
        """初始化数据库表结构"""
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS books (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    author TEXT NOT NULL,
                    description TEXT,
                    publication_year INTEGER NOT NULL CHECK (publication_year >= 1000),
                    isbn TEXT UNIQUE NOT NULL,
                    status TEXT NOT NULL DEFAULT 'AVAILABLE'
                        CHECK (status IN ('AVAILABLE', 'BORROWED', 'RESERVED', 'LOST', 'DAMAGED')),
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
            """)

            indexes = [
                "CREATE INDEX IF NOT EXISTS idx_books_status ON books(status)",
                "CREATE INDEX IF NOT EXISTS idx_books_title ON books(title)",
            ]

            for index_sql in indexes:
                cursor.execute(index_sql)

            logger.info(f"数据库初始化完成: {self.db_path}")

    def execute_query(self, query: str, params: tuple = ()) -> List[Dict]:
        """执行查询并返回结果"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [dict(row) for row in cursor.fetchall()]

    def execute_insert(self, query: str, params: tuple = ()) -> int:
        """执行插入操作并返回新行ID"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def execute_update(self, query: str, params: tuple = ()) -> int:
        """执行更新操作并返回影响的行数"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.rowcount

    def execute_many(self, query: str, params_list: List[tuple]) -> int:
        """批量执行操作"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.executemany(query, params_list)
            return cursor.rowcount
