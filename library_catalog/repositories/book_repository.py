"""
书籍数据访问层
"""
import sqlite3
from datetime import datetime
from typing import List, Optional
import logging

from ..exceptions import DuplicateIsbnError
from ..models.book import Book, BookStatus
from ..models.database import Database

logger = logging.getLogger(__name__)

# sqlite INTEGER 取值范围
SQLITE_INT_MIN = -2**63
SQLITE_INT_MAX = 2**63 - 1


def _valid_id(book_id: int) -> bool:
    """超出sqlite整数范围的ID视为不存在"""
    return SQLITE_INT_MIN <= book_id <= SQLITE_INT_MAX


class BookRepository:
    """书籍仓库类"""

    def __init__(self, db: Database):
        self.db = db

    def create(self, book: Book) -> Book:
        """创建书籍，返回带自增ID的记录"""
        query = """
            INSERT INTO books (title, author, description, publication_year, isbn, status,
                               created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """
        try:
            book.id = self.db.execute_insert(query, self._params(book))
        except sqlite3.IntegrityError as e:
            self._raise_integrity_error(book, e)
        return book

    def batch_create(self, books: List[Book]) -> int:
        """批量创建书籍（已存在的ISBN跳过）"""
        query = """
            INSERT OR IGNORE INTO books (title, author, description, publication_year, isbn, status,
                                         created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """
        return self.db.execute_many(query, [self._params(b) for b in books])

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """根据ID获取书籍"""
        if not _valid_id(book_id):
            return None
        results = self.db.execute_query("SELECT * FROM books WHERE id = ?", (book_id,))
        return Book.from_row(results[0]) if results else None

    def get_all(self) -> List[Book]:
        """获取所有书籍"""
        results = self.db.execute_query("SELECT * FROM books ORDER BY id")
        return [Book.from_row(row) for row in results]

    def exists_by_isbn(self, isbn: str) -> bool:
        """检查ISBN是否已存在"""
        results = self.db.execute_query("SELECT 1 FROM books WHERE isbn = ? LIMIT 1", (isbn,))
        return bool(results)

    def search(self, keyword: str) -> List[Book]:
        """按标题、作者或ISBN搜索（不区分大小写的子串匹配）"""
        query = """
            SELECT * FROM books
            WHERE instr(unicode_lower(title), unicode_lower(?)) > 0
               OR instr(unicode_lower(author), unicode_lower(?)) > 0
               OR instr(unicode_lower(isbn), unicode_lower(?)) > 0
            ORDER BY id
        """
        results = self.db.execute_query(query, (keyword, keyword, keyword))
        return [Book.from_row(row) for row in results]

    def get_by_status(self, status: BookStatus) -> List[Book]:
        """根据状态获取书籍"""
        results = self.db.execute_query(
            "SELECT * FROM books WHERE status = ? ORDER BY id", (status.value,)
        )
        return [Book.from_row(row) for row in results]

    def update(self, book: Book) -> bool:
        """更新书籍全部可变字段"""
        query = """
            UPDATE books
            SET title = ?, author = ?, description = ?, publication_year = ?, isbn = ?,
                status = ?, updated_at = ?
            WHERE id = ?
        """
        params = (book.title, book.author, book.description, book.publication_year,
                  book.isbn, book.status.value, book.updated_at.isoformat(), book.id)
        try:
            return self.db.execute_update(query, params) > 0
        except sqlite3.IntegrityError as e:
            self._raise_integrity_error(book, e)

    def transition_status(self, book_id: int, expected: BookStatus, target: BookStatus,
                          updated_at: datetime) -> bool:
        """仅当当前状态为expected时切换到target（原子操作）"""
        if not _valid_id(book_id):
            return False
        query = """
            UPDATE books SET status = ?, updated_at = ?
            WHERE id = ? AND status = ?
        """
        params = (target.value, updated_at.isoformat(), book_id, expected.value)
        return self.db.execute_update(query, params) > 0

    def delete(self, book_id: int) -> bool:
        """删除书籍"""
        if not _valid_id(book_id):
            return False
        return self.db.execute_update("DELETE FROM books WHERE id = ?", (book_id,)) > 0

    def count_by_status(self, status: BookStatus) -> int:
        """统计指定状态的书籍数量"""
        result = self.db.execute_query(
            "SELECT COUNT(*) as total FROM books WHERE status = ?", (status.value,)
        )
        return result[0]['total'] if result else 0

    def count(self) -> int:
        """获取书籍总数"""
        result = self.db.execute_query("SELECT COUNT(*) as total FROM books")
        return result[0]['total'] if result else 0

    @staticmethod
    def _params(book: Book) -> tuple:
        return (book.title, book.author, book.description, book.publication_year, book.isbn,
                book.status.value, book.created_at.isoformat(), book.updated_at.isoformat())

    @staticmethod
    def _raise_integrity_error(book: Book, error: sqlite3.IntegrityError):
        if "UNIQUE" in str(error) and "isbn" in str(error):
            logger.warning(f"ISBN冲突: {book.isbn}")
            raise DuplicateIsbnError(f"A book with ISBN {book.isbn} already exists") from error
        raise error
