"""
书籍业务服务层
"""
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional
import logging

from ..repositories.book_repository import BookRepository
from ..models.book import Book, BookStatus
from ..exceptions import BookNotFoundError, DuplicateIsbnError, InvalidTransitionError

logger = logging.getLogger(__name__)


class BookService:
    """书籍服务类"""

    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    def list_books(self) -> List[Book]:
        """获取所有书籍"""
        return self.book_repository.get_all()

    def get_book(self, book_id: int) -> Optional[Book]:
        """根据ID获取书籍，不存在时返回None"""
        return self.book_repository.get_by_id(book_id)

    def create_book(self, book_data: Dict[str, Any]) -> Book:
        """创建书籍

        新书状态固定为AVAILABLE，传入的status会被忽略。
        """
        # 检查ISBN是否已存在
        if self.book_repository.exists_by_isbn(book_data["isbn"]):
            logger.warning(f"创建书籍失败，ISBN已存在: {book_data['isbn']}")
            raise DuplicateIsbnError("A book with this ISBN already exists")

        now = datetime.now(timezone.utc)
        book = Book(
            title=book_data["title"],
            author=book_data["author"],
            description=book_data.get("description"),
            publication_year=book_data["publication_year"],
            isbn=book_data["isbn"],
            status=BookStatus.AVAILABLE,
            created_at=now,
            updated_at=now,
        )
        book = self.book_repository.create(book)
        logger.info(f"创建书籍成功: {book!r}")
        return book

    def update_book(self, book_id: int, book_data: Dict[str, Any]) -> Book:
        """更新书籍（覆盖全部可变字段，包括状态）"""
        book = self._require_book(book_id)

        book.title = book_data["title"]
        book.author = book_data["author"]
        book.description = book_data.get("description")
        book.publication_year = book_data["publication_year"]
        book.isbn = book_data["isbn"]
        book.status = BookStatus(book_data.get("status", BookStatus.AVAILABLE))
        book.updated_at = datetime.now(timezone.utc)

        if not self.book_repository.update(book):
            raise BookNotFoundError(f"Book not found with id: {book_id}")
        logger.info(f"更新书籍成功: {book!r}")
        return book

    def delete_book(self, book_id: int) -> None:
        """删除书籍"""
        if not self.book_repository.delete(book_id):
            logger.warning(f"删除书籍失败，书籍不存在: {book_id}")
            raise BookNotFoundError(f"Book not found with id: {book_id}")
        logger.info(f"删除书籍成功: {book_id}")

    def search_books(self, keyword: str) -> List[Book]:
        """按标题、作者或ISBN搜索书籍"""
        return self.book_repository.search(keyword)

    def get_books_by_status(self, status: BookStatus) -> List[Book]:
        """根据状态获取书籍"""
        return self.book_repository.get_by_status(status)

    def borrow_book(self, book_id: int) -> Book:
        """借出书籍：AVAILABLE -> BORROWED"""
        return self._transition(
            book_id, BookStatus.AVAILABLE, BookStatus.BORROWED,
            "The book is not available for borrowing",
        )

    def return_book(self, book_id: int) -> Book:
        """归还书籍：BORROWED -> AVAILABLE"""
        return self._transition(
            book_id, BookStatus.BORROWED, BookStatus.AVAILABLE,
            "The book is not borrowed",
        )

    def get_stats(self) -> Dict[str, int]:
        """获取可借和已借出书籍数量"""
        return {
            "available": self.book_repository.count_by_status(BookStatus.AVAILABLE),
            "borrowed": self.book_repository.count_by_status(BookStatus.BORROWED),
        }

    def _require_book(self, book_id: int) -> Book:
        book = self.book_repository.get_by_id(book_id)
        if not book:
            raise BookNotFoundError(f"Book not found with id: {book_id}")
        return book

    def _transition(self, book_id: int, expected: BookStatus, target: BookStatus,
                    error_message: str) -> Book:
        book = self._require_book(book_id)
        if book.status != expected:
            logger.warning(f"状态不允许: {book!r}, 需要 {expected.value}")
            raise InvalidTransitionError(error_message)

        now = datetime.now(timezone.utc)
        # 条件更新，防止并发请求同时通过检查
        if not self.book_repository.transition_status(book_id, expected, target, now):
            logger.warning(f"状态已被并发修改: {book_id}")
            raise InvalidTransitionError(error_message)

        book.status = target
        book.updated_at = now
        logger.info(f"书籍状态变更: {book_id} {expected.value} -> {target.value}")
        return book
