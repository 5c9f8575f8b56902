"""
示例数据初始化
书库为空时写入几本示例书籍
"""
from datetime import datetime, timezone
import logging

from ..models.book import Book, BookStatus
from ..repositories.book_repository import BookRepository

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    {
        "title": "The Little Prince",
        "author": "Antoine de Saint-Exupéry",
        "description": "A poetic and philosophical tale under the guise of a children's book.",
        "publication_year": 1943,
        "isbn": "978-2-07-040850-4",
        "status": BookStatus.AVAILABLE,
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "description": "A dystopian science fiction novel describing a totalitarian society.",
        "publication_year": 1949,
        "isbn": "978-2-07-036822-8",
        "status": BookStatus.AVAILABLE,
    },
    {
        "title": "The Lord of the Rings",
        "author": "J.R.R. Tolkien",
        "description": "A fantasy epic in three volumes.",
        "publication_year": 1954,
        "isbn": "978-2-07-061288-7",
        "status": BookStatus.BORROWED,
    },
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "description": "A guide for writing clean and maintainable code.",
        "publication_year": 2008,
        "isbn": "978-0-13-235088-4",
        "status": BookStatus.AVAILABLE,
    },
    {
        "title": "Design Patterns",
        "author": "Erich Gamma, Richard Helm, Ralph Johnson, John Vlissides",
        "description": "The 23 fundamental design patterns.",
        "publication_year": 1994,
        "isbn": "978-0-201-63361-0",
        "status": BookStatus.AVAILABLE,
    },
]


def seed_sample_books(book_repository: BookRepository) -> int:
    """书库为空时写入示例书籍，返回写入数量"""
    if book_repository.count() > 0:
        logger.info("书库已有数据，跳过示例数据初始化")
        return 0

    now = datetime.now(timezone.utc)
    books = [Book(**data, created_at=now, updated_at=now) for data in SAMPLE_BOOKS]
    inserted = book_repository.batch_create(books)
    logger.info(f"示例数据初始化完成: {inserted} 本书")
    return inserted
