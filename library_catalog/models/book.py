"""
书籍模型
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class BookStatus(str, Enum):
    """书籍状态"""
    AVAILABLE = "AVAILABLE"
    BORROWED = "BORROWED"
    RESERVED = "RESERVED"
    LOST = "LOST"
    DAMAGED = "DAMAGED"


@dataclass
class Book:
    """书籍模型"""
    title: str
    author: str
    publication_year: int
    isbn: str  # 唯一
    description: Optional[str] = None
    status: BookStatus = BookStatus.AVAILABLE
    id: Optional[int] = None  # 数据库自增主键
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Book":
        """从数据库行构建"""
        return cls(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            description=row["description"],
            publication_year=row["publication_year"],
            isbn=row["isbn"],
            status=BookStatus(row["status"]),
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """转换为接口返回的JSON结构（camelCase）"""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "publicationYear": self.publication_year,
            "isbn": self.isbn,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"Book(id={self.id}, isbn='{self.isbn}', title='{self.title}', status={self.status.value})"


def _parse_timestamp(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
