#!/usr/bin/env python3
"""
书籍状态生命周期测试
BookService + 真实SQLite仓库
"""
from datetime import timezone

import pytest

from library_catalog.exceptions import BookNotFoundError, DuplicateIsbnError, InvalidTransitionError
from library_catalog.models.book import BookStatus
from tests.fixtures.sample_data import SAMPLE_BOOKS


class TestBookLifecycle:
    """书籍生命周期测试类"""

    @pytest.fixture
    def books(self, book_service):
        """创建全部样本书籍"""
        return [book_service.create_book(data) for data in SAMPLE_BOOKS]

    def test_created_books_are_available(self, books):
        """测试新书状态为AVAILABLE"""
        assert all(book.status == BookStatus.AVAILABLE for book in books)
        assert all(book.created_at <= book.updated_at for book in books)

    def test_timestamps_are_utc(self, book_service, books):
        """测试时间戳为UTC且更新时间不早于创建时间"""
        book_id = books[0].id
        book_service.borrow_book(book_id)

        stored = book_service.get_book(book_id)
        assert stored.created_at.tzinfo == timezone.utc
        assert stored.updated_at.tzinfo is not None
        assert stored.created_at <= stored.updated_at

    def test_duplicate_isbn_keeps_first(self, book_service, books):
        """测试重复ISBN创建失败且只保留第一本"""
        with pytest.raises(DuplicateIsbnError):
            book_service.create_book({**SAMPLE_BOOKS[2], "title": "Another Title"})

        matches = book_service.search_books(SAMPLE_BOOKS[2]["isbn"])
        assert [b.title for b in matches] == ["Clean Code"]

    def test_round_trip(self, book_service, books):
        """测试创建后读取字段一致"""
        stored = book_service.get_book(books[0].id)

        assert stored.title == SAMPLE_BOOKS[0]["title"]
        assert stored.author == SAMPLE_BOOKS[0]["author"]
        assert stored.description == SAMPLE_BOOKS[0]["description"]
        assert stored.publication_year == SAMPLE_BOOKS[0]["publication_year"]
        assert stored.isbn == SAMPLE_BOOKS[0]["isbn"]
        assert stored.status == BookStatus.AVAILABLE

    def test_borrow_then_return(self, book_service, books):
        """测试借出再归还"""
        book_id = books[0].id

        assert book_service.borrow_book(book_id).status == BookStatus.BORROWED
        assert book_service.get_book(book_id).status == BookStatus.BORROWED

        returned = book_service.return_book(book_id)
        assert returned.status == BookStatus.AVAILABLE
        assert book_service.get_book(book_id).status == BookStatus.AVAILABLE

    def test_borrow_twice_fails_and_keeps_status(self, book_service, books):
        """测试重复借出失败且状态不变"""
        book_id = books[0].id
        book_service.borrow_book(book_id)

        with pytest.raises(InvalidTransitionError):
            book_service.borrow_book(book_id)

        assert book_service.get_book(book_id).status == BookStatus.BORROWED

    def test_return_available_fails(self, book_service, books):
        """测试归还未借出书籍失败"""
        with pytest.raises(InvalidTransitionError):
            book_service.return_book(books[0].id)

        assert book_service.get_book(books[0].id).status == BookStatus.AVAILABLE

    def test_update_bypasses_transition_guards(self, book_service, books):
        """测试全量更新可设置任意状态"""
        book_id = books[0].id
        book_service.borrow_book(book_id)

        updated = book_service.update_book(book_id, {**SAMPLE_BOOKS[0], "status": BookStatus.LOST})

        assert updated.status == BookStatus.LOST
        with pytest.raises(InvalidTransitionError):
            book_service.return_book(book_id)

    def test_update_refreshes_updated_at(self, book_service, books):
        """测试更新刷新updatedAt且不修改createdAt"""
        original = book_service.get_book(books[0].id)

        updated = book_service.update_book(original.id, {**SAMPLE_BOOKS[0], "title": "Changed"})
        stored = book_service.get_book(original.id)

        assert stored.title == "Changed"
        assert stored.created_at == original.created_at
        assert stored.updated_at >= original.updated_at
        assert stored.updated_at == updated.updated_at

    def test_update_missing_book(self, book_service):
        """测试更新不存在的书籍"""
        with pytest.raises(BookNotFoundError):
            book_service.update_book(999, SAMPLE_BOOKS[0])

    def test_search(self, book_service, books):
        """测试关键字搜索"""
        assert [b.title for b in book_service.search_books("1984")] == ["1984"]
        assert [b.title for b in book_service.search_books("ORWELL")] == ["1984", "Animal Farm"]
        assert book_service.search_books("tolkien") == []

    def test_list_by_status(self, book_service, books):
        """测试按状态筛选"""
        book_service.borrow_book(books[1].id)

        borrowed = book_service.get_books_by_status(BookStatus.BORROWED)
        assert [b.id for b in borrowed] == [books[1].id]

    def test_stats_after_borrow(self, book_service, books):
        """测试创建3本借出1本后的统计"""
        book_service.borrow_book(books[0].id)

        assert book_service.get_stats() == {"available": 2, "borrowed": 1}

    def test_delete(self, book_service, books):
        """测试删除后不再出现在列表中"""
        book_service.delete_book(books[0].id)

        assert books[0].id not in [b.id for b in book_service.list_books()]
        with pytest.raises(BookNotFoundError):
            book_service.delete_book(books[0].id)

    def test_delete_missing(self, book_service):
        """测试删除不存在的书籍"""
        with pytest.raises(BookNotFoundError):
            book_service.delete_book(12345)
