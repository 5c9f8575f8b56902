#!/usr/bin/env python3
"""
书籍管理路由
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
import logging

from ..exceptions import CatalogException, BookNotFoundError
from ..models.book import BookStatus
from ..services.book_service import BookService

logger = logging.getLogger(__name__)

# 创建路由
book_router = APIRouter(prefix="/books", tags=["books"])


class BookRequest(BaseModel):
    """创建/更新书籍请求"""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    description: Optional[str] = Field(None, max_length=1000)
    publication_year: int = Field(..., alias="publicationYear", ge=1000, le=2**31 - 1)
    isbn: str = Field(..., min_length=1)
    status: BookStatus = BookStatus.AVAILABLE

    @field_validator("title", "author", "isbn")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


def get_book_service(request: Request) -> BookService:
    """从应用状态获取书籍服务"""
    return request.app.state.book_service


def _error_response(status_code: int, error: CatalogException) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(error)})


def _internal_error(action: str, error: Exception) -> HTTPException:
    logger.error(f"{action}失败: {error}")
    return HTTPException(status_code=500, detail=str(error))


@book_router.get("")
async def get_books(service: BookService = Depends(get_book_service)):
    """获取所有书籍"""
    try:
        return [book.to_dict() for book in service.list_books()]
    except Exception as e:
        raise _internal_error("获取书籍列表", e)


@book_router.get("/search")
async def search_books(
    keyword: str = Query(...),
    service: BookService = Depends(get_book_service)
):
    """按标题、作者或ISBN搜索书籍"""
    try:
        return [book.to_dict() for book in service.search_books(keyword)]
    except Exception as e:
        raise _internal_error("搜索书籍", e)


@book_router.get("/stats")
async def get_book_stats(service: BookService = Depends(get_book_service)):
    """获取书籍统计（可借/已借出）"""
    try:
        return service.get_stats()
    except Exception as e:
        raise _internal_error("获取统计", e)


@book_router.get("/status/{status}")
async def get_books_by_status(
    status: BookStatus,
    service: BookService = Depends(get_book_service)
):
    """根据状态获取书籍"""
    try:
        return [book.to_dict() for book in service.get_books_by_status(status)]
    except Exception as e:
        raise _internal_error("按状态获取书籍", e)


@book_router.get("/{book_id}")
async def get_book(book_id: int, service: BookService = Depends(get_book_service)):
    """获取单本书籍"""
    try:
        book = service.get_book(book_id)
    except Exception as e:
        raise _internal_error("获取书籍", e)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book.to_dict()


@book_router.post("", status_code=201)
async def create_book(request: BookRequest, service: BookService = Depends(get_book_service)):
    """创建书籍"""
    try:
        book = service.create_book(request.model_dump())
        return book.to_dict()
    except CatalogException as e:
        return _error_response(400, e)
    except Exception as e:
        raise _internal_error("创建书籍", e)


@book_router.put("/{book_id}")
async def update_book(
    book_id: int,
    request: BookRequest,
    service: BookService = Depends(get_book_service)
):
    """更新书籍（全字段覆盖）"""
    try:
        book = service.update_book(book_id, request.model_dump())
        return book.to_dict()
    except CatalogException as e:
        return _error_response(400, e)
    except Exception as e:
        raise _internal_error("更新书籍", e)


@book_router.delete("/{book_id}")
async def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    """删除书籍"""
    try:
        service.delete_book(book_id)
        return Response(status_code=200)
    except BookNotFoundError as e:
        return _error_response(400, e)
    except Exception as e:
        raise _internal_error("删除书籍", e)


@book_router.post("/{book_id}/borrow")
async def borrow_book(book_id: int, service: BookService = Depends(get_book_service)):
    """借出书籍"""
    try:
        return service.borrow_book(book_id).to_dict()
    except CatalogException as e:
        return _error_response(400, e)
    except Exception as e:
        raise _internal_error("借出书籍", e)


@book_router.post("/{book_id}/return")
async def return_book(book_id: int, service: BookService = Depends(get_book_service)):
    """归还书籍"""
    try:
        return service.return_book(book_id).to_dict()
    except CatalogException as e:
        return _error_response(400, e)
    except Exception as e:
        raise _internal_error("归还书籍", e)
