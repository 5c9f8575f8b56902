"""
业务异常定义
"""

class CatalogException(Exception):
    """基础异常类"""
    pass

class BookNotFoundError(CatalogException):
    """书籍未找到异常"""
    pass

class DuplicateIsbnError(CatalogException):
    """重复ISBN异常"""
    pass

class InvalidTransitionError(CatalogException):
    """书籍状态不允许该操作"""
    pass
