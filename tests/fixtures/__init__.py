"""
测试fixtures包
"""
from .sample_data import (
    SAMPLE_BOOKS,
    SAMPLE_TIMESTAMP,
    INVALID_YEAR
)

__all__ = [
    "SAMPLE_BOOKS",
    "SAMPLE_TIMESTAMP",
    "INVALID_YEAR"
]
