"""
Pydantic schemas for request/response models.
"""

from .base import BaseSchema, MessageSchema
from .pagination import PaginationFilter, PaginationResponse, Search

__all__ = [
    "BaseSchema",
    "MessageSchema",
    "PaginationFilter",
    "PaginationResponse",
    "Search",
]
