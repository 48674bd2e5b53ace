"""
Pagination filter and paginated response schemas.
"""

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from webapi.core.config import settings
from webapi.schemas.base import BaseSchema

T = TypeVar("T")


class Search(BaseSchema):
    """Keyword search restricted to the listed fields."""
    fields: List[str] = Field(default_factory=list, description="Fields to search in")
    keyword: Optional[str] = Field(None, description="Text to look for")


class PaginationFilter(BaseSchema):
    """Paging, ordering and free-text filtering for list queries."""
    page_number: int = Field(1, ge=1, description="1-based page number")
    page_size: int = Field(
        default_factory=lambda: settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    )
    order_by: List[str] = Field(
        default_factory=list,
        description="Ordering expressions such as 'name' or 'name desc'",
    )
    keyword: Optional[str] = Field(None, description="Free text matched against every searchable field")
    advanced_search: Optional[Search] = Field(None, description="Keyword matched against selected fields")

    def has_order_by(self) -> bool:
        return any(expression and expression.strip() for expression in self.order_by)

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "page_number": 1,
                "page_size": 10,
                "order_by": ["name"],
                "keyword": "acme",
            }
        },
    )


class PaginationResponse(BaseModel, Generic[T]):
    """One page of results plus the total number of matches."""
    data: List[T]
    current_page: int
    total_pages: int
    total_count: int
    page_size: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def create(cls, data: List[T], count: int, page_number: int, page_size: int) -> "PaginationResponse[T]":
        total_pages = math.ceil(count / page_size) if page_size else 0
        return cls(
            data=data,
            current_page=page_number,
            total_pages=total_pages,
            total_count=count,
            page_size=page_size,
            has_previous_page=page_number > 1,
            has_next_page=page_number < total_pages,
        )
