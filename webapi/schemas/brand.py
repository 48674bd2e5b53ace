"""
Brand schemas.
"""

from typing import Optional
from pydantic import Field

from webapi.schemas.base import BaseSchema
from webapi.schemas.pagination import PaginationFilter


class BrandDto(BaseSchema):
    """Brand summary returned by search and lookups."""
    id: str
    name: str
    description: Optional[str] = None


class SearchBrandsRequest(PaginationFilter):
    """Brand search; without ``order_by`` results are ordered by name."""


class CreateBrandRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = Field(None, max_length=1000)


class UpdateBrandRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = Field(None, max_length=1000)
