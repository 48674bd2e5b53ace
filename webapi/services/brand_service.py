"""
Catalog brand operations.
"""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from webapi.core.config import settings
from webapi.core.errors import ConflictException, ErrorMessage, NotFoundException
from webapi.core.localization import Localizer
from webapi.core.specification import EntitiesByPaginationFilterSpec
from webapi.models.audit_log import AuditLog
from webapi.models.brand import Brand
from webapi.repositories.read_repository import ReadRepository
from webapi.schemas.brand import BrandDto, CreateBrandRequest, SearchBrandsRequest, UpdateBrandRequest
from webapi.schemas.pagination import PaginationResponse

logger = logging.getLogger(__name__)


class BrandsBySearchRequestSpec(EntitiesByPaginationFilterSpec):
    """Brand search specification, ordered by name unless the caller orders."""

    def __init__(self, request: SearchBrandsRequest):
        super().__init__(Brand, request)
        if not request.has_order_by():
            self.order("name")


def search_brands(request: SearchBrandsRequest, repository: ReadRepository[Brand]) -> PaginationResponse[BrandDto]:
    """Return one page of brands matching ``request`` plus the total match count."""
    spec = BrandsBySearchRequestSpec(request)

    brands = repository.list(spec)
    count = repository.count(spec)

    return PaginationResponse[BrandDto].create(
        [BrandDto.model_validate(brand) for brand in brands],
        count,
        request.page_number,
        request.page_size,
    )


class BrandService:
    """Create, read, update and soft-delete brands."""

    def __init__(self, db: Session, localizer: Localizer, current_user_id: Optional[str] = None):
        self.db = db
        self.localizer = localizer
        self.current_user_id = current_user_id
        self.repository = ReadRepository(db, Brand)

    def search(self, request: SearchBrandsRequest) -> PaginationResponse[BrandDto]:
        return search_brands(request, self.repository)

    def get(self, brand_id: str) -> BrandDto:
        return BrandDto.model_validate(self._find_or_404(brand_id))

    def create(self, request: CreateBrandRequest) -> str:
        self._ensure_name_available(request.name)

        brand = Brand(name=request.name, description=request.description)
        brand.mark_created(self.current_user_id)
        self.db.add(brand)
        self.db.flush()
        self._audit(brand, "brand_create")
        self.db.commit()

        logger.info(f"Brand '{brand.name}' created by user {self.current_user_id}")
        return brand.id

    def update(self, brand_id: str, request: UpdateBrandRequest) -> str:
        brand = self._find_or_404(brand_id)
        self._ensure_name_available(request.name, exclude_id=brand.id)

        brand.name = request.name
        brand.description = request.description
        brand.mark_updated(self.current_user_id)
        self._audit(brand, "brand_update")
        self.db.commit()

        logger.info(f"Brand {brand.id} updated by user {self.current_user_id}")
        return brand.id

    def delete(self, brand_id: str) -> str:
        brand = self._find_or_404(brand_id)

        brand.soft_delete(self.current_user_id)
        self._audit(brand, "brand_delete")
        self.db.commit()

        logger.info(f"Brand {brand.id} deleted by user {self.current_user_id}")
        return brand.id

    def _find_or_404(self, brand_id: str) -> Brand:
        brand = self.repository.get_by_id(brand_id)
        if brand is None:
            raise NotFoundException(self.localizer[ErrorMessage.BRAND_NOT_FOUND])
        return brand

    def _ensure_name_available(self, name: str, exclude_id: Optional[str] = None) -> None:
        query = self.db.query(Brand).filter(
            Brand.is_deleted.is_(False),
            func.lower(Brand.name) == name.lower(),
        )
        if exclude_id is not None:
            query = query.filter(Brand.id != exclude_id)
        if query.first() is not None:
            raise ConflictException(self.localizer.format("Brand {0} already exists.", name))

    def _audit(self, brand: Brand, action: str) -> None:
        if settings.audit_logging_enabled:
            AuditLog.log_brand_change(self.db, self.current_user_id, action, brand.id, brand.name)
