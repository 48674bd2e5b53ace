"""
Catalog brand endpoints.
"""

from fastapi import APIRouter, Depends, status

from webapi.core.authorization import Action, Resource
from webapi.core.dependencies import get_brand_service
from webapi.core.rbac import require_permission
from webapi.schemas.brand import BrandDto, CreateBrandRequest, SearchBrandsRequest, UpdateBrandRequest
from webapi.schemas.pagination import PaginationResponse
from webapi.services.brand_service import BrandService

router = APIRouter()


@router.post("/search", response_model=PaginationResponse[BrandDto],
             dependencies=[Depends(require_permission(Resource.BRANDS, Action.SEARCH))])
async def search_brands(request: SearchBrandsRequest, service: BrandService = Depends(get_brand_service)):
    """Search brands using available filters."""
    return service.search(request)


@router.get("/{brand_id}", response_model=BrandDto,
            dependencies=[Depends(require_permission(Resource.BRANDS, Action.VIEW))])
async def get_brand(brand_id: str, service: BrandService = Depends(get_brand_service)):
    """Get brand details."""
    return service.get(brand_id)


@router.post("", status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_permission(Resource.BRANDS, Action.CREATE))])
async def create_brand(request: CreateBrandRequest, service: BrandService = Depends(get_brand_service)):
    """Create a new brand."""
    return {"id": service.create(request)}


@router.put("/{brand_id}",
            dependencies=[Depends(require_permission(Resource.BRANDS, Action.UPDATE))])
async def update_brand(
    brand_id: str,
    request: UpdateBrandRequest,
    service: BrandService = Depends(get_brand_service),
):
    """Update a brand."""
    return {"id": service.update(brand_id, request)}


@router.delete("/{brand_id}",
               dependencies=[Depends(require_permission(Resource.BRANDS, Action.DELETE))])
async def delete_brand(brand_id: str, service: BrandService = Depends(get_brand_service)):
    """Delete a brand."""
    return {"id": service.delete(brand_id)}
