"""
Dependencies for FastAPI dependency injection.

Services are built per request from the request's database session, its
localizer and the authenticated caller:

- ``get_role_service`` for role and permission endpoints
- ``get_brand_service`` for catalog brand endpoints

For authentication use ``webapi.middleware.get_current_user_or_401`` and for
authorization ``webapi.core.rbac.require_permission``.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from webapi.core.database import get_db
from webapi.core.localization import Localizer, get_localizer
from webapi.middleware.auth_middleware import get_current_user_id
from webapi.services.brand_service import BrandService
from webapi.services.role_service import RoleService


def get_role_service(
    request: Request,
    db: Session = Depends(get_db),
    localizer: Localizer = Depends(get_localizer),
) -> RoleService:
    """Role service acting on behalf of the caller."""
    return RoleService(db, localizer, current_user_id=get_current_user_id(request))


def get_brand_service(
    request: Request,
    db: Session = Depends(get_db),
    localizer: Localizer = Depends(get_localizer),
) -> BrandService:
    """Brand service acting on behalf of the caller."""
    return BrandService(db, localizer, current_user_id=get_current_user_id(request))
