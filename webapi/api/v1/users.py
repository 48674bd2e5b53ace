"""
User endpoints exposed by the identity API.
"""

from typing import List

from fastapi import APIRouter, Depends

from webapi.core.authorization import Action, Resource
from webapi.core.dependencies import get_role_service
from webapi.core.rbac import require_permission
from webapi.schemas.role import RoleDto
from webapi.services.role_service import RoleService

router = APIRouter()


@router.get("/{user_id}/roles", response_model=List[RoleDto],
            dependencies=[Depends(require_permission(Resource.USER_ROLES, Action.VIEW))])
async def get_user_roles(user_id: str, service: RoleService = Depends(get_role_service)):
    """Get the roles assigned to a user."""
    return service.get_user_roles(user_id)
