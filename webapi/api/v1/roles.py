"""
Role and role permission endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from webapi.core.authorization import Action, Resource
from webapi.core.database import get_db
from webapi.core.dependencies import get_role_service
from webapi.core.errors import BadRequestException
from webapi.core.rbac import ensure_permission, require_permission
from webapi.middleware.auth_middleware import get_current_user_or_401
from webapi.models.user import User
from webapi.schemas.base import MessageSchema
from webapi.schemas.role import RoleDto, RoleRequest, UpdatePermissionsRequest
from webapi.services.role_service import RoleService

router = APIRouter()


@router.get("", response_model=List[RoleDto],
            dependencies=[Depends(require_permission(Resource.ROLES, Action.VIEW))])
async def list_roles(service: RoleService = Depends(get_role_service)):
    """Get a list of all roles."""
    return service.list_roles()


@router.get("/{role_id}", response_model=RoleDto,
            dependencies=[Depends(require_permission(Resource.ROLES, Action.VIEW))])
async def get_role(role_id: str, service: RoleService = Depends(get_role_service)):
    """Get role details."""
    return service.get_role(role_id)


@router.get("/{role_id}/permissions", response_model=RoleDto,
            dependencies=[Depends(require_permission(Resource.ROLE_CLAIMS, Action.VIEW))])
async def get_role_permissions(role_id: str, service: RoleService = Depends(get_role_service)):
    """Get role details with its permissions."""
    return service.get_role_with_permissions(role_id)


@router.put("/{role_id}/permissions", response_model=MessageSchema,
            dependencies=[Depends(require_permission(Resource.ROLE_CLAIMS, Action.EDIT))])
async def update_role_permissions(
    role_id: str,
    request: UpdatePermissionsRequest,
    service: RoleService = Depends(get_role_service),
):
    """Replace a role's permissions with the given set."""
    if role_id != request.role_id:
        raise BadRequestException("Role id in the route does not match the request body")
    return MessageSchema(message=service.update_permissions(request))


@router.post("", response_model=MessageSchema, status_code=status.HTTP_200_OK)
async def register_role(
    request: RoleRequest,
    current_user: User = Depends(get_current_user_or_401),
    db: Session = Depends(get_db),
    service: RoleService = Depends(get_role_service),
):
    """Create a role, or update it when the request names an existing id."""
    action = Action.UPDATE if request.id else Action.CREATE
    ensure_permission(current_user.id, Resource.ROLES, action, db)
    return MessageSchema(message=service.register_role(request))


@router.delete("/{role_id}", response_model=MessageSchema,
               dependencies=[Depends(require_permission(Resource.ROLES, Action.DELETE))])
async def delete_role(role_id: str, service: RoleService = Depends(get_role_service)):
    """Delete a role."""
    return MessageSchema(message=service.delete_role(role_id))
