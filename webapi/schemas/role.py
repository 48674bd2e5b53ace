"""
Role and permission schemas.
"""

from typing import List, Optional
from pydantic import ConfigDict, Field

from webapi.schemas.base import BaseSchema


class PermissionDto(BaseSchema):
    """A permission claim attached to a role."""
    role_id: str
    claim_type: str
    claim_value: str


class RoleDto(BaseSchema):
    """Role as returned to clients, flagged when it is a protected default role."""
    id: str
    name: str
    description: Optional[str] = None
    is_default: bool = False
    permissions: Optional[List[PermissionDto]] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "6f1c7c1e-8a4e-4cd7-9f0b-2a1f4c8e9d10",
                "name": "Admin",
                "description": "Administrator role with full access",
                "is_default": True,
                "permissions": None,
            }
        },
    )


class RoleRequest(BaseSchema):
    """Create a role (no ``id``) or update an existing one."""
    id: Optional[str] = Field(None, description="Role to update; omit to create")
    name: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = Field(None, max_length=500)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Editor",
                "description": "Can manage the catalog"
            }
        }
    )


class UpdatePermissionsRequest(BaseSchema):
    """The complete set of permissions a role should hold afterwards."""
    role_id: str
    permissions: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "role_id": "6f1c7c1e-8a4e-4cd7-9f0b-2a1f4c8e9d10",
                "permissions": ["Permissions.Brands.View", "Permissions.Brands.Search"]
            }
        }
    )
