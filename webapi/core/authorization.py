"""
Static authorization constants: roles, claim types and the permission registry.

Permission strings have the form ``Permissions.{Resource}.{Action}`` and are
stored on roles as claims of type ``CLAIM_PERMISSION``.
"""

from dataclasses import dataclass
from typing import FrozenSet, Tuple


CLAIM_PERMISSION = "permission"

ADMIN_ROLE = "Admin"
BASIC_ROLE = "Basic"

# Protected, system-defined roles: never renamed or deleted
DEFAULT_ROLES: FrozenSet[str] = frozenset({ADMIN_ROLE, BASIC_ROLE})


def is_default_role(role_name: str) -> bool:
    """Check whether ``role_name`` is one of the protected default roles."""
    return role_name in DEFAULT_ROLES


class Action:
    VIEW = "View"
    SEARCH = "Search"
    CREATE = "Create"
    UPDATE = "Update"
    EDIT = "Edit"
    DELETE = "Delete"


class Resource:
    DASHBOARD = "Dashboard"
    USERS = "Users"
    USER_ROLES = "UserRoles"
    ROLES = "Roles"
    ROLE_CLAIMS = "RoleClaims"
    BRANDS = "Brands"
    AUDIT_LOGS = "AuditLogs"


def permission_name(resource: str, action: str) -> str:
    """Build the permission string stored in role claims."""
    return f"Permissions.{resource}.{action}"


@dataclass(frozen=True)
class Permission:
    """A registered permission.

    ``is_basic`` permissions are granted to the Basic role at seed time;
    ``is_root`` permissions are reserved and never seeded onto tenant roles.
    """

    description: str
    action: str
    resource: str
    is_basic: bool = False
    is_root: bool = False

    @property
    def name(self) -> str:
        return permission_name(self.resource, self.action)


class Permissions:
    """Registry of every permission the API checks."""

    ALL: Tuple[Permission, ...] = (
        Permission("View Dashboard", Action.VIEW, Resource.DASHBOARD, is_basic=True),
        Permission("View Users", Action.VIEW, Resource.USERS),
        Permission("Search Users", Action.SEARCH, Resource.USERS),
        Permission("View UserRoles", Action.VIEW, Resource.USER_ROLES),
        Permission("Update UserRoles", Action.UPDATE, Resource.USER_ROLES),
        Permission("View Roles", Action.VIEW, Resource.ROLES),
        Permission("Create Roles", Action.CREATE, Resource.ROLES),
        Permission("Update Roles", Action.UPDATE, Resource.ROLES),
        Permission("Delete Roles", Action.DELETE, Resource.ROLES),
        Permission("View RoleClaims", Action.VIEW, Resource.ROLE_CLAIMS),
        Permission("Edit RoleClaims", Action.EDIT, Resource.ROLE_CLAIMS),
        Permission("View Brands", Action.VIEW, Resource.BRANDS, is_basic=True),
        Permission("Search Brands", Action.SEARCH, Resource.BRANDS, is_basic=True),
        Permission("Create Brands", Action.CREATE, Resource.BRANDS),
        Permission("Update Brands", Action.UPDATE, Resource.BRANDS),
        Permission("Delete Brands", Action.DELETE, Resource.BRANDS),
        Permission("View Audit Logs", Action.VIEW, Resource.AUDIT_LOGS, is_root=True),
    )

    ROLES_VIEW = permission_name(Resource.ROLES, Action.VIEW)
    ROLE_CLAIMS_VIEW = permission_name(Resource.ROLE_CLAIMS, Action.VIEW)
    ROLE_CLAIMS_EDIT = permission_name(Resource.ROLE_CLAIMS, Action.EDIT)

    # The Admin role may never lose the ability to manage its own permissions
    ADMIN_REQUIRED: Tuple[str, ...] = (ROLES_VIEW, ROLE_CLAIMS_VIEW, ROLE_CLAIMS_EDIT)

    @classmethod
    def admin(cls) -> Tuple[Permission, ...]:
        return tuple(p for p in cls.ALL if not p.is_root)

    @classmethod
    def basic(cls) -> Tuple[Permission, ...]:
        return tuple(p for p in cls.ALL if p.is_basic)

    @classmethod
    def names(cls) -> FrozenSet[str]:
        return frozenset(p.name for p in cls.ALL)
