"""
Permission checks over role claims.

A user's permissions are the union of the ``permission`` claims of every
role assigned to them.
"""

from typing import Set

from fastapi import Depends
from sqlalchemy.orm import Session
import logging

from webapi.core.authorization import CLAIM_PERMISSION, permission_name
from webapi.core.database import get_db
from webapi.core.errors import ErrorMessage, ForbiddenException
from webapi.middleware.auth_middleware import get_current_user_or_401
from webapi.models.role_claim import RoleClaim
from webapi.models.user import User
from webapi.models.user_role import UserRole

logger = logging.getLogger(__name__)


class PermissionChecker:
    """
    Utility class for checking user permissions.
    """

    @staticmethod
    def get_user_permissions(user_id: str, db: Session) -> Set[str]:
        """
        Get all permissions for a user (from all their roles).

        Args:
            user_id: The user's ID
            db: Database session

        Returns:
            Set of permission strings (``Permissions.{Resource}.{Action}``)
        """
        rows = db.query(RoleClaim.claim_value).join(
            UserRole, UserRole.role_id == RoleClaim.role_id
        ).filter(
            UserRole.user_id == user_id,
            RoleClaim.claim_type == CLAIM_PERMISSION,
            RoleClaim.claim_value.isnot(None),
        ).distinct().all()
        return {row.claim_value for row in rows}

    @staticmethod
    def has_permission(user_id: str, permission: str, db: Session) -> bool:
        """Check if a user has a specific permission."""
        result = permission in PermissionChecker.get_user_permissions(user_id, db)

        if result:
            logger.debug(f"User {user_id} has permission {permission}")
        else:
            logger.debug(f"User {user_id} does NOT have permission {permission}")

        return result


def ensure_permission(user_id: str, resource: str, action: str, db: Session) -> None:
    """Raise ``ForbiddenException`` unless the user holds the permission."""
    permission = permission_name(resource, action)
    if not PermissionChecker.has_permission(user_id, permission, db):
        logger.warning(f"Permission denied: User {user_id} attempted {action} on {resource}")
        raise ForbiddenException(ErrorMessage.PERMISSION_DENIED, [f"{permission} required"])


# ==================== FASTAPI DEPENDENCIES ====================

def require_permission(resource: str, action: str):
    """
    FastAPI dependency factory for requiring a specific permission.

    Usage:
        @router.get("/roles")
        async def list_roles(current_user: User = Depends(require_permission(Resource.ROLES, Action.VIEW))):
            ...

    Args:
        resource: The resource name
        action: The action name

    Returns:
        Dependency function resolving to the current user
    """
    def permission_dependency(
        current_user: User = Depends(get_current_user_or_401),
        db: Session = Depends(get_db)
    ) -> User:
        ensure_permission(current_user.id, resource, action, db)
        return current_user

    return permission_dependency
