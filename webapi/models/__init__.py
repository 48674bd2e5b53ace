"""
SQLAlchemy database models.
"""

from webapi.models.base import Base
from webapi.models.user import User
from webapi.models.role import Role
from webapi.models.role_claim import RoleClaim
from webapi.models.user_role import UserRole
from webapi.models.brand import Brand
from webapi.models.audit_log import AuditLog

__all__ = [
    "Base", "User", "Role", "RoleClaim", "UserRole", "Brand", "AuditLog"
]
