"""
Persistence collaborators used by the services.
"""

from .identity_result import IdentityError, IdentityResult
from .read_repository import ReadRepository
from .role_store import RoleStore
from .user_store import UserStore

__all__ = ["IdentityError", "IdentityResult", "ReadRepository", "RoleStore", "UserStore"]
