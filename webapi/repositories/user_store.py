"""
User lookups and role membership checks.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from webapi.models.role import Role, normalize_role_name
from webapi.models.user import User
from webapi.models.user_role import UserRole


class UserStore:
    """User manager over the ``users`` and ``user_roles`` tables."""

    def __init__(self, db: Session):
        self.db = db

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.username).all()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def is_in_role(self, user: User, role_name: str) -> bool:
        """Check whether ``user`` holds the role named ``role_name``."""
        return self.db.query(UserRole).join(
            Role, Role.id == UserRole.role_id
        ).filter(
            UserRole.user_id == user.id,
            Role.normalized_name == normalize_role_name(role_name),
        ).first() is not None

    def get_role_ids(self, user_id: str) -> List[str]:
        rows = self.db.query(UserRole.role_id).filter(UserRole.user_id == user_id).all()
        return [row.role_id for row in rows]
