"""
Role and role claim persistence.

Every write commits on its own and reports failure through an
``IdentityResult`` instead of raising, so callers decide how a rejected
write surfaces to the client.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from webapi.models.role import Role, normalize_role_name
from webapi.models.role_claim import RoleClaim
from webapi.models.user_role import UserRole
from webapi.repositories.identity_result import (
    IdentityResult,
    database_error,
    duplicate_role_name,
    invalid_role_name,
)

logger = logging.getLogger(__name__)


class RoleStore:
    """Role manager over the ``roles`` and ``role_claims`` tables."""

    def __init__(self, db: Session):
        self.db = db

    # ==================== READS ====================

    def find_by_id(self, role_id: str) -> Optional[Role]:
        return self.db.query(Role).filter(Role.id == role_id).first()

    def find_by_name(self, name: str) -> Optional[Role]:
        if not name:
            return None
        return self.db.query(Role).filter(Role.normalized_name == normalize_role_name(name)).first()

    def list_all(self) -> List[Role]:
        return self.db.query(Role).order_by(Role.name).all()

    def list_by_ids(self, role_ids: Iterable[str]) -> List[Role]:
        role_ids = list(role_ids)
        if not role_ids:
            return []
        return self.db.query(Role).filter(Role.id.in_(role_ids)).order_by(Role.name).all()

    def count(self) -> int:
        return self.db.query(Role).count()

    def get_claims(self, role: Role, claim_type: Optional[str] = None) -> List[RoleClaim]:
        query = self.db.query(RoleClaim).filter(RoleClaim.role_id == role.id)
        if claim_type is not None:
            query = query.filter(RoleClaim.claim_type == claim_type)
        query = query.filter(RoleClaim.claim_value.isnot(None))
        return query.order_by(RoleClaim.id).all()

    # ==================== WRITES ====================

    def create(self, role: Role) -> IdentityResult:
        result = self._validate(role)
        if not result.succeeded:
            return result
        self.db.add(role)
        return self._commit(f"create role '{role.name}'")

    def update(self, role: Role) -> IdentityResult:
        result = self._validate(role)
        if not result.succeeded:
            # Keep the rejected edit out of later commits on this session
            self.db.refresh(role)
            return result
        return self._commit(f"update role {role.id}")

    def delete(self, role: Role) -> IdentityResult:
        self.db.query(RoleClaim).filter(RoleClaim.role_id == role.id).delete(synchronize_session=False)
        self.db.query(UserRole).filter(UserRole.role_id == role.id).delete(synchronize_session=False)
        self.db.delete(role)
        return self._commit(f"delete role {role.id}")

    def add_claim(self, role: Role, claim_type: str, claim_value: str) -> IdentityResult:
        self.db.add(RoleClaim(role_id=role.id, claim_type=claim_type, claim_value=claim_value))
        return self._commit(f"add claim '{claim_value}' to role {role.id}")

    def remove_claim(self, role: Role, claim_type: str, claim_value: str) -> IdentityResult:
        self.db.query(RoleClaim).filter(
            RoleClaim.role_id == role.id,
            RoleClaim.claim_type == claim_type,
            RoleClaim.claim_value == claim_value,
        ).delete(synchronize_session=False)
        return self._commit(f"remove claim '{claim_value}' from role {role.id}")

    # ==================== HELPERS ====================

    def _validate(self, role: Role) -> IdentityResult:
        """Role name must be non-blank and unique (case-insensitive)."""
        if not role.name or not role.name.strip():
            return IdentityResult.failed(invalid_role_name(role.name))

        role.normalized_name = normalize_role_name(role.name)
        with self.db.no_autoflush:
            existing = self.db.query(Role).filter(
                Role.normalized_name == role.normalized_name
            ).first()
        if existing is not None and existing.id != role.id:
            return IdentityResult.failed(duplicate_role_name(role.name))
        return IdentityResult.success()

    def _commit(self, operation: str) -> IdentityResult:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {operation}: {e}")
            return IdentityResult.failed(database_error(str(e)))
        return IdentityResult.success()
