"""
Role management: CRUD on roles and synchronisation of permission claims.

Business rules enforced here:
- default roles (``DEFAULT_ROLES``) are never renamed or deleted;
- a role held by any user cannot be deleted;
- only members of the Admin role may change the Admin role's permissions,
  and the Admin role always keeps the permissions needed to manage roles.
"""

import logging
from typing import List, Optional, Set

from sqlalchemy.orm import Session

from webapi.core.authorization import (
    ADMIN_ROLE,
    CLAIM_PERMISSION,
    Permissions,
    is_default_role,
)
from webapi.core.config import settings
from webapi.core.errors import (
    ConflictException,
    ErrorMessage,
    InternalServerException,
    NotFoundException,
)
from webapi.core.localization import Localizer
from webapi.models.audit_log import AuditLog
from webapi.models.role import Role
from webapi.repositories.identity_result import IdentityResult
from webapi.repositories.role_store import RoleStore
from webapi.repositories.user_store import UserStore
from webapi.schemas.role import PermissionDto, RoleDto, RoleRequest, UpdatePermissionsRequest

logger = logging.getLogger(__name__)


class RoleService:
    """Role operations performed on behalf of ``current_user_id``."""

    def __init__(
        self,
        db: Session,
        localizer: Localizer,
        current_user_id: Optional[str] = None,
        role_store: Optional[RoleStore] = None,
        user_store: Optional[UserStore] = None,
    ):
        self.db = db
        self.localizer = localizer
        self.current_user_id = current_user_id
        self.role_store = role_store or RoleStore(db)
        self.user_store = user_store or UserStore(db)

    # ==================== READS ====================

    def get_role(self, role_id: str) -> RoleDto:
        role = self._find_role_or_404(role_id)
        return self._to_dto(role)

    def list_roles(self) -> List[RoleDto]:
        return [self._to_dto(role) for role in self.role_store.list_all()]

    def get_count(self) -> int:
        return self.role_store.count()

    def get_role_with_permissions(self, role_id: str) -> RoleDto:
        """Load a role together with its permission claims."""
        role = self._find_role_or_404(role_id)
        dto = self._to_dto(role)
        dto.permissions = [
            PermissionDto(role_id=claim.role_id, claim_type=claim.claim_type, claim_value=claim.claim_value)
            for claim in self.role_store.get_claims(role, CLAIM_PERMISSION)
        ]
        return dto

    def get_user_roles(self, user_id: str) -> List[RoleDto]:
        role_ids = self.user_store.get_role_ids(user_id)
        return [self._to_dto(role) for role in self.role_store.list_by_ids(role_ids)]

    def role_exists(self, role_name: str, exclude_id: Optional[str] = None) -> bool:
        """True if another role (not ``exclude_id``) already uses ``role_name``."""
        existing = self.role_store.find_by_name(role_name)
        return existing is not None and existing.id != exclude_id

    # ==================== WRITES ====================

    def register_role(self, request: RoleRequest) -> str:
        """Create a role when ``request.id`` is empty, otherwise update it."""
        if not request.id:
            role = Role(name=request.name, description=request.description)
            result = self.role_store.create(role)
            if not result.succeeded:
                raise InternalServerException(
                    self.localizer["Register role failed"], self._error_messages(result)
                )

            self._audit_role(role, "role_create")
            logger.info(f"Role '{role.name}' created by user {self.current_user_id}")
            return self.localizer.format("Role {0} Created.", request.name)

        role = self._find_role_or_404(request.id)

        if is_default_role(role.name):
            logger.warning(f"User {self.current_user_id} attempted to modify default role '{role.name}'")
            raise ConflictException(self.localizer.format("Not allowed to modify {0} Role.", role.name))

        role.rename(request.name)
        role.description = request.description
        result = self.role_store.update(role)
        if not result.succeeded:
            raise InternalServerException(
                self.localizer["Update role failed"], self._error_messages(result)
            )

        self._audit_role(role, "role_update")
        logger.info(f"Role {role.id} updated by user {self.current_user_id}")
        return self.localizer.format("Role {0} Updated.", role.name)

    def delete_role(self, role_id: str) -> str:
        role = self._find_role_or_404(role_id)

        if is_default_role(role.name):
            logger.warning(f"User {self.current_user_id} attempted to delete default role '{role.name}'")
            raise ConflictException(self.localizer.format("Not allowed to delete {0} Role.", role.name))

        if self._role_in_use(role):
            raise ConflictException(
                self.localizer.format("Not allowed to delete {0} Role as it is being used.", role.name)
            )

        role_name = role.name
        result = self.role_store.delete(role)
        if not result.succeeded:
            raise InternalServerException(
                self.localizer["Internal server error"], self._error_messages(result)
            )

        if settings.audit_logging_enabled:
            AuditLog.log_role_change(self.db, self.current_user_id, "role_delete", role_id, role_name)
            self.db.commit()
        logger.warning(f"Role '{role_name}' (ID: {role_id}) deleted by user {self.current_user_id}")
        return self.localizer.format("Role {0} Deleted.", role_name)

    def update_permissions(self, request: UpdatePermissionsRequest) -> str:
        """Make the role's permission claims equal to ``request.permissions``.

        Removals are applied before additions, one store write each. The first
        failing write aborts the sync; writes already applied are kept.
        """
        role = self._find_role_or_404(request.role_id)
        requested = {p for p in request.permissions if p and p.strip()}

        if role.name == ADMIN_ROLE:
            self._check_admin_permission_change(requested)

        current = self._permission_set(role)
        to_remove = current - requested
        to_add = requested - current

        for permission in sorted(to_remove):
            self._apply(self.role_store.remove_claim(role, CLAIM_PERMISSION, permission))
        for permission in sorted(to_add):
            self._apply(self.role_store.add_claim(role, CLAIM_PERMISSION, permission))

        if to_add or to_remove:
            if settings.audit_logging_enabled:
                AuditLog.log_permissions_update(
                    self.db, self.current_user_id, role.id, role.name, to_add, to_remove
                )
                self.db.commit()
            logger.info(
                f"Permissions of role '{role.name}' updated by user {self.current_user_id}: "
                f"+{len(to_add)} -{len(to_remove)}"
            )
        return self.localizer["Permissions Updated."]

    # ==================== HELPERS ====================

    def _find_role_or_404(self, role_id: str) -> Role:
        role = self.role_store.find_by_id(role_id)
        if role is None:
            raise NotFoundException(self.localizer[ErrorMessage.ROLE_NOT_FOUND])
        return role

    def _to_dto(self, role: Role) -> RoleDto:
        return RoleDto(
            id=role.id,
            name=role.name,
            description=role.description,
            is_default=is_default_role(role.name),
        )

    def _role_in_use(self, role: Role) -> bool:
        # TODO: replace the per-user scan with a single EXISTS query on user_roles
        for user in self.user_store.list_users():
            if self.user_store.is_in_role(user, role.name):
                return True
        return False

    def _permission_set(self, role: Role) -> Set[str]:
        return {claim.claim_value for claim in self.role_store.get_claims(role, CLAIM_PERMISSION)}

    def _check_admin_permission_change(self, requested: Set[str]) -> None:
        caller = self.user_store.find_by_id(self.current_user_id) if self.current_user_id else None
        if caller is None or not self.user_store.is_in_role(caller, ADMIN_ROLE):
            logger.warning(f"User {self.current_user_id} attempted to modify Admin permissions")
            raise ConflictException(self.localizer["Not allowed to modify Permissions for this Role."])

        if any(required not in requested for required in Permissions.ADMIN_REQUIRED):
            raise ConflictException(
                self.localizer.format(
                    "Not allowed to deselect {0} or {1} or {2} for this Role.",
                    *Permissions.ADMIN_REQUIRED,
                )
            )

    def _apply(self, result: IdentityResult) -> None:
        if not result.succeeded:
            raise InternalServerException(
                self.localizer["Update permissions failed."], self._error_messages(result)
            )

    def _error_messages(self, result: IdentityResult) -> List[str]:
        return [self.localizer.format(error.description, *error.args) for error in result.errors]

    def _audit_role(self, role: Role, action: str) -> None:
        if settings.audit_logging_enabled:
            AuditLog.log_role_change(self.db, self.current_user_id, action, role.id, role.name)
            self.db.commit()
