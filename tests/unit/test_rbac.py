"""
Unit tests for RBAC (Role-Based Access Control).

Tests for:
- Permission registry
- Permission checking through role claims
"""

import pytest

from webapi.core.authorization import (
    ADMIN_ROLE,
    BASIC_ROLE,
    CLAIM_PERMISSION,
    Action,
    Permissions,
    Resource,
    is_default_role,
    permission_name,
)
from webapi.core.rbac import PermissionChecker
from webapi.models.role_claim import RoleClaim
from webapi.models.user_role import UserRole


# ==================== PERMISSION REGISTRY TESTS ====================

@pytest.mark.unit
class TestPermissionRegistry:
    """Test the static permission registry."""

    def test_permission_name_format(self):
        """Test permission strings follow Permissions.{Resource}.{Action}."""
        assert permission_name(Resource.BRANDS, Action.SEARCH) == "Permissions.Brands.Search"

    def test_default_roles(self):
        """Test only Admin and Basic are default roles."""
        assert is_default_role(ADMIN_ROLE)
        assert is_default_role(BASIC_ROLE)
        assert not is_default_role("Editor")
        assert not is_default_role("admin")

    def test_admin_required_permissions(self):
        """Test the permissions Admin can never lose."""
        assert Permissions.ADMIN_REQUIRED == (
            "Permissions.Roles.View",
            "Permissions.RoleClaims.View",
            "Permissions.RoleClaims.Edit",
        )

    def test_admin_permissions_include_required(self):
        """Test the seeded Admin permissions satisfy the self-protection rule."""
        admin_names = {p.name for p in Permissions.admin()}

        assert set(Permissions.ADMIN_REQUIRED) <= admin_names

    def test_root_permissions_not_granted_to_admin(self):
        """Test root-only permissions are excluded from the Admin set."""
        assert all(not p.is_root for p in Permissions.admin())
        assert "Permissions.AuditLogs.View" in Permissions.names()

    def test_basic_permissions(self):
        """Test the Basic role can browse the catalog."""
        basic_names = {p.name for p in Permissions.basic()}

        assert "Permissions.Brands.Search" in basic_names
        assert "Permissions.Roles.View" not in basic_names


# ==================== PERMISSION CHECKER TESTS ====================

@pytest.mark.unit
@pytest.mark.database
class TestPermissionChecker:
    """Test permission checking logic."""

    def test_get_user_permissions_empty(self, db_session, test_user):
        """Test getting permissions for user with no roles."""
        permissions = PermissionChecker.get_user_permissions(test_user.id, db_session)

        assert permissions == set()

    def test_get_user_permissions_with_role(self, db_session, basic_user):
        """Test getting permissions for user through role assignment."""
        permissions = PermissionChecker.get_user_permissions(basic_user.id, db_session)

        assert permissions == {p.name for p in Permissions.basic()}

    def test_permissions_union_over_roles(self, db_session, basic_user, custom_role):
        """Test permissions from every assigned role are combined."""
        db_session.add(RoleClaim(
            role_id=custom_role.id, claim_type=CLAIM_PERMISSION, claim_value="Permissions.Brands.Create"
        ))
        db_session.add(UserRole(user_id=basic_user.id, role_id=custom_role.id))
        db_session.commit()

        permissions = PermissionChecker.get_user_permissions(basic_user.id, db_session)

        assert "Permissions.Brands.Create" in permissions
        assert "Permissions.Brands.Search" in permissions

    def test_other_claim_types_are_ignored(self, db_session, test_user, custom_role):
        """Test only permission claims grant access."""
        db_session.add(RoleClaim(
            role_id=custom_role.id, claim_type="department", claim_value="Permissions.Brands.Create"
        ))
        db_session.add(UserRole(user_id=test_user.id, role_id=custom_role.id))
        db_session.commit()

        assert PermissionChecker.get_user_permissions(test_user.id, db_session) == set()

    def test_has_permission(self, db_session, admin_user):
        """Test has_permission for granted and missing permissions."""
        assert PermissionChecker.has_permission(admin_user.id, "Permissions.Roles.Delete", db_session) is True
        assert PermissionChecker.has_permission(admin_user.id, "Permissions.AuditLogs.View", db_session) is False

