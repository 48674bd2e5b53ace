"""
Unit tests for the role and user stores.

Tests for:
- Role name validation and uniqueness
- Claim writes and reads
- Role deletion clean-up
- Role membership lookups
"""

import pytest

from webapi.core.authorization import BASIC_ROLE, CLAIM_PERMISSION
from webapi.models.role import Role
from webapi.models.role_claim import RoleClaim
from webapi.models.user_role import UserRole
from webapi.repositories.role_store import RoleStore
from webapi.repositories.user_store import UserStore


# ==================== STORE TESTS ====================

@pytest.mark.unit
@pytest.mark.database
class TestRoleStore:
    """Test role store writes and results."""

    def test_create_blank_name_fails(self, db_session):
        """Test a blank role name is rejected without raising."""
        result = RoleStore(db_session).create(Role(name="   "))

        assert result.succeeded is False
        assert result.errors[0].code == "InvalidRoleName"

    def test_create_duplicate_name_fails(self, db_session, custom_role):
        """Test names are unique regardless of case."""
        result = RoleStore(db_session).create(Role(name="editor"))

        assert result.succeeded is False
        assert result.errors[0].code == "DuplicateRoleName"
        assert db_session.query(Role).count() == 1

    def test_add_and_remove_claim(self, db_session, custom_role):
        """Test claim writes commit individually."""
        store = RoleStore(db_session)

        assert store.add_claim(custom_role, CLAIM_PERMISSION, "Permissions.Brands.View").succeeded
        assert [c.claim_value for c in store.get_claims(custom_role, CLAIM_PERMISSION)] == [
            "Permissions.Brands.View"
        ]

        assert store.remove_claim(custom_role, CLAIM_PERMISSION, "Permissions.Brands.View").succeeded
        assert store.get_claims(custom_role) == []

    def test_delete_removes_claims_and_assignments(self, db_session, custom_role, test_user):
        """Test deleting a role cleans up its claims and user assignments."""
        role_id = custom_role.id
        db_session.add(RoleClaim(role_id=role_id, claim_type=CLAIM_PERMISSION, claim_value="Permissions.Brands.View"))
        db_session.add(UserRole(user_id=test_user.id, role_id=role_id))
        db_session.commit()

        assert RoleStore(db_session).delete(custom_role).succeeded

        assert db_session.query(RoleClaim).filter(RoleClaim.role_id == role_id).count() == 0
        assert db_session.query(UserRole).filter(UserRole.role_id == role_id).count() == 0
        assert UserStore(db_session).get_role_ids(test_user.id) == []

    def test_get_claims_skips_valueless_claims(self, db_session, custom_role):
        """Test claims stored without a value are not returned."""
        db_session.add(RoleClaim(role_id=custom_role.id, claim_type=CLAIM_PERMISSION, claim_value=None))
        db_session.commit()
        store = RoleStore(db_session)

        assert store.get_claims(custom_role, CLAIM_PERMISSION) == []
        assert store.get_claims(custom_role) == []


@pytest.mark.unit
@pytest.mark.database
class TestUserStore:
    """Test user store lookups."""

    def test_is_in_role_ignores_case(self, db_session, admin_user):
        """Test role membership matches on the normalized name."""
        store = UserStore(db_session)

        assert store.is_in_role(admin_user, "admin") is True
        assert store.is_in_role(admin_user, BASIC_ROLE) is False
