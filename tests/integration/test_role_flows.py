"""
Integration tests for role endpoints.

Tests complete end-to-end role workflows including:
- Authentication and permission enforcement
- Role listing, creation, update and deletion
- Permission synchronisation
- Localized error messages
"""

import pytest
from fastapi.testclient import TestClient

from webapi.core.authorization import ADMIN_ROLE, BASIC_ROLE, CLAIM_PERMISSION, Permissions
from webapi.models.role import Role
from webapi.models.role_claim import RoleClaim
from webapi.models.user_role import UserRole


# ==================== ACCESS CONTROL ====================

@pytest.mark.integration
class TestRoleAccessControl:
    """Test role endpoints require authentication and permissions."""

    def test_requires_authentication(self, client: TestClient):
        """Test requests without a token are rejected."""
        response = client.get("/api/v1/roles")

        assert response.status_code == 401
        assert response.json()["detail"]["error_code"] == "AUTH_001"

    def test_invalid_token(self, client: TestClient, invalid_token):
        """Test requests with a bad token are rejected."""
        response = client.get("/api/v1/roles", headers={"Authorization": f"Bearer {invalid_token}"})

        assert response.status_code == 401
        assert response.json()["detail"]["error_code"] == "AUTH_002"

    def test_requires_permission(self, basic_authenticated_client: TestClient):
        """Test Basic users cannot manage roles."""
        response = basic_authenticated_client.get("/api/v1/roles")

        assert response.status_code == 403
        detail = response.json()["detail"]
        assert detail["error_code"] == "AUTH_003"
        assert detail["details"] == ["Permissions.Roles.View required"]

    def test_role_update_requires_update_permission(
        self, client: TestClient, db_session, test_user, custom_role, create_authenticated_client
    ):
        """Test a caller allowed to create roles cannot update them."""
        db_session.add(RoleClaim(
            role_id=custom_role.id, claim_type=CLAIM_PERMISSION, claim_value="Permissions.Roles.Create"
        ))
        db_session.add(UserRole(user_id=test_user.id, role_id=custom_role.id))
        db_session.commit()
        creator = create_authenticated_client(client, test_user)

        response = creator.post("/api/v1/roles", json={"name": "Publisher"})
        assert response.status_code == 200

        response = creator.post("/api/v1/roles", json={"id": custom_role.id, "name": "Curator"})
        assert response.status_code == 403
        assert response.json()["detail"]["details"] == ["Permissions.Roles.Update required"]

    def test_role_create_requires_create_permission(self, basic_authenticated_client: TestClient):
        """Test Basic users cannot create roles."""
        response = basic_authenticated_client.post("/api/v1/roles", json={"name": "Publisher"})

        assert response.status_code == 403
        assert response.json()["detail"]["details"] == ["Permissions.Roles.Create required"]


# ==================== ROLE MANAGEMENT ====================

@pytest.mark.integration
class TestRoleManagement:
    """Test role management endpoints."""

    def test_list_roles(self, admin_authenticated_client: TestClient):
        """Test listing roles flags default roles."""
        response = admin_authenticated_client.get("/api/v1/roles")

        assert response.status_code == 200
        data = response.json()
        assert [role["name"] for role in data] == [ADMIN_ROLE, BASIC_ROLE]
        assert all(role["is_default"] for role in data)

    def test_create_update_delete_role(self, admin_authenticated_client: TestClient, db_session):
        """Test the full life cycle of a custom role."""
        response = admin_authenticated_client.post(
            "/api/v1/roles", json={"name": "Editor", "description": "Catalog editor"}
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Role Editor Created."

        role_id = db_session.query(Role).filter(Role.name == "Editor").one().id

        response = admin_authenticated_client.post(
            "/api/v1/roles", json={"id": role_id, "name": "Curator"}
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Role Curator Updated."

        response = admin_authenticated_client.get(f"/api/v1/roles/{role_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Curator"

        response = admin_authenticated_client.delete(f"/api/v1/roles/{role_id}")
        assert response.status_code == 200
        assert response.json()["message"] == "Role Curator Deleted."

        response = admin_authenticated_client.get(f"/api/v1/roles/{role_id}")
        assert response.status_code == 404
        assert response.json()["detail"]["message"] == "Role Not Found"

    def test_create_duplicate_role(self, admin_authenticated_client: TestClient):
        """Test creating a duplicate role surfaces the store error."""
        response = admin_authenticated_client.post("/api/v1/roles", json={"name": "basic"})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["message"] == "Register role failed"
        assert detail["details"] == ["Role name 'basic' is already taken."]

    def test_delete_default_role(self, admin_authenticated_client: TestClient, default_roles):
        """Test default roles cannot be deleted."""
        response = admin_authenticated_client.delete(f"/api/v1/roles/{default_roles[BASIC_ROLE].id}")

        assert response.status_code == 409
        assert response.json()["detail"]["message"] == "Not allowed to delete Basic Role."

    def test_delete_role_in_use(self, admin_authenticated_client: TestClient, db_session, custom_role, basic_user):
        """Test roles held by users cannot be deleted."""
        db_session.add(UserRole(user_id=basic_user.id, role_id=custom_role.id))
        db_session.commit()

        response = admin_authenticated_client.delete(f"/api/v1/roles/{custom_role.id}")

        assert response.status_code == 409
        assert response.json()["detail"]["message"] == "Not allowed to delete Editor Role as it is being used."

    def test_localized_error(self, admin_authenticated_client: TestClient):
        """Test error messages follow Accept-Language."""
        response = admin_authenticated_client.get(
            "/api/v1/roles/missing", headers={"Accept-Language": "fr-FR,fr;q=0.9"}
        )

        assert response.status_code == 404
        assert response.json()["detail"]["message"] == "Rôle introuvable"

    def test_get_user_roles(self, admin_authenticated_client: TestClient, admin_user):
        """Test listing the roles of a user."""
        response = admin_authenticated_client.get(f"/api/v1/users/{admin_user.id}/roles")

        assert response.status_code == 200
        assert [role["name"] for role in response.json()] == [ADMIN_ROLE]


# ==================== PERMISSIONS ====================

@pytest.mark.integration
class TestRolePermissions:
    """Test role permission endpoints."""

    def test_get_role_permissions(self, admin_authenticated_client: TestClient, default_roles):
        """Test reading a role with its permissions."""
        basic = default_roles[BASIC_ROLE]

        response = admin_authenticated_client.get(f"/api/v1/roles/{basic.id}/permissions")

        assert response.status_code == 200
        values = {p["claim_value"] for p in response.json()["permissions"]}
        assert values == {p.name for p in Permissions.basic()}

    def test_update_role_permissions(self, admin_authenticated_client: TestClient, default_roles):
        """Test replacing a role's permissions."""
        basic = default_roles[BASIC_ROLE]
        requested = ["Permissions.Brands.View", "Permissions.Brands.Create"]

        response = admin_authenticated_client.put(
            f"/api/v1/roles/{basic.id}/permissions",
            json={"role_id": basic.id, "permissions": requested},
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Permissions Updated."

        response = admin_authenticated_client.get(f"/api/v1/roles/{basic.id}/permissions")
        assert {p["claim_value"] for p in response.json()["permissions"]} == set(requested)

    def test_update_permissions_route_mismatch(self, admin_authenticated_client: TestClient, default_roles):
        """Test the route id must match the body."""
        response = admin_authenticated_client.put(
            f"/api/v1/roles/{default_roles[BASIC_ROLE].id}/permissions",
            json={"role_id": default_roles[ADMIN_ROLE].id, "permissions": []},
        )

        assert response.status_code == 400

    def test_admin_cannot_drop_required_permissions(self, admin_authenticated_client: TestClient, default_roles):
        """Test the Admin role keeps its role-management permissions."""
        admin_role = default_roles[ADMIN_ROLE]

        response = admin_authenticated_client.put(
            f"/api/v1/roles/{admin_role.id}/permissions",
            json={"role_id": admin_role.id, "permissions": ["Permissions.Brands.View"]},
        )

        assert response.status_code == 409
        assert response.json()["detail"]["message"].startswith("Not allowed to deselect")
