"""
Pytest configuration and fixtures for testing.

This module provides common fixtures for:
- Database session management (in-memory SQLite)
- Default roles, users and role assignments
- Test client for API testing
- Authenticated clients
"""

import os

# Point the application at SQLite before any webapi module reads the settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import webapi.models  # noqa: F401  registers every table on Base.metadata
from webapi.core.authorization import ADMIN_ROLE, BASIC_ROLE, CLAIM_PERMISSION, Permissions
from webapi.core.database import Base, get_db
from webapi.core.localization import Localizer


# ==================== DATABASE FIXTURES ====================

@pytest.fixture(scope="session")
def test_db_engine():
    """Create an in-memory SQLite engine shared by every connection."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_db_engine):
    """Create a fresh database session for each test."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine,
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        # Clear all tables for next test
        Base.metadata.drop_all(bind=test_db_engine)
        Base.metadata.create_all(bind=test_db_engine)


@pytest.fixture(scope="function")
def override_get_db(db_session):
    """Override the get_db dependency to use test database."""
    def _override_get_db() -> Generator:
        yield db_session
    return _override_get_db


# ==================== API CLIENT FIXTURES ====================

@pytest.fixture(scope="function")
def client(override_get_db, db_session):
    """Create a test client wired like the main application."""
    from fastapi import FastAPI
    from webapi.core.config import settings
    from webapi.core.errors import CustomException, custom_exception_handler
    from webapi.middleware import AuthMiddleware
    from webapi.routers import include_routers

    test_app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    test_app.add_middleware(AuthMiddleware)
    test_app.add_exception_handler(CustomException, custom_exception_handler)

    # Include routers (same as main app)
    include_routers(test_app)

    # Override dependencies
    test_app.dependency_overrides[get_db] = override_get_db

    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def create_authenticated_client():
    """Factory fixture to authenticate a client as the given user."""
    def _create_client(client, user):
        from webapi.core.token import TokenManager

        token_data = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
        }
        access_token = TokenManager.create_access_token(token_data)
        client.headers["Authorization"] = f"Bearer {access_token}"
        return client

    return _create_client


@pytest.fixture(scope="function")
def admin_authenticated_client(client, admin_user, create_authenticated_client):
    """Create a test client authenticated as a member of the Admin role."""
    yield create_authenticated_client(client, admin_user)
    client.headers.pop("Authorization", None)


@pytest.fixture(scope="function")
def basic_authenticated_client(client, basic_user, create_authenticated_client):
    """Create a test client authenticated as a member of the Basic role."""
    yield create_authenticated_client(client, basic_user)
    client.headers.pop("Authorization", None)


# ==================== ROLE FIXTURES ====================

def _create_role(db_session, name, description, permissions):
    from webapi.models.role import Role
    from webapi.models.role_claim import RoleClaim

    role = Role(name=name, description=description)
    db_session.add(role)
    db_session.flush()
    for permission in permissions:
        db_session.add(RoleClaim(role_id=role.id, claim_type=CLAIM_PERMISSION, claim_value=permission.name))
    db_session.commit()
    db_session.refresh(role)
    return role


@pytest.fixture(scope="function")
def default_roles(db_session):
    """Seed the Admin and Basic roles with their default permissions."""
    admin_role = _create_role(db_session, ADMIN_ROLE, "Administrator role", Permissions.admin())
    basic_role = _create_role(db_session, BASIC_ROLE, "Basic role", Permissions.basic())
    return {ADMIN_ROLE: admin_role, BASIC_ROLE: basic_role}


@pytest.fixture(scope="function")
def custom_role(db_session):
    """A non-default role without permissions."""
    from webapi.models.role import Role

    role = Role(name="Editor", description="Catalog editor")
    db_session.add(role)
    db_session.commit()
    db_session.refresh(role)
    return role


# ==================== USER FIXTURES ====================

def _create_user(db_session, username, role=None):
    from webapi.models.user import User
    from webapi.models.user_role import UserRole

    user = User(username=username, email=f"{username}@example.com", is_active=True)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)

    if role is not None:
        db_session.add(UserRole(user_id=user.id, role_id=role.id))
        db_session.commit()
    return user


@pytest.fixture(scope="function")
def test_user(db_session):
    """Create a user without roles."""
    yield _create_user(db_session, "testuser")


@pytest.fixture(scope="function")
def admin_user(db_session, default_roles):
    """Create a user holding the Admin role."""
    yield _create_user(db_session, "adminuser", default_roles[ADMIN_ROLE])


@pytest.fixture(scope="function")
def basic_user(db_session, default_roles):
    """Create a user holding the Basic role."""
    yield _create_user(db_session, "basicuser", default_roles[BASIC_ROLE])


# ==================== HELPER FIXTURES ====================

@pytest.fixture(scope="function")
def localizer():
    """English localizer."""
    return Localizer("en")


@pytest.fixture(scope="function")
def invalid_token():
    """Provide an invalid JWT token for testing."""
    return "invalid.jwt.token"
