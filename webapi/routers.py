"""
Router registration utilities for FastAPI application.

This module provides a centralized way to register all API routers
across the application, used by both the main app and test fixtures.
"""

from fastapi import FastAPI

from webapi.api.v1.health import router as health_router
from webapi.api.v1.brands import router as brands_router
from webapi.api.v1.roles import router as roles_router
from webapi.api.v1.users import router as users_router


def include_routers(app: FastAPI):
    """
    Include all API routers in the FastAPI application.
    """
    app.include_router(health_router, prefix="/api/v1", tags=["health"])
    app.include_router(brands_router, prefix="/api/v1/brands", tags=["brands"])
    app.include_router(roles_router, prefix="/api/v1/roles", tags=["roles"])
    app.include_router(users_router, prefix="/api/v1/users", tags=["users"])
