"""
Authentication middleware for JWT token validation and user context management.

The middleware only verifies the bearer token and stores its payload on the
request; the user record is loaded by the ``get_current_user_or_401``
dependency on the request's own database session.
"""

import logging
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from webapi.core.database import get_db
from webapi.core.errors import ErrorCode, ErrorMessage, UnauthorizedException
from webapi.core.token import TokenManager
from webapi.models.user import User
from webapi.repositories.user_store import UserStore

logger = logging.getLogger(__name__)

# Define paths that don't require authentication
EXCLUDED_AUTH_PATHS = [
    "/health",  # Root health endpoint
    "/api/v1/health",  # API health endpoint
    "/api/v1/health/detailed",
    "/api/v1/health/ready",
    "/api/v1/health/live",
    "/docs",
    "/redoc",
    "/openapi.json",
]


def extract_bearer_token(request: Request) -> Optional[str]:
    """Return the bearer token from the Authorization header, if any."""
    authorization = request.headers.get("authorization")
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthMiddleware(BaseHTTPMiddleware):
    """
    JWT Authentication middleware for FastAPI.

    Features:
    - Bearer token validation on every non-excluded path
    - Token payload stored on ``request.state.token_data``
    - Configurable excluded paths
    """

    def __init__(self, app, exclude_paths: Optional[list] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or EXCLUDED_AUTH_PATHS

    async def dispatch(self, request: Request, call_next) -> Response:
        logger.debug(f"AuthMiddleware processing: {request.url.path}")

        if self._should_skip_auth(request):
            return await call_next(request)

        token = extract_bearer_token(request)
        if not token:
            return self._unauthorized_response(ErrorCode.AUTHENTICATION_REQUIRED, ErrorMessage.AUTHENTICATION_REQUIRED)

        token_data = TokenManager.verify_token(token)
        if not token_data:
            return self._unauthorized_response(ErrorCode.INVALID_TOKEN, ErrorMessage.INVALID_TOKEN)

        request.state.token_data = token_data
        return await call_next(request)

    def _should_skip_auth(self, request: Request) -> bool:
        """Check if the request should skip authentication."""
        if request.method == "OPTIONS":
            return True
        path = request.url.path
        return path in self.exclude_paths or path == "/"

    def _unauthorized_response(self, error_code: ErrorCode, message: str) -> JSONResponse:
        """Return standardized unauthorized response."""
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": {"error_code": error_code.value, "message": message}},
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_token_data(request: Request) -> Optional[dict]:
    """
    Get the verified token payload for the request.

    Falls back to verifying the Authorization header directly when the
    middleware is disabled.
    """
    token_data = getattr(request.state, "token_data", None)
    if token_data is None:
        token = extract_bearer_token(request)
        if token:
            token_data = TokenManager.verify_token(token)
            request.state.token_data = token_data
    return token_data


def get_current_user_id(request: Request) -> Optional[str]:
    """Id of the authenticated caller, or None."""
    token_data = get_token_data(request)
    return token_data.get("sub") if token_data else None


def get_current_user_or_401(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Get current authenticated, active user or raise 401 error.
    """
    user_id = get_current_user_id(request)
    if not user_id:
        raise UnauthorizedException()

    user = UserStore(db).find_by_id(user_id)
    if user is None or not user.is_active:
        logger.warning(f"Token subject {user_id} is unknown or inactive")
        raise UnauthorizedException(ErrorMessage.INVALID_TOKEN)
    return user
