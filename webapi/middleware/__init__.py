"""
Middleware package for authentication and request processing.
"""

from .auth_middleware import (
    AuthMiddleware,
    EXCLUDED_AUTH_PATHS,
    get_current_user_id,
    get_current_user_or_401,
    get_token_data,
)

from .logging_middleware import RequestResponseLoggingMiddleware

__all__ = [
    # Authentication
    "AuthMiddleware",
    "EXCLUDED_AUTH_PATHS",
    "get_current_user_id",
    "get_current_user_or_401",
    "get_token_data",
    # Logging
    "RequestResponseLoggingMiddleware",
]
