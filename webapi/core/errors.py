"""
Centralized error catalog and application exceptions.

Services raise the exceptions defined here; the exception handlers registered
in ``webapi.main`` translate them into JSON error responses with a stable
error code, the localized message and optional details.
"""

from enum import Enum
from typing import Dict, List, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse


class ErrorCode(Enum):
    """Standardized error codes for the API."""

    # Authentication errors
    AUTHENTICATION_REQUIRED = "AUTH_001"
    INVALID_TOKEN = "AUTH_002"
    PERMISSION_DENIED = "AUTH_003"

    # Resource errors
    NOT_FOUND = "RES_001"
    CONFLICT = "RES_002"
    BAD_REQUEST = "RES_003"

    # System errors
    INTERNAL_ERROR = "SYS_001"


class ErrorMessage:
    """Standardized error messages, used as localizer keys."""

    AUTHENTICATION_REQUIRED = "Authentication required"
    INVALID_TOKEN = "Invalid or expired token"
    PERMISSION_DENIED = "Permission denied"
    INTERNAL_ERROR = "Internal server error"

    ROLE_NOT_FOUND = "Role Not Found"
    BRAND_NOT_FOUND = "Brand Not Found"


class CustomException(Exception):
    """Base class for exceptions that map onto an HTTP error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.errors = list(errors) if errors else []
        self.headers = headers

    def to_dict(self) -> dict:
        """Build the JSON error body."""
        error_detail = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.errors:
            error_detail["details"] = self.errors
        return error_detail


class NotFoundException(CustomException):
    """The requested entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.NOT_FOUND


class ConflictException(CustomException):
    """A business rule forbids the requested change."""

    status_code = status.HTTP_409_CONFLICT
    error_code = ErrorCode.CONFLICT


class BadRequestException(CustomException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.BAD_REQUEST


class InternalServerException(CustomException):
    """The underlying store rejected a write; ``errors`` carries its messages."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = ErrorCode.INTERNAL_ERROR


class UnauthorizedException(CustomException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCode.AUTHENTICATION_REQUIRED

    def __init__(self, message: str = ErrorMessage.AUTHENTICATION_REQUIRED, errors: Optional[List[str]] = None):
        super().__init__(message, errors, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenException(CustomException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = ErrorCode.PERMISSION_DENIED


async def custom_exception_handler(request: Request, exc: CustomException) -> JSONResponse:
    """Render a ``CustomException`` as a standardized JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_dict()},
        headers=exc.headers,
    )
