"""
JWT access token creation and verification.

Tokens are issued by the identity provider in deployment; this module signs
them for development tooling and tests and verifies them on every request.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from webapi.core.config import settings

logger = logging.getLogger(__name__)


class TokenManager:
    """Create and verify access tokens."""

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token.

        The data dict must carry the user id in ``sub``.
        """
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)

        to_encode.update({
            "exp": int(expire.timestamp()),
            "type": "access",
            "jti": secrets.token_hex(16),
        })
        return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def verify_token(token: str, token_type: str = "access") -> Optional[dict]:
        """Verify and decode a JWT token; None when invalid, expired or of the wrong type."""
        try:
            payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None

        if payload.get("type") != token_type:
            logger.warning(f"Token type mismatch: expected {token_type}, got {payload.get('type')}")
            return None
        if not payload.get("sub"):
            logger.warning("Token payload has no subject")
            return None
        return payload
