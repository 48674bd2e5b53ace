"""
Request/Response logging middleware for API monitoring.
"""

import json
import logging
import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response as StarletteResponse

from webapi.core.config import settings

logger = logging.getLogger(__name__)


class RequestResponseLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request/response logging middleware.

    Features:
    - Request logging (method, path, query, client, culture)
    - Response logging (status, timing)
    - Log level derived from the response status
    - Sensitive header filtering
    - X-Request-ID and X-Process-Time response headers
    """

    def __init__(
        self,
        app,
        enable_logging: bool = True,
        sensitive_headers: list = None,
    ):
        super().__init__(app)
        self.enable_logging = enable_logging
        self.sensitive_headers = sensitive_headers or [
            "authorization",
            "cookie",
            "x-api-key",
            "proxy-authorization"
        ]

    async def dispatch(self, request: Request, call_next: Callable) -> StarletteResponse:
        """Process request and log details."""
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        if self.enable_logging:
            self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed | "
                f"request_id={request_id} | "
                f"method={request.method} | "
                f"path={request.url.path} | "
                f"error={str(e)} | "
                f"time={process_time:.3f}s",
                exc_info=True
            )
            raise

        process_time = time.time() - start_time
        if self.enable_logging:
            self._log_response(request, response, process_time, request_id)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    def _log_request(self, request: Request, request_id: str) -> None:
        """Log incoming request details."""
        client_host = request.client.host if request.client else "unknown"
        log_level = logging.DEBUG if self._is_health_check(request.url.path) else logging.INFO

        logger.log(
            log_level,
            f"Incoming request | "
            f"request_id={request_id} | "
            f"method={request.method} | "
            f"path={request.url.path} | "
            f"query={request.url.query} | "
            f"client={client_host} | "
            f"accept_language={request.headers.get('accept-language', '-')}"
        )

        if settings.debug and logger.isEnabledFor(logging.DEBUG):
            headers = self._filter_sensitive_headers(dict(request.headers))
            logger.debug(f"Request headers | request_id={request_id} | headers={json.dumps(headers)}")

    def _log_response(
        self,
        request: Request,
        response: StarletteResponse,
        process_time: float,
        request_id: str
    ) -> None:
        """Log response details."""
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        elif self._is_health_check(request.url.path):
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            f"Response sent | "
            f"request_id={request_id} | "
            f"method={request.method} | "
            f"path={request.url.path} | "
            f"status={response.status_code} | "
            f"time={process_time:.3f}s"
        )

    def _filter_sensitive_headers(self, headers: dict) -> dict:
        """Remove sensitive headers from logging."""
        filtered = {}
        for key, value in headers.items():
            if key.lower() in self.sensitive_headers:
                filtered[key] = "***REDACTED***"
            else:
                filtered[key] = value
        return filtered

    def _is_health_check(self, path: str) -> bool:
        """Check if this is a health check endpoint."""
        health_paths = ["/health", "/api/v1/health"]
        return any(path.startswith(health_path) for health_path in health_paths)
