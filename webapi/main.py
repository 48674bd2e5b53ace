"""
Main FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

# Import custom middleware
from webapi.middleware import (
    AuthMiddleware,
    RequestResponseLoggingMiddleware,
)
from webapi.middleware.auth_middleware import EXCLUDED_AUTH_PATHS

from webapi.core.config import settings, get_cors_origins, get_cors_methods, get_cors_headers
from webapi.core.database import close_db
from webapi.core.errors import CustomException, ErrorCode, ErrorMessage, custom_exception_handler

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting {settings.app_name} {settings.app_version} ({settings.app_env})")

    yield

    close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Catalog brand search and role/permission management API",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)


# Configure OpenAPI security scheme for Bearer token authentication in docs
def custom_openapi():
    """Custom OpenAPI schema generator with Bearer token security."""
    if app.openapi_schema:
        return app.openapi_schema

    # Get the original openapi method (avoid recursion)
    original_openapi = FastAPI.openapi
    openapi_schema = original_openapi(app)

    if "components" not in openapi_schema:
        openapi_schema["components"] = {}

    openapi_schema["components"]["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "JWT Authorization header using the Bearer scheme.",
        }
    }

    exclude_paths = set(EXCLUDED_AUTH_PATHS + ["/"])

    for path, methods in openapi_schema.get("paths", {}).items():
        if path in exclude_paths:
            continue
        for method, operation in methods.items():
            if method.lower() in ["get", "post", "put", "delete", "patch"]:
                operation.setdefault("security", [{"BearerAuth": []}])

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

# Add CORS middleware
if settings.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=settings.cors_credentials,
        allow_methods=get_cors_methods(),
        allow_headers=get_cors_headers(),
    )

# Add authentication middleware
if settings.auth_middleware_enabled:
    app.add_middleware(AuthMiddleware)
    logger.info("Authentication middleware enabled")

# Add request/response logging middleware (outermost, so 401s are logged too)
app.add_middleware(
    RequestResponseLoggingMiddleware,
    enable_logging=settings.request_logging_enabled,
)


# Domain exceptions carry their own status code and error payload
app.add_exception_handler(CustomException, custom_exception_handler)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error_code": ErrorCode.INTERNAL_ERROR.value,
                "message": str(exc) if settings.debug else ErrorMessage.INTERNAL_ERROR,
            }
        },
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "description": "Catalog brand search and role/permission management API",
        "docs": "/docs" if settings.debug else None,
        "health": "/health",
    }


# Include API routers
from webapi.routers import include_routers  # noqa: E402

include_routers(app)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "webapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
