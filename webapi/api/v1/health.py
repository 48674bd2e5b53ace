"""
Health check API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import time

from webapi.core.database import get_db
from webapi.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "timestamp": time.time()
    }


@router.get("/health/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Detailed health check with database connectivity."""
    health_status = {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "timestamp": time.time(),
        "checks": {
            "database": "unknown",
        }
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = "healthy"
    except SQLAlchemyError as e:
        health_status["checks"]["database"] = f"unhealthy: {str(e)}"
        health_status["status"] = "degraded"

    if health_status["status"] == "degraded":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status


@router.get("/health/ready")
async def readiness_check():
    """Readiness check for Kubernetes/load balancer health checks."""
    return {
        "status": "ready",
        "service": settings.app_name,
        "timestamp": time.time()
    }


@router.get("/health/live")
async def liveness_check():
    """Liveness check for Kubernetes health checks."""
    return {
        "status": "alive",
        "service": settings.app_name,
        "timestamp": time.time()
    }
