"""
API router for health checks

Provides endpoints for monitoring the health of the API and its database.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime, timezone
import logging
import platform
import psutil

from app.config.settings import settings
from app.db.session import get_database, check_database_connection

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@router.get(
    "/health",
    summary="Health check",
    description="Check API and component health status"
)
async def health_check(database=Depends(get_database)):
    """
    Check API and component health status

    Returns:
        Dict: Health status of API components
    """
    health_data = {
        "status": "ok",
        "timestamp": _timestamp(),
        "version": settings.APP_VERSION,
        "components": {}
    }

    db_status = await check_database_connection(database)
    health_data["components"]["database"] = {
        "status": "ok" if db_status else "error",
        "message": "Connected" if db_status else "Failed to connect",
        "type": "MongoDB"
    }
    if not db_status:
        health_data["status"] = "degraded"

    # System metrics
    health_data["system"] = {
        "cpu_usage": psutil.cpu_percent(interval=None),
        "memory_usage_percent": psutil.virtual_memory().percent,
        "python_version": platform.python_version(),
        "platform": platform.platform(),
    }

    return health_data


@router.get(
    "/readiness",
    summary="Readiness probe",
    description="Check if the API is ready to receive traffic"
)
async def readiness_check(database=Depends(get_database)):
    """
    Check if the API is ready to receive traffic

    Returns:
        Dict: API readiness status
    """
    if not await check_database_connection(database):
        logger.error("Readiness check failed: database unreachable")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready: database connection failed"
        )
    return {
        "status": "ready",
        "timestamp": _timestamp(),
        "db_type": "MongoDB"
    }


@router.get(
    "/liveness",
    summary="Liveness probe",
    description="Check if the API is running properly"
)
async def liveness_check():
    return {
        "status": "alive",
        "timestamp": _timestamp()
    }
