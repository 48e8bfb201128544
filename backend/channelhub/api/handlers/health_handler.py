"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, Request

from channelhub.config.settings import settings
from channelhub.shared.core.exceptions import ServiceUnavailableError
from channelhub.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness check for Kubernetes/load balancers.

    Ready once the database handle has been created at startup.

    Returns:
        Simple ready status
    """
    if getattr(request.app.state, "database", None) is None:
        raise ServiceUnavailableError("Database is not initialized")
    return {"status": "ready"}


@router.get("/live")
async def liveness_check():
    """
    Liveness check for Kubernetes.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
