# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import StoreDep
from lib.supabase_client import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()

HEALTH_MESSAGE = "Creative Showcase API is running!"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    message: str
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    uploads: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        message=HEALTH_MESSAGE,
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=settings.API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(store: StoreDep):
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept requests.
    Checks database connectivity and the upload directory.
    """
    checks = ChecksResponse(database="unknown", uploads="unknown")

    # Check database
    try:
        store.ping()
        checks.database = "healthy"
    except StoreError as e:
        logger.warning(f"Readiness check: database unavailable: {e}")
        checks.database = f"unhealthy: {e.message[:50]}"

    # Check upload directory
    if settings.upload_path.is_dir():
        checks.uploads = "healthy"
    else:
        checks.uploads = "unhealthy: upload directory missing"

    all_healthy = checks.database == "healthy" and checks.uploads == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
