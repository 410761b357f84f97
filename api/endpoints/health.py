"""Health check endpoints for monitoring."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text

from api.config.settings import settings
from api.services.onboarding_service import OnboardingService, get_onboarding_service

logger = structlog.get_logger()
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
    database: str
    bulk_onboarding: dict


def check_database(service: OnboardingService) -> tuple[str, str | None]:
    """Check database connectivity."""
    session_factory = getattr(service.store.repository, "session_factory", None)
    if session_factory is None:
        return "not_configured", None

    db = session_factory()
    try:
        db.execute(text("SELECT 1")).fetchone()
        return "connected", None
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return "disconnected", str(e)
    finally:
        db.close()


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse)
async def health_check(
    service: OnboardingService = Depends(get_onboarding_service),
) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns overall status, database state and bulk onboarding status.
    """
    db_status, _ = check_database(service)

    return HealthResponse(
        status="unhealthy" if db_status == "disconnected" else "healthy",
        version=settings.APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=db_status,
        bulk_onboarding=service.coordinator.get_status(),
    )


@router.get("/live")
async def liveness_check() -> dict:
    """
    Kubernetes liveness probe.

    Returns 200 if service process is alive.
    """
    return {"alive": True}
