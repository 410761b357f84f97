"""API endpoints for the HR console."""

from fastapi import APIRouter

from .health import router as health_router
from .candidates import router as candidates_router
from .onboarding import router as onboarding_router
from .settings import router as settings_router

# Create main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(candidates_router, prefix="/candidates", tags=["Candidates"])
api_router.include_router(onboarding_router, prefix="/onboarding", tags=["Onboarding"])
api_router.include_router(settings_router, prefix="/settings", tags=["Settings"])

__all__ = ["api_router"]
