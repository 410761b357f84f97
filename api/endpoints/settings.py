"""One-click onboarding settings endpoints."""

import structlog
from fastapi import APIRouter, Depends

from api.schemas.settings import (
    CatalogResponse,
    OnboardingSettingsResponse,
    OnboardingSettingsUpdate,
)
from api.services.onboarding_service import OnboardingService, get_onboarding_service
from onboarding.defaults import catalog
from onboarding.models import OnboardingSettings

logger = structlog.get_logger()
router = APIRouter()


@router.get("/onboarding", response_model=OnboardingSettingsResponse)
async def get_onboarding_settings(
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Get the current one-click onboarding settings."""
    settings = await service.settings.get()
    return OnboardingSettingsResponse.model_validate(settings.to_dict())


@router.put("/onboarding", response_model=OnboardingSettingsResponse)
async def update_onboarding_settings(
    data: OnboardingSettingsUpdate,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Update the one-click onboarding settings."""
    current = await service.settings.get()
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)

    merged = {**current.to_dict(), **update_data}
    settings = await service.settings.save(OnboardingSettings.from_dict(merged))

    logger.info("Onboarding settings updated", keys=list(update_data.keys()))
    return OnboardingSettingsResponse.model_validate(settings.to_dict())


@router.get("/onboarding/catalog", response_model=CatalogResponse)
async def get_onboarding_catalog():
    """Department, location and salary presets."""
    return CatalogResponse.model_validate(catalog())
