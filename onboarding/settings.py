"""Operator-editable onboarding settings."""

import structlog

from onboarding.errors import OnboardError, StorageError
from onboarding.models import OnboardingSettings
from onboarding.repository import SettingsStore

logger = structlog.get_logger()


class SettingsManager:
    """Reads and saves OnboardingSettings through a SettingsStore.

    Nothing is cached: every ``get`` reflects the latest saved settings.
    """

    def __init__(self, store: SettingsStore):
        self.store = store

    async def get(self) -> OnboardingSettings:
        try:
            data = await self.store.load()
        except OnboardError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to load onboarding settings: {e}") from e

        if data is None:
            return OnboardingSettings()
        return OnboardingSettings.from_dict(data)

    async def save(self, settings: OnboardingSettings) -> OnboardingSettings:
        """Validate and persist ``settings``.

        Raises:
            ValidationError: If the settings are malformed
            StorageError: If the store fails
        """
        settings.validate()
        try:
            await self.store.save(settings.to_dict())
        except OnboardError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save onboarding settings: {e}") from e

        logger.info(
            "Onboarding settings saved",
            default_department=settings.default_department,
            default_work_location=settings.default_work_location,
            enable_bulk_onboarding=settings.enable_bulk_onboarding,
        )
        return settings
