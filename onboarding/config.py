"""Onboarding core configuration settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class OnboardingConfig(BaseSettings):
    """Settings for the onboarding engine and batch coordinator."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Bulk onboarding
    BATCH_WINDOW_SIZE: int = 3  # Candidates onboarded concurrently per window
    BATCH_WINDOW_DELAY: float = 1.0  # Seconds to pause between windows
    ONBOARD_TIMEOUT: float = 30.0  # Per-candidate limit (seconds)

    # Engine
    SIMULATED_LATENCY: float = 0.0  # Seconds to wait before each write
    EMP_ID_PREFIX: str = "EMP"
    COMPLETION_THRESHOLD: int = 100  # Checklist percent required for manual completion

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"


@lru_cache
def get_config() -> OnboardingConfig:
    """Get cached config instance."""
    return OnboardingConfig()


config = get_config()
