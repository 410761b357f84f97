"""Business logic services for the HR console API."""

from .candidate_repository import SqlCandidateRepository
from .settings_store import SqlSettingsStore
from .onboarding_service import OnboardingService, get_onboarding_service

__all__ = [
    "SqlCandidateRepository",
    "SqlSettingsStore",
    "OnboardingService",
    "get_onboarding_service",
]
