"""Pydantic schemas for API request/response validation.

All schemas use CamelCase for JSON field names (via alias_generator).
"""

from .base import CamelModel, ErrorResponse

# Re-export all schemas
from .candidates import (
    CandidateCreate,
    CandidateResponse,
    CandidateSummary,
)
from .onboarding import (
    OnboardingPackageResponse,
    ChecklistUpdate,
    CompleteOnboardingRequest,
    BulkOnboardingRequest,
    OutcomeResponse,
    BatchRunResponse,
    SelectionToggle,
    SelectAllRequest,
    SelectionResponse,
)
from .settings import (
    OnboardingSettingsResponse,
    OnboardingSettingsUpdate,
    CatalogResponse,
)

__all__ = [
    # Base
    "CamelModel",
    "ErrorResponse",
    # Candidates
    "CandidateCreate",
    "CandidateResponse",
    "CandidateSummary",
    # Onboarding
    "OnboardingPackageResponse",
    "ChecklistUpdate",
    "CompleteOnboardingRequest",
    "BulkOnboardingRequest",
    "OutcomeResponse",
    "BatchRunResponse",
    "SelectionToggle",
    "SelectAllRequest",
    "SelectionResponse",
    # Settings
    "OnboardingSettingsResponse",
    "OnboardingSettingsUpdate",
    "CatalogResponse",
]
