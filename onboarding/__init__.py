"""Candidate onboarding pipeline.

The core of the HR console's onboarding screen:

1. CandidateStore - Holds candidate records on an injected repository
2. SmartDefaultsResolver - Computes the one-click employment package
3. OnboardingEngine - Applies single-candidate lifecycle transitions
4. BatchCoordinator - Bulk one-click onboarding in concurrent windows
5. SelectionModel - Tracks arrived candidates checked for bulk action
"""

from .batch import BatchCoordinator
from .defaults import SmartDefaultsResolver
from .engine import OnboardingEngine
from .errors import (
    BatchInProgressError,
    InvalidStateError,
    NotFoundError,
    OnboardError,
    OnboardTimeoutError,
    StorageError,
    ValidationError,
)
from .models import (
    BatchRun,
    Candidate,
    CandidateStatus,
    Checklist,
    OnboardingForm,
    OnboardingPackage,
    OnboardingSettings,
    OnboardOutcome,
    SalaryRange,
)
from .repository import (
    CandidateRepository,
    InMemoryCandidateRepository,
    InMemorySettingsStore,
    SettingsStore,
)
from .selection import SelectionModel
from .settings import SettingsManager
from .store import CandidateStore

__all__ = [
    "BatchCoordinator",
    "SmartDefaultsResolver",
    "OnboardingEngine",
    "BatchInProgressError",
    "InvalidStateError",
    "NotFoundError",
    "OnboardError",
    "OnboardTimeoutError",
    "StorageError",
    "ValidationError",
    "BatchRun",
    "Candidate",
    "CandidateStatus",
    "Checklist",
    "OnboardingForm",
    "OnboardingPackage",
    "OnboardingSettings",
    "OnboardOutcome",
    "SalaryRange",
    "CandidateRepository",
    "InMemoryCandidateRepository",
    "InMemorySettingsStore",
    "SettingsStore",
    "SelectionModel",
    "SettingsManager",
    "CandidateStore",
]
