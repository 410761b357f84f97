"""SQLAlchemy ORM models for the HR console.

All models are imported here to ensure they're registered with Base.metadata
before any database operations.
"""

# Import base first
from api.config.database import Base

# Core models
from .candidates import CandidateRecord

# Configuration models
from .settings import Setting, ONBOARDING_SETTINGS_KEY

__all__ = [
    "Base",
    "CandidateRecord",
    "Setting",
    "ONBOARDING_SETTINGS_KEY",
]
