"""Error kinds raised by the onboarding core."""

from typing import Optional


class OnboardError(Exception):
    """Base exception for onboarding failures.

    Carries a stable ``code`` and the candidate the failure relates to, so
    callers can render a per-candidate reason.
    """

    code: str = "ONBOARD_ERROR"

    def __init__(self, message: str, candidate_id: Optional[str] = None):
        self.message = message
        self.candidate_id = candidate_id
        super().__init__(message)


class InvalidStateError(OnboardError):
    """Operation attempted on a candidate not in the required status."""

    code = "INVALID_STATE"


class NotFoundError(OnboardError):
    """Unknown candidate id."""

    code = "NOT_FOUND"

    def __init__(self, candidate_id: str):
        super().__init__(f"Candidate {candidate_id} not found", candidate_id)


class ValidationError(OnboardError):
    """Empty or invalid batch selection, malformed settings or form data."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, candidate_id: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message, candidate_id)
        self.field = field


class StorageError(OnboardError):
    """Underlying persistence failure."""

    code = "STORAGE_ERROR"


class OnboardTimeoutError(OnboardError, TimeoutError):
    """A single onboarding call did not finish in time."""

    code = "TIMEOUT"


class BatchInProgressError(OnboardError):
    """A bulk run is already in flight on this coordinator."""

    code = "BATCH_IN_PROGRESS"

    def __init__(self, batch_id: str):
        super().__init__(f"Bulk onboarding {batch_id} is still running")
        self.batch_id = batch_id
