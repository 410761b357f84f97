"""Pydantic schemas for Onboarding endpoints."""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class OnboardingPackageResponse(CamelModel):
    """Smart defaults that one-click onboarding would apply."""

    department: str
    designation: str
    salary: int
    work_location: str
    manager_id: str
    start_date: date
    notes: str


class ChecklistUpdate(CamelModel):
    """Tick or untick one checklist item."""

    item: str
    done: bool


class CompleteOnboardingRequest(CamelModel):
    """Employment details entered on manual completion."""

    department: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)
    salary: int
    work_location: str = Field(..., min_length=1)
    start_date: date
    manager_id: str = ""
    notes: str = ""


class BulkOnboardingRequest(CamelModel):
    """Candidates to onboard in bulk. Omit ids to use the current selection."""

    candidate_ids: Optional[list[str]] = None


class OutcomeResponse(CamelModel):
    """Result of one onboarding attempt."""

    candidate_id: str
    success: bool
    message: str
    candidate_name: Optional[str] = None
    emp_id: Optional[str] = None
    error_code: Optional[str] = None


class BatchRunResponse(CamelModel):
    """Progress and outcome of a bulk onboarding run."""

    id: str
    status: str
    total: int
    completed: int
    in_progress: int
    failed: int
    started_at: datetime
    finished_at: Optional[datetime] = None
    failures: list[OutcomeResponse] = []

    @classmethod
    def from_run(cls, run) -> "BatchRunResponse":
        return cls(
            id=run.id,
            status=run.status.value,
            total=run.total,
            completed=run.completed,
            in_progress=run.in_progress,
            failed=run.failed,
            started_at=run.started_at,
            finished_at=run.finished_at,
            failures=[OutcomeResponse.model_validate(o) for o in run.failures],
        )


class SelectionToggle(CamelModel):
    """Check or uncheck one candidate."""

    candidate_id: str
    selected: Optional[bool] = None


class SelectAllRequest(CamelModel):
    """Select every eligible candidate matching the active filters."""

    selected: bool = True
    search: str = ""
    status: str = "all"
    nationality: str = "all"


class SelectionResponse(CamelModel):
    """Ids currently checked for bulk onboarding."""

    candidate_ids: list[str]
    count: int
