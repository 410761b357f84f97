"""Domain models for the candidate onboarding pipeline.

Plain dataclasses shared by the store, engine, coordinator and API layers.
They carry no persistence logic.
"""

import copy
import uuid
from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from onboarding.errors import ValidationError


class CandidateStatus(str, Enum):
    """Lifecycle status. Only moves forward."""

    ARRIVED = "arrived"
    ONBOARDING = "onboarding"
    EMPLOYEE = "employee"


@dataclass
class Checklist:
    """The eight onboarding sub-tasks."""

    document_verification: bool = False
    medical_checkup: bool = False
    orientation_training: bool = False
    policy_briefing: bool = False
    work_permit_processing: bool = False
    accommodation_assignment: bool = False
    equipment_issuance: bool = False
    system_access: bool = False

    @classmethod
    def item_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def completed(cls) -> "Checklist":
        return cls(**{name: True for name in cls.item_names()})

    @classmethod
    def from_dict(cls, data: Dict[str, bool]) -> "Checklist":
        unknown = set(data) - set(cls.item_names())
        if unknown:
            raise ValidationError(f"Unknown checklist items: {', '.join(sorted(unknown))}", field="checklist")
        return cls(**{name: bool(value) for name, value in data.items()})

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @property
    def completed_count(self) -> int:
        return sum(1 for value in self.to_dict().values() if value)

    @property
    def progress(self) -> float:
        """Percent of items done."""
        return self.completed_count / len(self.item_names()) * 100

    def is_complete(self) -> bool:
        return self.completed_count == len(self.item_names())


@dataclass
class Candidate:
    """A person somewhere in the onboarding pipeline."""

    id: str
    name: str
    nationality: str
    passport_number: str
    position: Optional[str] = None
    status: CandidateStatus = CandidateStatus.ARRIVED
    arrival_date: Optional[date] = None
    checklist: Optional[Checklist] = None

    # Populated once the candidate becomes an employee
    emp_id: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    salary: Optional[int] = None
    work_location: Optional[str] = None
    manager_id: Optional[str] = None
    start_date: Optional[date] = None
    notes: Optional[str] = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    @property
    def progress(self) -> float:
        if self.checklist is None:
            return 0.0
        return self.checklist.progress

    def copy(self) -> "Candidate":
        return copy.deepcopy(self)


@dataclass
class SalaryRange:
    """Inclusive salary bounds."""

    min: int
    max: int

    @property
    def midpoint(self) -> int:
        # Half-up rounding; round() would send .5 to the even neighbour
        return (self.min + self.max + 1) // 2

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass
class OnboardingSettings:
    """Process-wide one-click onboarding configuration."""

    default_department: str = "construction"
    default_salary_range: SalaryRange = field(default_factory=lambda: SalaryRange(min=8000, max=25000))
    default_work_location: str = "Site A - Main Construction"
    auto_assign_manager: bool = True
    enable_bulk_onboarding: bool = True
    require_approval: bool = False

    def validate(self) -> None:
        """Raise ValidationError if the settings are malformed."""
        salary_range = self.default_salary_range
        if salary_range.min <= 0 or salary_range.max <= 0:
            raise ValidationError("Salary range bounds must be positive", field="default_salary_range")
        if salary_range.min > salary_range.max:
            raise ValidationError("Salary range minimum exceeds maximum", field="default_salary_range")
        if not self.default_department.strip():
            raise ValidationError("Default department is required", field="default_department")
        if not self.default_work_location.strip():
            raise ValidationError("Default work location is required", field="default_work_location")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "OnboardingSettings":
        data = dict(data)
        salary_range = data.pop("default_salary_range", None)
        try:
            settings = cls(**data)
            if salary_range is not None:
                settings.default_salary_range = SalaryRange(
                    min=int(salary_range["min"]),
                    max=int(salary_range["max"]),
                )
        except (TypeError, KeyError, ValueError) as e:
            raise ValidationError(f"Malformed onboarding settings: {e}") from e
        return settings


@dataclass
class OnboardingPackage:
    """Employment attributes resolved for one candidate."""

    department: str
    designation: str
    salary: int
    work_location: str
    manager_id: str
    start_date: date
    notes: str


@dataclass
class OnboardingForm:
    """Employment attributes entered by the operator on manual completion."""

    department: str
    designation: str
    salary: int
    work_location: str
    start_date: date
    manager_id: str = ""
    notes: str = ""


@dataclass
class OnboardOutcome:
    """Result of one onboarding attempt, rendered by the notifier."""

    candidate_id: str
    success: bool
    message: str
    candidate_name: Optional[str] = None
    emp_id: Optional[str] = None
    error_code: Optional[str] = None


class BatchStatus(str, Enum):
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class BatchRun:
    """Progress counters for one bulk onboarding invocation.

    ``completed`` and ``failed`` only ever grow. Items not yet settled count
    as in progress, so ``in_progress`` drops to zero once the run finishes.
    """

    total: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    completed: int = 0
    failed: int = 0
    in_flight: int = 0
    status: BatchStatus = BatchStatus.RUNNING
    outcomes: List[OnboardOutcome] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    @property
    def in_progress(self) -> int:
        return self.total - self.completed - self.failed

    @property
    def is_terminal(self) -> bool:
        return self.status == BatchStatus.FINISHED

    @property
    def failures(self) -> List[OnboardOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    def record(self, outcome: OnboardOutcome) -> None:
        if self.completed + self.failed >= self.total:
            raise RuntimeError(f"Batch {self.id} already settled all {self.total} items")
        self.outcomes.append(outcome)
        if outcome.success:
            self.completed += 1
        else:
            self.failed += 1

    def finish(self) -> None:
        self.status = BatchStatus.FINISHED
        self.finished_at = datetime.now(timezone.utc)

    def summary(self) -> dict:
        return {
            "batch_id": self.id,
            "total": self.total,
            "completed": self.completed,
            "in_progress": self.in_progress,
            "failed": self.failed,
            "status": self.status.value,
        }
