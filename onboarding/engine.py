"""Onboarding engine: applies single-candidate lifecycle transitions."""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional, Set

import structlog

from onboarding.config import config
from onboarding.defaults import SmartDefaultsResolver
from onboarding.errors import InvalidStateError, OnboardError, OnboardTimeoutError, ValidationError
from onboarding.models import (
    Candidate,
    CandidateStatus,
    Checklist,
    OnboardingForm,
    OnboardOutcome,
)
from onboarding.notifications import LoggingNotifier, Notifier
from onboarding.settings import SettingsManager
from onboarding.store import CandidateStore

logger = structlog.get_logger()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EmpIdGenerator:
    """Generates unique, human-readable employee ids.

    Ids are the prefix plus the last six digits of the millisecond clock.
    A taken id is bumped sequentially until a free one is found. An id
    stays reserved until its write settles, after which the store holds it.
    """

    def __init__(self, store: CandidateStore, prefix: str = "EMP", clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.prefix = prefix
        self.clock = clock
        self._reserved: Set[str] = set()

    def _format(self, number: int) -> str:
        return f"{self.prefix}{number % 1_000_000:06d}"

    async def reserve(self) -> str:
        # Ids released while the store is read were committed before release
        pending = set(self._reserved)
        existing = await self.store.existing_emp_ids()
        # No await past this point: reservation is atomic on the event loop
        taken = existing | pending | self._reserved
        number = int(self.clock().timestamp() * 1000)
        for offset in range(1_000_000):
            emp_id = self._format(number + offset)
            if emp_id not in taken:
                self._reserved.add(emp_id)
                return emp_id
        raise ValidationError(f"No free employee ids left for prefix {self.prefix}")

    def release(self, emp_id: str) -> None:
        self._reserved.discard(emp_id)


class OnboardingEngine:
    """Moves a single candidate through the onboarding lifecycle."""

    def __init__(
        self,
        store: CandidateStore,
        settings: SettingsManager,
        resolver: Optional[SmartDefaultsResolver] = None,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], datetime] = utcnow,
        latency: Optional[float] = None,
        emp_id_prefix: Optional[str] = None,
        completion_threshold: Optional[int] = None,
    ):
        """Initialize engine.

        Args:
            store: Candidate store used for every read and write
            settings: Source of the current onboarding settings
            resolver: Smart defaults resolver
            notifier: Receives one outcome per attempted transition
            clock: Returns the current UTC time
            latency: Seconds to wait before committing a one-click onboarding
            emp_id_prefix: Prefix for generated employee ids
            completion_threshold: Checklist percent required for manual completion
        """
        self.store = store
        self.settings = settings
        self.resolver = resolver or SmartDefaultsResolver()
        self.notifier = notifier or LoggingNotifier()
        self.clock = clock
        self.latency = config.SIMULATED_LATENCY if latency is None else latency
        self.completion_threshold = (
            config.COMPLETION_THRESHOLD if completion_threshold is None else completion_threshold
        )
        self.emp_ids = EmpIdGenerator(
            store,
            prefix=emp_id_prefix or config.EMP_ID_PREFIX,
            clock=clock,
        )
        self._in_flight: Set[str] = set()

    async def onboard_one(self, candidate_id: str, timeout: Optional[float] = None) -> Candidate:
        """One-click onboard an arrived candidate straight to employee.

        Completes the whole checklist, applies the smart defaults and assigns
        an employee id in a single write. On failure the stored record is
        left untouched.

        Args:
            candidate_id: Candidate to onboard
            timeout: Seconds allowed for the steps before the write. Once
                the write has started it always runs to completion.

        Raises:
            NotFoundError: If the candidate does not exist
            InvalidStateError: If the candidate is not ``arrived``
            OnboardTimeoutError: If the steps before the write overran ``timeout``
            StorageError: If the write fails
        """
        log = logger.bind(candidate_id=candidate_id)
        candidate: Optional[Candidate] = None

        if candidate_id in self._in_flight:
            error = InvalidStateError(f"Candidate {candidate_id} is already being onboarded", candidate_id)
            await self._notify_failure(candidate_id, None, error)
            raise error

        self._in_flight.add(candidate_id)
        loaded: dict = {}
        try:
            try:
                candidate, settings = await asyncio.wait_for(self._prepare(candidate_id, loaded), timeout=timeout)
            except asyncio.TimeoutError:
                raise OnboardTimeoutError(f"Onboarding timed out after {timeout}s", candidate_id)

            now = self.clock()
            package = self.resolver.resolve(candidate, settings, now.date())

            emp_id = await self.emp_ids.reserve()
            updated = replace(
                candidate,
                status=CandidateStatus.EMPLOYEE,
                emp_id=emp_id,
                checklist=Checklist.completed(),
                department=package.department,
                designation=package.designation,
                salary=package.salary,
                work_location=package.work_location,
                manager_id=package.manager_id,
                start_date=package.start_date,
                notes=package.notes,
                completed_at=now,
            )
            try:
                saved = await self.store.update(updated)
            finally:
                self.emp_ids.release(emp_id)

        except OnboardError as e:
            candidate = candidate or loaded.get("candidate")
            log.warning("One-click onboarding failed", error_code=e.code, error=e.message)
            await self._notify_failure(candidate_id, candidate, e)
            raise
        finally:
            self._in_flight.discard(candidate_id)

        log.info("One-click onboarding complete", emp_id=saved.emp_id, department=saved.department)
        await self.notifier.outcome(
            OnboardOutcome(
                candidate_id=saved.id,
                success=True,
                message=f"{saved.name} is now Employee {saved.emp_id}",
                candidate_name=saved.name,
                emp_id=saved.emp_id,
            )
        )
        return saved

    async def _prepare(self, candidate_id: str, loaded: dict):
        candidate = await self.store.get(candidate_id)
        loaded["candidate"] = candidate
        self._require_status(candidate, CandidateStatus.ARRIVED)

        if self.latency:
            await asyncio.sleep(self.latency)

        return candidate, await self.settings.get()

    async def start_onboarding(self, candidate_id: str) -> Candidate:
        """Start the manual path: ``arrived`` to ``onboarding`` with an empty checklist."""
        candidate: Optional[Candidate] = None
        try:
            candidate = await self.store.get(candidate_id)
            self._require_status(candidate, CandidateStatus.ARRIVED)

            saved = await self.store.update(
                replace(candidate, status=CandidateStatus.ONBOARDING, checklist=Checklist())
            )
        except OnboardError as e:
            await self._notify_failure(candidate_id, candidate, e, action="start onboarding for")
            raise

        logger.info("Onboarding started", candidate_id=candidate_id)
        await self.notifier.started(saved)
        return saved

    async def update_checklist(self, candidate_id: str, item: str, done: bool) -> Candidate:
        """Tick or untick one checklist item of a candidate being onboarded."""
        if item not in Checklist.item_names():
            raise ValidationError(f"Unknown checklist item: {item}", candidate_id, field="item")

        candidate = await self.store.get(candidate_id)
        self._require_status(candidate, CandidateStatus.ONBOARDING)

        checklist = replace(candidate.checklist or Checklist(), **{item: done})
        saved = await self.store.update(replace(candidate, checklist=checklist))
        logger.info(
            "Checklist updated",
            candidate_id=candidate_id,
            item=item,
            done=done,
            progress=saved.progress,
        )
        return saved

    async def complete_onboarding(self, candidate_id: str, form: OnboardingForm) -> Candidate:
        """Finish the manual path with operator-entered employment details.

        Raises:
            InvalidStateError: If the candidate is not ``onboarding`` or the
                checklist is below the completion threshold
            ValidationError: If the form is invalid
        """
        candidate: Optional[Candidate] = None
        try:
            candidate = await self.store.get(candidate_id)
            self._require_status(candidate, CandidateStatus.ONBOARDING)

            if candidate.progress < self.completion_threshold:
                raise InvalidStateError(
                    f"Checklist is {candidate.progress:.0f}% complete, "
                    f"{self.completion_threshold}% required",
                    candidate_id,
                )

            settings = await self.settings.get()
            self._validate_form(candidate_id, form, settings.default_salary_range)

            emp_id = await self.emp_ids.reserve()
            try:
                saved = await self.store.update(
                    replace(
                        candidate,
                        status=CandidateStatus.EMPLOYEE,
                        emp_id=emp_id,
                        department=form.department,
                        designation=form.designation,
                        salary=form.salary,
                        work_location=form.work_location,
                        manager_id=form.manager_id,
                        start_date=form.start_date,
                        notes=form.notes,
                        completed_at=self.clock(),
                    )
                )
            finally:
                self.emp_ids.release(emp_id)
        except OnboardError as e:
            logger.warning("Manual onboarding failed", candidate_id=candidate_id, error_code=e.code, error=e.message)
            await self._notify_failure(candidate_id, candidate, e, action="complete onboarding for")
            raise

        logger.info("Onboarding completed", candidate_id=candidate_id, emp_id=saved.emp_id)
        await self.notifier.outcome(
            OnboardOutcome(
                candidate_id=saved.id,
                success=True,
                message=f"{saved.name} is now Employee {saved.emp_id}",
                candidate_name=saved.name,
                emp_id=saved.emp_id,
            )
        )
        return saved

    @staticmethod
    def _require_status(candidate: Candidate, status: CandidateStatus) -> None:
        if candidate.status != status:
            raise InvalidStateError(
                f"Candidate {candidate.id} is {candidate.status.value}, expected {status.value}",
                candidate.id,
            )

    @staticmethod
    def _validate_form(candidate_id: str, form: OnboardingForm, salary_range) -> None:
        for name in ("department", "designation", "work_location"):
            if not getattr(form, name, "").strip():
                raise ValidationError(f"{name} is required", candidate_id, field=name)
        if form.salary <= 0:
            raise ValidationError("Salary must be positive", candidate_id, field="salary")
        if not salary_range.contains(form.salary):
            raise ValidationError(
                f"Salary {form.salary} is outside {salary_range.min}-{salary_range.max}",
                candidate_id,
                field="salary",
            )

    async def _notify_failure(
        self,
        candidate_id: str,
        candidate: Optional[Candidate],
        error: OnboardError,
        action: str = "onboard",
    ) -> None:
        name = candidate.name if candidate else candidate_id
        await self.notifier.outcome(
            OnboardOutcome(
                candidate_id=candidate_id,
                success=False,
                message=f"Failed to {action} {name}: {error.message}",
                candidate_name=candidate.name if candidate else None,
                error_code=error.code,
            )
        )
