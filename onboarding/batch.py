"""Bulk one-click onboarding with windowed concurrency."""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional

import structlog

from onboarding.config import config
from onboarding.engine import OnboardingEngine
from onboarding.errors import (
    BatchInProgressError,
    OnboardError,
    ValidationError,
)
from onboarding.models import BatchRun, CandidateStatus, OnboardOutcome
from onboarding.notifications import Notifier

logger = structlog.get_logger()

ProgressCallback = Callable[[BatchRun], Optional[Awaitable[None]]]


class BatchCoordinator:
    """Runs one-click onboarding over a selection of candidates.

    Candidates are processed in fixed-size windows. Every call inside a
    window starts at once and the whole window settles before the next one
    starts. Per-candidate failures are counted, never abort the run, and are
    not retried. Only one run may be in flight per coordinator.
    """

    def __init__(
        self,
        engine: OnboardingEngine,
        window_size: Optional[int] = None,
        window_delay: Optional[float] = None,
        item_timeout: Optional[float] = None,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize coordinator.

        Args:
            engine: Engine performing each single-candidate onboarding
            window_size: Candidates processed concurrently per window
            window_delay: Seconds to wait between windows
            item_timeout: Seconds a single onboarding may spend before its
                write starts; overrunning counts as a timeout failure
            notifier: Receives unexpected-error outcomes and the final summary
                (defaults to the engine's notifier)
        """
        self.engine = engine
        self.window_size = config.BATCH_WINDOW_SIZE if window_size is None else window_size
        self.window_delay = config.BATCH_WINDOW_DELAY if window_delay is None else window_delay
        self.item_timeout = config.ONBOARD_TIMEOUT if item_timeout is None else item_timeout
        self.notifier = notifier or engine.notifier
        self.current_run: Optional[BatchRun] = None
        self.last_run: Optional[BatchRun] = None

        if self.window_size < 1:
            raise ValueError("window_size must be at least 1")

    @property
    def running(self) -> bool:
        return self.current_run is not None and not self.current_run.is_terminal

    async def run_bulk(
        self,
        candidate_ids: Iterable[str],
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchRun:
        """Onboard every candidate in ``candidate_ids``.

        The call is rejected before any work when the selection is empty,
        bulk onboarding is disabled, or no selected id is currently an
        arrived candidate. Otherwise every id is attempted and ineligible
        ones are counted as failures.

        Args:
            candidate_ids: Selected candidate ids (duplicates are ignored)
            on_progress: Called with the run after every counter change

        Returns:
            The finished run

        Raises:
            ValidationError: If the selection is rejected
            BatchInProgressError: If another run is still in flight
        """
        if self.running:
            raise BatchInProgressError(self.current_run.id)

        ids = list(dict.fromkeys(candidate_ids))
        if not ids:
            raise ValidationError("Please select candidates to onboard", field="candidate_ids")

        settings = await self.engine.settings.get()
        if not settings.enable_bulk_onboarding:
            raise ValidationError("Bulk onboarding is disabled in settings")

        # Re-check in case the busy flag changed while settings loaded
        if self.running:
            raise BatchInProgressError(self.current_run.id)

        run = BatchRun(total=len(ids))
        self.current_run = run
        try:
            await self._check_eligible(ids)
            log = logger.bind(batch_id=run.id)
            log.info("Bulk onboarding started", total=run.total, window_size=self.window_size)
            await self._emit(on_progress, run)

            windows = self._windows(ids)
            for index, window in enumerate(windows):
                log.info("Processing window", window=index + 1, windows=len(windows), size=len(window))
                await asyncio.gather(
                    *(self._run_item(run, candidate_id, on_progress) for candidate_id in window),
                    return_exceptions=True,
                )

                if index + 1 < len(windows) and self.window_delay:
                    await asyncio.sleep(self.window_delay)

            run.finish()
            log.info("Bulk onboarding finished", **run.summary())
            await self.notifier.batch_finished(run)
            await self._emit(on_progress, run)
            self.last_run = run
            return run
        finally:
            # Rejected runs never started any work, so they are discarded
            if not run.is_terminal:
                run.finish()
            self.current_run = None

    def get_status(self) -> dict:
        """Get coordinator status."""
        return {
            "running": self.running,
            "window_size": self.window_size,
            "window_delay": self.window_delay,
            "item_timeout": self.item_timeout,
            "current_run": self.current_run.summary() if self.current_run else None,
            "last_run": self.last_run.summary() if self.last_run else None,
        }

    def _windows(self, ids: List[str]) -> List[List[str]]:
        return [ids[i:i + self.window_size] for i in range(0, len(ids), self.window_size)]

    async def _check_eligible(self, ids: List[str]) -> None:
        candidates = await self.engine.store.list()
        arrived = {c.id for c in candidates if c.status == CandidateStatus.ARRIVED}
        if not arrived.intersection(ids):
            raise ValidationError("None of the selected candidates are ready for onboarding")

    async def _run_item(self, run: BatchRun, candidate_id: str, on_progress: Optional[ProgressCallback]) -> None:
        run.in_flight += 1
        await self._emit(on_progress, run)
        try:
            candidate = await self.engine.onboard_one(candidate_id, timeout=self.item_timeout or None)
            outcome = OnboardOutcome(
                candidate_id=candidate_id,
                success=True,
                message=f"{candidate.name} is now Employee {candidate.emp_id}",
                candidate_name=candidate.name,
                emp_id=candidate.emp_id,
            )
        except OnboardError as e:
            # The engine already published this failure, timeouts included
            outcome = self._failure(candidate_id, e)
        except Exception as e:
            logger.error(
                "Unexpected onboarding error",
                batch_id=run.id,
                candidate_id=candidate_id,
                error=str(e),
                exc_info=True,
            )
            outcome = OnboardOutcome(
                candidate_id=candidate_id,
                success=False,
                message=f"Unexpected error: {e}",
                error_code="INTERNAL_ERROR",
            )
            await self.notifier.outcome(outcome)
        finally:
            run.in_flight -= 1

        run.record(outcome)
        await self._emit(on_progress, run)

    @staticmethod
    def _failure(candidate_id: str, error: OnboardError) -> OnboardOutcome:
        return OnboardOutcome(
            candidate_id=candidate_id,
            success=False,
            message=error.message,
            error_code=error.code,
        )

    @staticmethod
    async def _emit(on_progress: Optional[ProgressCallback], run: BatchRun) -> None:
        if on_progress is None:
            return
        try:
            result = on_progress(run)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            # Progress reporting must not change the run's accounting
            logger.error("Progress callback failed", batch_id=run.id, error=str(e), exc_info=True)
