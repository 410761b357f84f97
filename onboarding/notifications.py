"""Notification collaborators for onboarding outcomes."""

from abc import ABC, abstractmethod
from typing import List

import structlog

from onboarding.models import BatchRun, Candidate, OnboardOutcome

logger = structlog.get_logger()


class Notifier(ABC):
    """Receives per-candidate outcomes, manual starts and bulk summaries."""

    @abstractmethod
    async def outcome(self, outcome: OnboardOutcome) -> None:
        pass

    @abstractmethod
    async def started(self, candidate: Candidate) -> None:
        pass

    @abstractmethod
    async def batch_finished(self, run: BatchRun) -> None:
        pass


class LoggingNotifier(Notifier):
    """Writes outcomes to the structured log."""

    async def outcome(self, outcome: OnboardOutcome) -> None:
        if outcome.success:
            logger.info(
                "Onboarding complete",
                candidate_id=outcome.candidate_id,
                emp_id=outcome.emp_id,
                message=outcome.message,
            )
        else:
            logger.warning(
                "Onboarding failed",
                candidate_id=outcome.candidate_id,
                error_code=outcome.error_code,
                message=outcome.message,
            )

    async def started(self, candidate: Candidate) -> None:
        logger.info(
            "Onboarding process started",
            candidate_id=candidate.id,
            message=f"Started onboarding process for {candidate.name}",
        )

    async def batch_finished(self, run: BatchRun) -> None:
        logger.info("Bulk onboarding complete", **run.summary())


class RecordingNotifier(Notifier):
    """Keeps outcomes in memory for later rendering."""

    def __init__(self):
        self.outcomes: List[OnboardOutcome] = []
        self.batches: List[dict] = []
        self.starts: List[str] = []

    async def outcome(self, outcome: OnboardOutcome) -> None:
        self.outcomes.append(outcome)

    async def started(self, candidate: Candidate) -> None:
        self.starts.append(candidate.id)

    async def batch_finished(self, run: BatchRun) -> None:
        self.batches.append(run.summary())
