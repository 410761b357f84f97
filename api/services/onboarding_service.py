"""Wiring of the onboarding core for the API process."""

from typing import Callable, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from api.services.candidate_repository import SqlCandidateRepository
from api.services.settings_store import SqlSettingsStore
from onboarding.batch import BatchCoordinator
from onboarding.engine import OnboardingEngine
from onboarding.notifications import LoggingNotifier, Notifier
from onboarding.repository import CandidateRepository, SettingsStore
from onboarding.selection import SelectionModel
from onboarding.settings import SettingsManager
from onboarding.store import CandidateStore


class OnboardingService:
    """One store, engine, coordinator and selection per process.

    The console is driven by a single operator, so the selection and the
    in-flight bulk run are process-wide.
    """

    def __init__(
        self,
        repository: CandidateRepository,
        settings_store: SettingsStore,
        notifier: Optional[Notifier] = None,
        engine_options: Optional[dict] = None,
        coordinator_options: Optional[dict] = None,
    ):
        self.store = CandidateStore(repository)
        self.settings = SettingsManager(settings_store)
        self.notifier = notifier or LoggingNotifier()
        self.engine = OnboardingEngine(
            self.store,
            self.settings,
            notifier=self.notifier,
            **(engine_options or {}),
        )
        self.coordinator = BatchCoordinator(self.engine, **(coordinator_options or {}))
        self.selection = SelectionModel()

    @classmethod
    def from_session_factory(cls, session_factory: Callable[[], Session], **kwargs) -> "OnboardingService":
        return cls(
            SqlCandidateRepository(session_factory),
            SqlSettingsStore(session_factory),
            **kwargs,
        )


def get_onboarding_service(request: Request) -> OnboardingService:
    """Dependency returning the app's onboarding service."""
    return request.app.state.onboarding
