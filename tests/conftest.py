import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from onboarding.batch import BatchCoordinator
from onboarding.engine import OnboardingEngine
from onboarding.models import Candidate, CandidateStatus, Checklist
from onboarding.notifications import RecordingNotifier
from onboarding.repository import InMemoryCandidateRepository, InMemorySettingsStore
from onboarding.settings import SettingsManager
from onboarding.store import CandidateStore

TODAY = date(2026, 3, 2)
NOW = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)


def make_candidate(
    candidate_id: str,
    nationality: str = "India",
    position: Optional[str] = None,
    status: CandidateStatus = CandidateStatus.ARRIVED,
    name: Optional[str] = None,
    **kwargs,
) -> Candidate:
    if status == CandidateStatus.EMPLOYEE:
        kwargs.setdefault("emp_id", f"EMP-{candidate_id}")
        kwargs.setdefault("checklist", Checklist.completed())
    elif status == CandidateStatus.ONBOARDING:
        kwargs.setdefault("checklist", Checklist())
    return Candidate(
        id=candidate_id,
        name=name or f"Worker {candidate_id}",
        nationality=nationality,
        passport_number=f"P{candidate_id.upper()}",
        position=position,
        status=status,
        created_at=NOW,
        **kwargs,
    )


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def clock():
    return lambda: NOW


@pytest.fixture()
def repository() -> InMemoryCandidateRepository:
    return InMemoryCandidateRepository([
        make_candidate("c1", nationality="Philippines", position="Site Engineer"),
        make_candidate("c2", nationality="Bangladesh", position="Mason"),
        make_candidate("c3", nationality="India", position="Site Supervisor"),
        make_candidate("c4", nationality="Nepal"),
        make_candidate("c5", nationality="Kenya", position="Electrician"),
        make_candidate("e1", nationality="Sri Lanka", status=CandidateStatus.EMPLOYEE),
        make_candidate("o1", nationality="Pakistan", status=CandidateStatus.ONBOARDING),
    ])


@pytest.fixture()
def store(repository) -> CandidateStore:
    return CandidateStore(repository)


@pytest.fixture()
def settings_manager() -> SettingsManager:
    return SettingsManager(InMemorySettingsStore())


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def engine(store, settings_manager, notifier, clock) -> OnboardingEngine:
    return OnboardingEngine(
        store,
        settings_manager,
        notifier=notifier,
        clock=clock,
        latency=0,
        emp_id_prefix="EMP",
        completion_threshold=100,
    )


@pytest.fixture()
def coordinator(engine) -> BatchCoordinator:
    return BatchCoordinator(engine, window_size=3, window_delay=0, item_timeout=5)


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{(tmp_path / 'test.db').as_posix()}"
