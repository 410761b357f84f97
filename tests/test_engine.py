import asyncio
import re
from datetime import date

import pytest

from onboarding.engine import EmpIdGenerator, OnboardingEngine
from onboarding.errors import InvalidStateError, NotFoundError, OnboardTimeoutError, StorageError, ValidationError
from onboarding.models import CandidateStatus, Checklist, OnboardingForm, OnboardingSettings, SalaryRange
from onboarding.repository import InMemoryCandidateRepository
from onboarding.store import CandidateStore

from conftest import NOW, make_candidate

EMP_ID = re.compile(r"^EMP\d{6}$")


class FailingRepository(InMemoryCandidateRepository):
    """Fails every write for the given ids."""

    def __init__(self, candidates, fail_ids):
        super().__init__(candidates)
        self.fail_ids = set(fail_ids)

    async def upsert(self, candidate):
        if candidate.id in self.fail_ids:
            raise RuntimeError("disk full")
        await super().upsert(candidate)


async def test_one_click_onboarding_promotes_to_employee(engine, store, notifier):
    candidate = await engine.onboard_one("c1")

    assert candidate.status == CandidateStatus.EMPLOYEE
    assert EMP_ID.match(candidate.emp_id)
    assert candidate.checklist.is_complete()
    assert len(candidate.checklist.to_dict()) == 8
    assert candidate.completed_at == NOW
    assert candidate.salary == 25000
    assert candidate.designation == "Site Engineer"
    assert candidate.department == "Construction"
    assert candidate.work_location == "Site A - Main Construction"
    assert candidate.start_date == NOW.date()

    stored = await store.get("c1")
    assert stored == candidate

    assert notifier.outcomes[-1].success
    assert notifier.outcomes[-1].emp_id == candidate.emp_id


@pytest.mark.parametrize("candidate_id", ["e1", "o1"])
async def test_one_click_rejects_non_arrived(engine, store, notifier, candidate_id):
    before = await store.get(candidate_id)

    with pytest.raises(InvalidStateError) as exc_info:
        await engine.onboard_one(candidate_id)

    assert exc_info.value.candidate_id == candidate_id
    assert await store.get(candidate_id) == before
    assert not notifier.outcomes[-1].success
    assert notifier.outcomes[-1].error_code == "INVALID_STATE"
    assert notifier.outcomes[-1].candidate_name == f"Worker {candidate_id}"


async def test_one_click_unknown_candidate(engine):
    with pytest.raises(NotFoundError):
        await engine.onboard_one("missing")


async def test_onboarding_twice_is_rejected(engine):
    await engine.onboard_one("c2")

    with pytest.raises(InvalidStateError):
        await engine.onboard_one("c2")


async def test_failed_write_leaves_record_unchanged(settings_manager, notifier, clock):
    repository = FailingRepository([make_candidate("c1")], fail_ids={"c1"})
    store = CandidateStore(repository)
    engine = OnboardingEngine(store, settings_manager, notifier=notifier, clock=clock, latency=0)
    before = await store.get("c1")

    with pytest.raises(StorageError) as exc_info:
        await engine.onboard_one("c1")

    assert "disk full" in exc_info.value.message
    after = await store.get("c1")
    assert after == before
    assert after.status == CandidateStatus.ARRIVED
    assert after.emp_id is None
    assert after.checklist is None
    assert notifier.outcomes[-1].error_code == "STORAGE_ERROR"


async def test_emp_ids_are_unique_with_a_frozen_clock(engine, store):
    # Every call sees the same millisecond, so ids are bumped sequentially
    ids = [(await engine.onboard_one(cid)).emp_id for cid in ("c1", "c2", "c3", "c4")]

    assert len(set(ids)) == 4
    assert all(EMP_ID.match(emp_id) for emp_id in ids)
    numbers = sorted(int(emp_id[3:]) for emp_id in ids)
    assert numbers == list(range(numbers[0], numbers[0] + 4))


async def test_emp_id_generator_skips_existing_ids(clock):
    first = EmpIdGenerator(CandidateStore(InMemoryCandidateRepository()), clock=clock)
    taken = await first.reserve()

    existing = make_candidate("e9", status=CandidateStatus.EMPLOYEE, emp_id=taken)
    generator = EmpIdGenerator(CandidateStore(InMemoryCandidateRepository([existing])), clock=clock)

    emp_id = await generator.reserve()
    assert emp_id != taken
    assert int(emp_id[3:]) == (int(taken[3:]) + 1) % 1_000_000


async def test_settings_are_read_on_every_call(engine, settings_manager):
    await settings_manager.save(
        OnboardingSettings(default_department="security", default_work_location="Training Center")
    )

    candidate = await engine.onboard_one("c4")

    assert candidate.department == "Security"
    assert candidate.work_location == "Training Center"


async def test_manual_path(engine, store):
    started = await engine.start_onboarding("c2")
    assert started.status == CandidateStatus.ONBOARDING
    assert started.checklist == Checklist()
    assert started.emp_id is None

    for item in Checklist.item_names():
        candidate = await engine.update_checklist("c2", item, True)
    assert candidate.progress == 100

    form = OnboardingForm(
        department="Maintenance",
        designation="Mason",
        salary=12000,
        work_location="Site B - Maintenance Hub",
        start_date=date(2026, 3, 10),
    )
    employee = await engine.complete_onboarding("c2", form)

    assert employee.status == CandidateStatus.EMPLOYEE
    assert EMP_ID.match(employee.emp_id)
    assert employee.salary == 12000
    assert employee.start_date == date(2026, 3, 10)
    assert (await store.get("c2")).emp_id == employee.emp_id


async def test_manual_completion_requires_checklist(engine):
    await engine.start_onboarding("c3")
    await engine.update_checklist("c3", "medical_checkup", True)
    form = OnboardingForm(
        department="Construction",
        designation="Supervisor",
        salary=14000,
        work_location="Site A - Main Construction",
        start_date=date(2026, 3, 10),
    )

    with pytest.raises(InvalidStateError, match="12% complete"):
        await engine.complete_onboarding("c3", form)


async def test_manual_completion_validates_salary(store, settings_manager, clock):
    engine = OnboardingEngine(store, settings_manager, clock=clock, latency=0, completion_threshold=0)
    await settings_manager.save(OnboardingSettings(default_salary_range=SalaryRange(min=8000, max=9000)))
    await engine.start_onboarding("c4")
    form = OnboardingForm(
        department="Construction",
        designation="Helper",
        salary=12000,
        work_location="Site A - Main Construction",
        start_date=date(2026, 3, 10),
    )

    with pytest.raises(ValidationError) as exc_info:
        await engine.complete_onboarding("c4", form)
    assert exc_info.value.field == "salary"

    form.salary = 0
    with pytest.raises(ValidationError):
        await engine.complete_onboarding("c4", form)

    assert (await store.get("c4")).status == CandidateStatus.ONBOARDING


async def test_checklist_only_editable_while_onboarding(engine):
    with pytest.raises(InvalidStateError):
        await engine.update_checklist("c1", "system_access", True)

    await engine.start_onboarding("c1")
    with pytest.raises(ValidationError):
        await engine.update_checklist("c1", "coffee_break", True)


async def test_start_onboarding_requires_arrived(engine):
    with pytest.raises(InvalidStateError):
        await engine.start_onboarding("o1")


async def test_emp_id_reservations_end_with_the_write(engine, store):
    candidate = await engine.onboard_one("c1")

    assert engine.emp_ids._reserved == set()
    # The stored record keeps the id taken from then on
    assert candidate.emp_id in await store.existing_emp_ids()
    assert (await engine.onboard_one("c2")).emp_id != candidate.emp_id


async def test_cancelled_write_releases_emp_id(settings_manager, clock):
    class HangingRepository(InMemoryCandidateRepository):
        async def upsert(self, candidate):
            await asyncio.sleep(10)

    store = CandidateStore(HangingRepository([make_candidate("c1")]))
    engine = OnboardingEngine(store, settings_manager, clock=clock, latency=0)

    task = asyncio.create_task(engine.onboard_one("c1"))
    await asyncio.sleep(0.01)
    assert len(engine.emp_ids._reserved) == 1

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert engine.emp_ids._reserved == set()


async def test_timeout_applies_only_before_the_write(settings_manager, notifier, clock, store):
    engine = OnboardingEngine(store, settings_manager, notifier=notifier, clock=clock, latency=0.5)

    with pytest.raises(OnboardTimeoutError):
        await engine.onboard_one("c1", timeout=0.01)

    assert (await store.get("c1")).status == CandidateStatus.ARRIVED
    assert notifier.outcomes[-1].error_code == "TIMEOUT"


async def test_start_onboarding_is_notified(engine, notifier):
    await engine.start_onboarding("c2")

    assert notifier.starts == ["c2"]


async def test_failed_start_is_notified(engine, notifier):
    with pytest.raises(InvalidStateError):
        await engine.start_onboarding("e1")

    assert notifier.starts == []
    assert notifier.outcomes[-1].error_code == "INVALID_STATE"
    assert notifier.outcomes[-1].message.startswith("Failed to start onboarding for")


async def test_failed_completion_is_notified(engine, notifier):
    await engine.start_onboarding("c3")
    form = OnboardingForm(
        department="Construction",
        designation="Supervisor",
        salary=14000,
        work_location="Site A - Main Construction",
        start_date=date(2026, 3, 10),
    )

    with pytest.raises(InvalidStateError):
        await engine.complete_onboarding("c3", form)

    outcome = notifier.outcomes[-1]
    assert not outcome.success
    assert outcome.candidate_id == "c3"
    assert outcome.message.startswith("Failed to complete onboarding for")
