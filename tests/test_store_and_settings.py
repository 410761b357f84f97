import pytest

from onboarding.errors import NotFoundError, StorageError, ValidationError
from onboarding.models import CandidateStatus, OnboardingSettings, SalaryRange
from onboarding.repository import InMemoryCandidateRepository, InMemorySettingsStore, SettingsStore
from onboarding.settings import SettingsManager
from onboarding.store import CandidateStore


class BrokenRepository(InMemoryCandidateRepository):
    async def get(self, candidate_id):
        raise ConnectionError("database unreachable")


class BrokenSettingsStore(SettingsStore):
    async def load(self):
        raise ConnectionError("database unreachable")

    async def save(self, data):
        raise ConnectionError("database unreachable")


async def test_store_returns_copies(store):
    candidate = await store.get("c1")
    candidate.name = "Changed"

    assert (await store.get("c1")).name != "Changed"


async def test_store_get_unknown_raises_not_found(store):
    with pytest.raises(NotFoundError) as exc_info:
        await store.get("nobody")
    assert exc_info.value.candidate_id == "nobody"


async def test_store_wraps_repository_errors():
    store = CandidateStore(BrokenRepository())

    with pytest.raises(StorageError, match="database unreachable"):
        await store.get("c1")


async def test_register_creates_arrived_candidate_with_fresh_id(store):
    first = await store.register("  Amal Perera ", "Sri Lanka", "N1234567", position="Welder")
    second = await store.register("Amal Perera", "Sri Lanka", "N1234568")

    assert first.status == CandidateStatus.ARRIVED
    assert first.name == "Amal Perera"
    assert first.emp_id is None
    assert first.checklist is None
    assert first.id != second.id
    assert (await store.get(first.id)).position == "Welder"


async def test_register_requires_name(store):
    with pytest.raises(ValidationError):
        await store.register(" ", "Nepal", "X1")


async def test_settings_default_until_saved():
    manager = SettingsManager(InMemorySettingsStore())

    settings = await manager.get()

    assert settings == OnboardingSettings()
    assert settings.default_department == "construction"
    assert settings.default_salary_range == SalaryRange(min=8000, max=25000)


async def test_settings_round_trip_through_blob():
    store = InMemorySettingsStore()
    manager = SettingsManager(store)

    await manager.save(OnboardingSettings(default_department="security", auto_assign_manager=False))

    assert (await store.load())["default_department"] == "security"
    loaded = await manager.get()
    assert loaded.default_department == "security"
    assert loaded.auto_assign_manager is False


@pytest.mark.parametrize(
    "settings",
    [
        OnboardingSettings(default_salary_range=SalaryRange(min=20000, max=10000)),
        OnboardingSettings(default_salary_range=SalaryRange(min=0, max=10000)),
        OnboardingSettings(default_work_location=" "),
    ],
)
async def test_malformed_settings_are_rejected(settings):
    store = InMemorySettingsStore()

    with pytest.raises(ValidationError):
        await SettingsManager(store).save(settings)
    assert await store.load() is None


async def test_malformed_blob_is_a_validation_error():
    manager = SettingsManager(InMemorySettingsStore({"default_salary_range": {"min": 1}}))

    with pytest.raises(ValidationError):
        await manager.get()


async def test_settings_store_failures_are_storage_errors():
    manager = SettingsManager(BrokenSettingsStore())

    with pytest.raises(StorageError):
        await manager.get()
    with pytest.raises(StorageError):
        await manager.save(OnboardingSettings())
