"""Persistence collaborators for candidates and onboarding settings."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from onboarding.models import Candidate


class CandidateRepository(ABC):
    """Abstract candidate storage backend."""

    @abstractmethod
    async def list(self) -> List[Candidate]:
        """Return every stored candidate."""
        pass

    @abstractmethod
    async def get(self, candidate_id: str) -> Optional[Candidate]:
        """Return the candidate with ``candidate_id`` or None."""
        pass

    @abstractmethod
    async def upsert(self, candidate: Candidate) -> None:
        """Insert or fully replace a candidate record."""
        pass


class InMemoryCandidateRepository(CandidateRepository):
    """Dict-backed repository; records are copied in and out."""

    def __init__(self, candidates: Optional[List[Candidate]] = None):
        self._records: Dict[str, Candidate] = {}
        for candidate in candidates or []:
            self._records[candidate.id] = candidate.copy()

    async def list(self) -> List[Candidate]:
        return [c.copy() for c in self._records.values()]

    async def get(self, candidate_id: str) -> Optional[Candidate]:
        candidate = self._records.get(candidate_id)
        return candidate.copy() if candidate else None

    async def upsert(self, candidate: Candidate) -> None:
        self._records[candidate.id] = candidate.copy()


class SettingsStore(ABC):
    """Load/save of the onboarding settings as a key-value blob."""

    @abstractmethod
    async def load(self) -> Optional[dict]:
        """Return the saved blob, or None if nothing was saved yet."""
        pass

    @abstractmethod
    async def save(self, data: dict) -> None:
        """Persist the blob."""
        pass


class InMemorySettingsStore(SettingsStore):
    def __init__(self, data: Optional[dict] = None):
        self._data = dict(data) if data else None

    async def load(self) -> Optional[dict]:
        return dict(self._data) if self._data is not None else None

    async def save(self, data: dict) -> None:
        self._data = dict(data)
