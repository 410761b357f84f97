"""Candidate store: the only writer of candidate records."""

from datetime import date
from typing import List, Optional, Set

import structlog

from onboarding.errors import NotFoundError, OnboardError, StorageError, ValidationError
from onboarding.models import Candidate, CandidateStatus
from onboarding.repository import CandidateRepository

logger = structlog.get_logger()


class CandidateStore:
    """Holds candidate records on top of an injected repository.

    Readers always get copies and writers always replace the whole record,
    so no partially applied update is ever visible.
    """

    def __init__(self, repository: CandidateRepository):
        self.repository = repository

    async def list(self) -> List[Candidate]:
        try:
            return await self.repository.list()
        except OnboardError:
            raise
        except Exception as e:
            logger.error("Candidate list failed", error=str(e))
            raise StorageError(f"Failed to list candidates: {e}") from e

    async def get(self, candidate_id: str) -> Candidate:
        """Get a candidate by id.

        Raises:
            NotFoundError: If no candidate has this id
            StorageError: If the repository fails
        """
        try:
            candidate = await self.repository.get(candidate_id)
        except OnboardError:
            raise
        except Exception as e:
            logger.error("Candidate read failed", candidate_id=candidate_id, error=str(e))
            raise StorageError(f"Failed to read candidate {candidate_id}: {e}", candidate_id) from e

        if candidate is None:
            raise NotFoundError(candidate_id)
        return candidate

    async def update(self, candidate: Candidate) -> Candidate:
        """Replace the stored record for ``candidate.id`` in one write."""
        record = candidate.copy()
        try:
            await self.repository.upsert(record)
        except OnboardError:
            raise
        except Exception as e:
            logger.error("Candidate write failed", candidate_id=candidate.id, error=str(e))
            raise StorageError(f"Failed to save candidate {candidate.id}: {e}", candidate.id) from e
        return record.copy()

    async def register(
        self,
        name: str,
        nationality: str,
        passport_number: str,
        position: Optional[str] = None,
        arrival_date: Optional[date] = None,
    ) -> Candidate:
        """Create a new candidate in the ``arrived`` status."""
        if not name.strip():
            raise ValidationError("Candidate name is required", field="name")
        if not passport_number.strip():
            raise ValidationError("Passport number is required", field="passport_number")

        candidate = Candidate(
            id=Candidate.new_id(),
            name=name.strip(),
            nationality=nationality.strip(),
            passport_number=passport_number.strip(),
            position=position.strip() if position else None,
            status=CandidateStatus.ARRIVED,
            arrival_date=arrival_date,
        )
        saved = await self.update(candidate)
        logger.info("Candidate registered", candidate_id=saved.id, nationality=saved.nationality)
        return saved

    async def existing_emp_ids(self) -> Set[str]:
        return {c.emp_id for c in await self.list() if c.emp_id}
