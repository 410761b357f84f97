"""SQLAlchemy-backed candidate repository."""

import json
from datetime import timezone
from typing import Callable, List, Optional

import structlog
from sqlalchemy.orm import Session

from api.config.database import SessionLocal
from api.models import CandidateRecord
from onboarding.models import Candidate, CandidateStatus, Checklist
from onboarding.repository import CandidateRepository

logger = structlog.get_logger()


def _aware(value):
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def record_to_candidate(record: CandidateRecord) -> Candidate:
    """Convert an ORM row to a domain candidate."""
    return Candidate(
        id=record.id,
        name=record.name,
        nationality=record.nationality,
        passport_number=record.passport_number,
        position=record.position,
        status=CandidateStatus(record.status),
        arrival_date=record.arrival_date,
        checklist=Checklist.from_dict(json.loads(record.checklist)) if record.checklist else None,
        emp_id=record.emp_id,
        department=record.department,
        designation=record.designation,
        salary=record.salary,
        work_location=record.work_location,
        manager_id=record.manager_id,
        start_date=record.start_date,
        notes=record.notes,
        created_at=_aware(record.created_at),
        completed_at=_aware(record.completed_at),
    )


def apply_candidate(record: CandidateRecord, candidate: Candidate) -> None:
    """Overwrite every column of ``record`` from ``candidate``."""
    record.name = candidate.name
    record.nationality = candidate.nationality
    record.passport_number = candidate.passport_number
    record.position = candidate.position
    record.status = candidate.status.value
    record.arrival_date = candidate.arrival_date
    record.checklist = json.dumps(candidate.checklist.to_dict()) if candidate.checklist else None
    record.emp_id = candidate.emp_id
    record.department = candidate.department
    record.designation = candidate.designation
    record.salary = candidate.salary
    record.work_location = candidate.work_location
    record.manager_id = candidate.manager_id
    record.start_date = candidate.start_date
    record.notes = candidate.notes
    record.created_at = candidate.created_at
    record.completed_at = candidate.completed_at


class SqlCandidateRepository(CandidateRepository):
    """Candidate repository on the ``candidates`` table.

    Uses a fresh session per operation so concurrent onboarding tasks never
    share one.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    async def list(self) -> List[Candidate]:
        db = self.session_factory()
        try:
            records = db.query(CandidateRecord).all()
            return [record_to_candidate(r) for r in records]
        finally:
            db.close()

    async def get(self, candidate_id: str) -> Optional[Candidate]:
        db = self.session_factory()
        try:
            record = db.get(CandidateRecord, candidate_id)
            return record_to_candidate(record) if record else None
        finally:
            db.close()

    async def upsert(self, candidate: Candidate) -> None:
        db = self.session_factory()
        try:
            record = db.get(CandidateRecord, candidate.id)
            if record is None:
                record = CandidateRecord(id=candidate.id)
                db.add(record)
            apply_candidate(record, candidate)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
