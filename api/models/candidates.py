"""Candidate model for people in the onboarding pipeline."""

from sqlalchemy import Column, Date, DateTime, Integer, String, Text, Index

from api.config.database import Base


class CandidateRecord(Base):
    """
    Candidates from arrival through to employee.

    Status: arrived, onboarding, employee
    """

    __tablename__ = "candidates"

    id = Column(String(32), primary_key=True)

    # Source data
    name = Column(String(255), nullable=False)
    nationality = Column(String(100), nullable=False)
    passport_number = Column(String(50), nullable=False)
    position = Column(String(255), nullable=True)
    arrival_date = Column(Date, nullable=True)

    # Lifecycle
    status = Column(String(20), nullable=False, default="arrived")

    # Checklist stored as JSON string, NULL until onboarding starts
    # {"document_verification": true, "medical_checkup": false, ...}
    checklist = Column(Text, nullable=True)

    # Employment details (set once status = employee)
    emp_id = Column(String(20), nullable=True, unique=True)
    department = Column(String(100), nullable=True)
    designation = Column(String(255), nullable=True)
    salary = Column(Integer, nullable=True)
    work_location = Column(String(255), nullable=True)
    manager_id = Column(String(50), nullable=True)
    start_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    # Metadata
    created_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_candidates_status", "status"),
        Index("idx_candidates_nationality", "nationality"),
    )

    def __repr__(self) -> str:
        return f"<CandidateRecord(id={self.id}, name={self.name}, status={self.status})>"
