"""Pydantic schemas for Candidate endpoints."""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel


class CandidateCreate(CamelModel):
    """Schema for registering an arrived candidate."""

    name: str = Field(..., min_length=1, max_length=255)
    nationality: str = Field(..., min_length=1, max_length=100)
    passport_number: str = Field(..., min_length=1, max_length=50)
    position: Optional[str] = Field(None, max_length=255)
    arrival_date: Optional[date] = None


class CandidateResponse(CamelModel):
    """Schema for a candidate at any lifecycle stage."""

    id: str
    name: str
    nationality: str
    passport_number: str
    position: Optional[str] = None
    status: str
    arrival_date: Optional[date] = None
    checklist: Optional[dict[str, bool]] = None
    progress: float = 0.0
    emp_id: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    salary: Optional[int] = None
    work_location: Optional[str] = None
    manager_id: Optional[str] = None
    start_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def status_value(cls, v):
        return getattr(v, "value", v)

    @field_validator("checklist", mode="before")
    @classmethod
    def checklist_dict(cls, v):
        if v is not None and hasattr(v, "to_dict"):
            return v.to_dict()
        return v


class CandidateSummary(CamelModel):
    """Pipeline counts for the summary cards."""

    total: int
    arrived: int
    onboarding: int
    employee: int
    completion_rate: float
    ready_for_one_click: int
