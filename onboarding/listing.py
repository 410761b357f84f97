"""Filtering, sorting and summary figures for the candidate list."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List

from onboarding.models import Candidate, CandidateStatus

SORT_FIELDS = ("name", "nationality", "status", "arrival_date")
ALL = "all"


@dataclass
class CandidateFilter:
    """Search box plus status and nationality dropdowns."""

    search: str = ""
    status: str = ALL
    nationality: str = ALL

    def matches(self, candidate: Candidate) -> bool:
        query = self.search.strip().lower()
        if query:
            haystacks = [candidate.name, candidate.passport_number, candidate.emp_id or ""]
            if not any(query in text.lower() for text in haystacks):
                return False

        if self.status != ALL and candidate.status.value != self.status:
            return False
        if self.nationality != ALL and candidate.nationality != self.nationality:
            return False
        return True

    def apply(self, candidates: Iterable[Candidate]) -> List[Candidate]:
        return [c for c in candidates if self.matches(c)]


def _sort_key(field: str):
    if field == "arrival_date":
        return lambda c: c.arrival_date or date.min
    if field == "status":
        return lambda c: c.status.value
    return lambda c: (getattr(c, field) or "").lower()


def sort_candidates(
    candidates: Iterable[Candidate],
    field: str = "arrival_date",
    direction: str = "desc",
) -> List[Candidate]:
    """Sort by one of SORT_FIELDS, ``asc`` or ``desc``."""
    if field not in SORT_FIELDS:
        raise ValueError(f"Cannot sort by {field}")
    return sorted(candidates, key=_sort_key(field), reverse=direction == "desc")


def unique_nationalities(candidates: Iterable[Candidate]) -> List[str]:
    return sorted({c.nationality for c in candidates})


def summarize(candidates: Iterable[Candidate]) -> dict:
    """Pipeline counts and average checklist completion."""
    candidates = list(candidates)
    total = len(candidates)
    counts = {status: 0 for status in CandidateStatus}
    for candidate in candidates:
        counts[candidate.status] += 1

    completion_rate = sum(c.progress for c in candidates) / total if total else 0.0

    return {
        "total": total,
        "arrived": counts[CandidateStatus.ARRIVED],
        "onboarding": counts[CandidateStatus.ONBOARDING],
        "employee": counts[CandidateStatus.EMPLOYEE],
        "completion_rate": round(completion_rate, 2),
        "ready_for_one_click": counts[CandidateStatus.ARRIVED],
    }
