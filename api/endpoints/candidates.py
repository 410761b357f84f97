"""Candidate list and registration endpoints."""

from typing import List

import structlog
from fastapi import APIRouter, Depends, Query

from api.middleware.error_handler import ValidationAPIError
from api.schemas.candidates import CandidateCreate, CandidateResponse, CandidateSummary
from api.services.onboarding_service import OnboardingService, get_onboarding_service
from onboarding.listing import SORT_FIELDS, CandidateFilter, sort_candidates, summarize, unique_nationalities

logger = structlog.get_logger()
router = APIRouter()


@router.get("", response_model=List[CandidateResponse])
async def list_candidates(
    search: str = Query(""),
    status: str = Query("all"),
    nationality: str = Query("all"),
    sort: str = Query("arrival_date"),
    direction: str = Query("desc", pattern="^(asc|desc)$"),
    service: OnboardingService = Depends(get_onboarding_service),
):
    """List candidates with search, filters and sorting."""
    if sort not in SORT_FIELDS:
        raise ValidationAPIError(f"Cannot sort by {sort}", field="sort")

    candidates = await service.store.list()
    visible = CandidateFilter(search=search, status=status, nationality=nationality).apply(candidates)
    return [CandidateResponse.model_validate(c) for c in sort_candidates(visible, sort, direction)]


@router.post("", response_model=CandidateResponse, status_code=201)
async def register_candidate(
    data: CandidateCreate,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Register a newly arrived candidate."""
    candidate = await service.store.register(
        name=data.name,
        nationality=data.nationality,
        passport_number=data.passport_number,
        position=data.position,
        arrival_date=data.arrival_date,
    )
    return CandidateResponse.model_validate(candidate)


@router.get("/summary", response_model=CandidateSummary)
async def candidate_summary(
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Pipeline counts and average checklist completion."""
    return CandidateSummary(**summarize(await service.store.list()))


@router.get("/nationalities", response_model=List[str])
async def candidate_nationalities(
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Distinct nationalities for the filter dropdown."""
    return unique_nationalities(await service.store.list())


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: str,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Get one candidate."""
    return CandidateResponse.model_validate(await service.store.get(candidate_id))
