"""One-click, bulk and manual onboarding endpoints."""

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from api.schemas.candidates import CandidateResponse
from api.schemas.onboarding import (
    BatchRunResponse,
    BulkOnboardingRequest,
    ChecklistUpdate,
    CompleteOnboardingRequest,
    OnboardingPackageResponse,
    SelectAllRequest,
    SelectionResponse,
    SelectionToggle,
)
from api.services.onboarding_service import OnboardingService, get_onboarding_service
from onboarding.listing import CandidateFilter
from onboarding.models import OnboardingForm

logger = structlog.get_logger()
router = APIRouter()


@router.get("/defaults/{candidate_id}", response_model=OnboardingPackageResponse)
async def preview_defaults(
    candidate_id: str,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Preview the smart defaults one-click onboarding would apply."""
    candidate = await service.store.get(candidate_id)
    settings = await service.settings.get()
    today = datetime.now(timezone.utc).date()
    package = service.engine.resolver.resolve(candidate, settings, today)
    return OnboardingPackageResponse.model_validate(package)


@router.post("/{candidate_id}/one-click", response_model=CandidateResponse)
async def one_click_onboarding(
    candidate_id: str,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Onboard an arrived candidate straight to employee."""
    candidate = await service.engine.onboard_one(candidate_id)
    return CandidateResponse.model_validate(candidate)


@router.post("/bulk", response_model=BatchRunResponse)
async def bulk_onboarding(
    data: BulkOnboardingRequest,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Onboard the given candidates, or the current selection, in windows."""
    use_selection = data.candidate_ids is None
    if use_selection:
        candidate_ids = service.selection.ids(await service.store.list())
    else:
        candidate_ids = data.candidate_ids

    run = await service.coordinator.run_bulk(candidate_ids)

    if use_selection:
        service.selection.clear()
    return BatchRunResponse.from_run(run)


@router.get("/bulk/current", response_model=Optional[BatchRunResponse])
async def current_bulk_run(
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Live progress of the running bulk onboarding, else the last finished one."""
    run = service.coordinator.current_run or service.coordinator.last_run
    if run is None:
        return None
    return BatchRunResponse.from_run(run)


@router.post("/{candidate_id}/start", response_model=CandidateResponse)
async def start_onboarding(
    candidate_id: str,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Start manual onboarding with an empty checklist."""
    candidate = await service.engine.start_onboarding(candidate_id)
    return CandidateResponse.model_validate(candidate)


@router.patch("/{candidate_id}/checklist", response_model=CandidateResponse)
async def update_checklist(
    candidate_id: str,
    data: ChecklistUpdate,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Tick or untick one checklist item."""
    candidate = await service.engine.update_checklist(candidate_id, data.item, data.done)
    return CandidateResponse.model_validate(candidate)


@router.post("/{candidate_id}/complete", response_model=CandidateResponse)
async def complete_onboarding(
    candidate_id: str,
    data: CompleteOnboardingRequest,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Complete manual onboarding with operator-entered details."""
    form = OnboardingForm(**data.model_dump())
    candidate = await service.engine.complete_onboarding(candidate_id, form)
    return CandidateResponse.model_validate(candidate)


@router.get("/selection", response_model=SelectionResponse)
async def get_selection(
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Candidates currently checked for bulk onboarding."""
    ids = service.selection.ids(await service.store.list())
    return SelectionResponse(candidate_ids=ids, count=len(ids))


@router.post("/selection/toggle", response_model=SelectionResponse)
async def toggle_selection(
    data: SelectionToggle,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Check or uncheck one candidate."""
    candidate = await service.store.get(data.candidate_id)
    service.selection.toggle(candidate, data.selected)
    ids = service.selection.ids(await service.store.list())
    return SelectionResponse(candidate_ids=ids, count=len(ids))


@router.post("/selection/all", response_model=SelectionResponse)
async def select_all(
    data: SelectAllRequest,
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Select every arrived candidate matching the filters, or clear."""
    candidates = await service.store.list()
    visible = CandidateFilter(
        search=data.search,
        status=data.status,
        nationality=data.nationality,
    ).apply(candidates)
    ids = service.selection.select_all(visible, data.selected)
    return SelectionResponse(candidate_ids=ids, count=len(ids))


@router.delete("/selection", status_code=204)
async def clear_selection(
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Clear the selection."""
    service.selection.clear()
    return Response(status_code=204)
