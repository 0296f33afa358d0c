"""Save-to-store endpoints: single, per-item API and batch."""

from fastapi import APIRouter, Depends, Request, Response

from hh_airtable.api.deps import get_orchestrator, get_session_repository
from hh_airtable.api.limiter import limiter
from hh_airtable.api.schemas import BatchSaveRequest, ResumeIdRequest, SaveResumeRequest, SaveResumeResponse
from hh_airtable.models import SyncOutcome, SyncReport
from hh_airtable.session import CachedSessionRepository
from hh_airtable.sync.orchestrator import SyncOrchestrator

router = APIRouter()


def _to_item_response(outcome: SyncOutcome) -> SaveResumeResponse:
    if outcome.status == "duplicate":
        return SaveResumeResponse(success=True, is_duplicate=True)
    if outcome.status == "failed":
        return SaveResumeResponse(success=False, error=outcome.reason)
    return SaveResumeResponse(
        success=True,
        paid_contact_opened=outcome.paid,
        had_free_contacts=outcome.had_free_contacts,
    )


@router.post("/save-to-airtable", response_model=SyncOutcome)
@limiter.limit("30/minute")
async def save_to_airtable(
    request: Request,
    response: Response,
    data: ResumeIdRequest,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
    request_session: CachedSessionRepository = Depends(get_session_repository),
):
    """Save one resume; paid contacts are used only if unlocked earlier in this session."""
    outcome = await orchestrator.save_one(
        data.resume_id, allow_paid_unlock=request_session.is_unlocked(data.resume_id)
    )
    if outcome.status == "failed":
        response.status_code = 502
    return outcome


@router.post(
    "/api/save-resume",
    response_model=SaveResumeResponse,
    response_model_exclude_none=True,
)
@limiter.limit("60/minute")
async def save_resume(
    request: Request,
    data: SaveResumeRequest,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
):
    """Per-item save for callers that drive a batch themselves."""
    outcome = await orchestrator.save_one(data.resume_id, allow_paid_unlock=data.open_paid_contacts)
    return _to_item_response(outcome)


@router.post("/api/save-batch", response_model=SyncReport)
@limiter.limit("10/minute")
async def save_batch(
    request: Request,
    data: BatchSaveRequest,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
):
    """Save resumes sequentially with pacing; returns the aggregated report."""
    return await orchestrator.run_batch(data.resume_ids, allow_paid_unlock=data.open_paid_contacts)
