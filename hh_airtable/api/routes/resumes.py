"""Resume detail and paid contact unlock endpoints."""

from fastapi import APIRouter, Depends

from hh_airtable.api.deps import get_resume_client, get_session_repository
from hh_airtable.api.schemas import ResumeIdRequest, ResumeResponse
from hh_airtable.models import ResumeDetail
from hh_airtable.session import CachedSessionRepository
from hh_airtable.sync.contacts import ContactResolver
from hh_airtable.tools import ResumeClient

router = APIRouter()


def _resume_response(resume: ResumeDetail, unlocked: bool) -> ResumeResponse:
    return ResumeResponse(
        resume=resume,
        can_view_contacts=resume.paid_unlock_action is not None,
        has_contacts=bool(resume.contacts),
        contacts_unlocked=unlocked,
    )


@router.get("/resume/{resume_id}", response_model=ResumeResponse)
async def get_resume(
    resume_id: str,
    client: ResumeClient = Depends(get_resume_client),
    request_session: CachedSessionRepository = Depends(get_session_repository),
):
    """Get a single resume."""
    resume = await client.get_detail(resume_id)
    return _resume_response(resume, request_session.is_unlocked(resume_id))


@router.post("/view-contacts", response_model=ResumeResponse)
async def view_contacts(
    data: ResumeIdRequest,
    client: ResumeClient = Depends(get_resume_client),
    request_session: CachedSessionRepository = Depends(get_session_repository),
):
    """Paid contact unlock. Consumes one contact view from the employer quota."""
    resume = await client.get_detail(data.resume_id)
    enriched = await ContactResolver(client).unlock(resume)
    request_session.mark_unlocked(data.resume_id)
    return _resume_response(enriched, True)
