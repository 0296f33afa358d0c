"""Resume search endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from hh_airtable.api.deps import get_resume_client
from hh_airtable.api.limiter import limiter
from hh_airtable.models import SearchCriteria, SearchResult
from hh_airtable.sync.query_builder import split_list
from hh_airtable.tools import ResumeClient

router = APIRouter()


@router.get("/search-results", response_model=SearchResult)
@limiter.limit("30/minute")
async def search_results(
    request: Request,
    text: str = "",
    area: str = "1",
    experience: str | None = None,
    salary_from: str | None = None,
    per_page: str | None = None,
    page: str | None = None,
    skills_must_have: str | None = None,
    skills_nice_to_have: str | None = None,
    excluded_words: str | None = None,
    search_field: str = "all",
    exact_phrase: str | None = None,
    updated_within_days: str | None = None,
    client: ResumeClient = Depends(get_resume_client),
):
    """
    Search resumes. Skill and exclusion lists are comma-separated.

    Fields arrive as raw form strings; a blank field counts as not provided.
    """
    try:
        criteria = SearchCriteria(
            text=text,
            area=area or "1",
            experience=experience or None,
            salary_from=salary_from or None,
            per_page=per_page or 20,
            page=page or 0,
            must_have_skills=split_list(skills_must_have),
            nice_to_have_skills=split_list(skills_nice_to_have),
            excluded_words=split_list(excluded_words),
            search_field=search_field or "all",
            exact_phrase=exact_phrase or False,
            updated_within_days=updated_within_days or None,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
        )

    return await client.search(criteria)


@router.get("/areas")
async def list_areas(client: ResumeClient = Depends(get_resume_client)):
    """Provider area directory (regions and cities)."""
    return await client.list_areas()
