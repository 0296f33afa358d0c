"""
Search query composition.

Turns structured SearchCriteria into the provider's resume-search query
parameters. The provider reads spaces in `text` as implicit AND, so
must-have skills are appended as plain words and nice-to-have skills as an
OR chain.
"""

from datetime import date, timedelta

from hh_airtable.models import SearchCriteria

# search_field value -> provider field restriction
FIELD_SCOPES = {
    "title": "name",
    "experience": "description",
}


def split_list(raw: str | None) -> list[str]:
    """Split a comma-separated form value, trimming and dropping empties."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def compose_text(criteria: SearchCriteria) -> str:
    """
    Build the free-text query.

    Order: free text, must-have skills, nice-to-have OR chain, optional
    quoting of everything so far, then one NOT clause per excluded word.
    """
    parts = [criteria.text.strip()] if criteria.text.strip() else []

    if criteria.must_have_skills:
        parts.append(" ".join(criteria.must_have_skills))

    if criteria.nice_to_have_skills:
        parts.append(" OR ".join(criteria.nice_to_have_skills))

    text = " ".join(parts)

    if criteria.exact_phrase and text:
        text = f'"{text}"'

    for word in criteria.excluded_words:
        text += f' NOT "{word}"'

    return text.strip()


def build_query_params(criteria: SearchCriteria, today: date | None = None) -> dict[str, str]:
    """
    Build provider query parameters for one search page.

    Args:
        criteria: Structured search criteria
        today: Reference date for updated_within_days (defaults to today)

    Returns:
        Query parameters; optional filters are present only when set
    """
    params = {
        "text": compose_text(criteria),
        "area": criteria.area or "1",
        "per_page": str(criteria.per_page),
        "page": str(criteria.page),
    }

    if criteria.experience:
        params["experience"] = criteria.experience
    if criteria.salary_from is not None:
        params["salary_from"] = str(criteria.salary_from)

    scope = FIELD_SCOPES.get(criteria.search_field)
    if scope:
        params["search_field"] = scope

    if criteria.updated_within_days is not None:
        reference = today or date.today()
        params["date_from"] = (reference - timedelta(days=criteria.updated_within_days)).isoformat()

    return params
