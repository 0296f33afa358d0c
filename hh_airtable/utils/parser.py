"""
Ingress parsing for provider and store payloads.

Every JSON body that crosses into the pipeline goes through here:
- Non-2xx responses become UpstreamError
- Bodies that are not JSON become PayloadError
- Resume/search payloads are validated into typed models
"""

import json
from typing import Any

import httpx
from pydantic import ValidationError

from hh_airtable.errors import PayloadError, UpstreamError
from hh_airtable.models import ResumeDetail, SearchResult


def read_json(response: httpx.Response, service: str) -> Any:
    """
    Check status and decode a JSON response body.

    Args:
        response: Completed httpx response
        service: Name used in error messages ("hh", "airtable")

    Returns:
        Decoded JSON value
    """
    if not response.is_success:
        raise UpstreamError(service, response.status_code, response.text)
    return decode_json(response.text, service)


def decode_json(text: str, service: str) -> Any:
    """Decode a JSON body or raise PayloadError."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadError(f"{service} returned non-JSON body: {e}") from e


def parse_resume_detail(data: Any) -> ResumeDetail:
    """Validate a single-resume payload."""
    if not isinstance(data, dict):
        raise PayloadError(f"Expected resume object, got {type(data).__name__}")
    try:
        return ResumeDetail.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid resume payload: {_first_error(e)}") from e


def parse_search_result(data: Any) -> SearchResult:
    """Validate a paginated search payload."""
    if not isinstance(data, dict):
        raise PayloadError(f"Expected search object, got {type(data).__name__}")
    try:
        return SearchResult.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid search payload: {_first_error(e)}") from e


def _first_error(error: ValidationError) -> str:
    """Compact 'loc: msg' for the first validation error."""
    first = error.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc}: {first.get('msg', 'invalid')}"
