"""
HeadHunter resume API client.

Paginated resume search, single resume fetch, paid contact unlock and the
area directory. Every call is a single attempt; failures surface as
UpstreamError with the provider's status code.
"""

import logging
from datetime import date
from typing import Any

import httpx

from hh_airtable.config import settings
from hh_airtable.errors import PayloadError
from hh_airtable.models import ResumeDetail, SearchCriteria, SearchResult, Token, UnlockAction
from hh_airtable.sync.query_builder import build_query_params
from hh_airtable.utils.parser import parse_resume_detail, parse_search_result, read_json

logger = logging.getLogger(__name__)


class ResumeClient:
    """Bearer-authenticated client bound to one access token."""

    def __init__(
        self,
        token: Token,
        api_url: str = "https://api.hh.ru",
        user_agent: str = "HH-Airtable-App/1.0",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, token: Token) -> "ResumeClient":
        return cls(
            token,
            api_url=settings.hh_api_url,
            user_agent=settings.hh_user_agent,
            timeout=settings.request_timeout,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token.access_token}",
            "User-Agent": self.user_agent,
        }

    async def _request(self, method: str, url: str, params: dict | None = None) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.request(method, url, headers=self.headers, params=params)
        return read_json(response, "hh")

    async def search(self, criteria: SearchCriteria, today: date | None = None) -> SearchResult:
        """Run one page of a resume search."""
        params = build_query_params(criteria, today=today)
        logger.info(f"Searching resumes: text={params.get('text', '')!r} page={params['page']}")
        data = await self._request("GET", f"{self.api_url}/resumes", params=params)
        return parse_search_result(data)

    async def get_detail(self, resume_id: str) -> ResumeDetail:
        data = await self._request("GET", f"{self.api_url}/resumes/{resume_id}")
        return parse_resume_detail(data)

    async def open_contacts(self, action: UnlockAction) -> ResumeDetail:
        """
        Invoke a paid contact unlock action.

        The URL and method come from a previously fetched resume; each call
        consumes one contact-view unit of the employer's quota.
        """
        data = await self._request(action.method.upper(), action.url)
        return parse_resume_detail(data)

    async def list_areas(self) -> list[dict]:
        data = await self._request("GET", f"{self.api_url}/areas")
        if not isinstance(data, list):
            raise PayloadError("Area directory is not a list")
        return data
