"""
HeadHunter OAuth client.

Builds the authorize redirect, exchanges authorization codes for tokens and
fetches the logged-in user's identity.
"""

import logging
from datetime import UTC, datetime
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from hh_airtable.config import settings
from hh_airtable.errors import AuthExchangeFailed, PayloadError
from hh_airtable.models import Token, UserIdentity
from hh_airtable.utils.parser import decode_json

logger = logging.getLogger(__name__)


class OAuthExchanger:
    """Authorization-code grant against the provider."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        oauth_url: str = "https://hh.ru/oauth",
        api_url: str = "https://api.hh.ru",
        user_agent: str = "HH-Airtable-App/1.0",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.oauth_url = oauth_url.rstrip("/")
        self.api_url = api_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "OAuthExchanger":
        return cls(
            client_id=settings.hh_client_id,
            client_secret=settings.hh_client_secret,
            redirect_uri=settings.hh_redirect_uri,
            oauth_url=settings.hh_oauth_url,
            api_url=settings.hh_api_url,
            user_agent=settings.hh_user_agent,
            timeout=settings.request_timeout,
        )

    def authorize_url(self) -> str:
        query = urlencode(
            {
                "response_type": "code",
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
            }
        )
        return f"{self.oauth_url}/authorize?{query}"

    async def exchange_code(self, code: str) -> Token:
        """
        Exchange an authorization code for tokens.

        Args:
            code: Code from the provider's redirect to our callback

        Returns:
            Token stamped with the time it was obtained

        Raises:
            AuthExchangeFailed: Non-2xx status, a body that is not JSON, an error
                field, or no access_token
        """
        form = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "code": code,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(f"{self.oauth_url}/token", data=form)

        try:
            data = decode_json(response.text, "hh")
        except PayloadError as e:
            raise AuthExchangeFailed(str(e)) from e

        if not isinstance(data, dict):
            raise AuthExchangeFailed("Token endpoint returned unexpected payload")
        if data.get("error"):
            raise AuthExchangeFailed(data.get("error_description") or data["error"])

        if not response.is_success:
            raise AuthExchangeFailed(f"Token endpoint returned {response.status_code}")

        try:
            token = Token.model_validate({**data, "obtained_at": datetime.now(UTC)})
        except ValidationError as e:
            raise AuthExchangeFailed(f"Invalid token payload: {e.error_count()} errors") from e

        if not token.is_usable:
            raise AuthExchangeFailed("Token endpoint returned no access_token")
        return token

    async def fetch_identity(self, token: Token) -> UserIdentity:
        """Best-effort /me lookup; anything missing comes back as None/False."""
        headers = {
            "Authorization": f"Bearer {token.access_token}",
            "User-Agent": self.user_agent,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(f"{self.api_url}/me", headers=headers)

        if not response.is_success:
            logger.warning(f"Identity fetch failed with status {response.status_code}")
            return UserIdentity()

        try:
            data = decode_json(response.text, "hh")
        except PayloadError as e:
            logger.warning(f"Identity fetch returned unreadable body: {e}")
            return UserIdentity()

        if not isinstance(data, dict):
            return UserIdentity()

        employer = data.get("employer") or None
        if not isinstance(employer, dict):
            employer = None
        employer_id = employer.get("id") if employer else None
        return UserIdentity(
            email=data.get("email"),
            employer=employer.get("name") if employer else None,
            employer_id=str(employer_id) if employer_id is not None else None,
            is_employer=employer is not None,
        )
