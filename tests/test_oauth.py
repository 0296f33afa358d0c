from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from conftest import mock_transport
from hh_airtable.errors import AuthExchangeFailed
from hh_airtable.models import Token
from hh_airtable.tools import OAuthExchanger


def make_exchanger(handler) -> OAuthExchanger:
    return OAuthExchanger(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://localhost:3000/callback",
        transport=mock_transport(handler),
    )


def test_authorize_url():
    url = make_exchanger(lambda r: httpx.Response(200)).authorize_url()
    parsed = urlparse(url)
    query = parse_qs(parsed.query)

    assert parsed.netloc == "hh.ru"
    assert parsed.path == "/oauth/authorize"
    assert query == {
        "response_type": ["code"],
        "client_id": ["client-id"],
        "redirect_uri": ["http://localhost:3000/callback"],
    }


@pytest.mark.asyncio
async def test_exchange_code_posts_form():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers["content-type"]
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(
            200,
            json={"access_token": "at", "refresh_token": "rt", "expires_in": 1209600, "token_type": "bearer"},
        )

    token = await make_exchanger(handler).exchange_code("the-code")

    assert seen["url"] == "https://hh.ru/oauth/token"
    assert seen["content_type"] == "application/x-www-form-urlencoded"
    assert seen["form"] == {
        "grant_type": ["authorization_code"],
        "client_id": ["client-id"],
        "client_secret": ["client-secret"],
        "redirect_uri": ["http://localhost:3000/callback"],
        "code": ["the-code"],
    }
    assert token.access_token == "at"
    assert token.refresh_token == "rt"
    assert token.obtained_at is not None


@pytest.mark.asyncio
async def test_exchange_error_uses_description():
    def handler(request):
        return httpx.Response(400, json={"error": "invalid_grant", "error_description": "code has already been used"})

    with pytest.raises(AuthExchangeFailed, match="code has already been used"):
        await make_exchanger(handler).exchange_code("stale")


@pytest.mark.asyncio
async def test_exchange_error_without_description():
    def handler(request):
        return httpx.Response(400, json={"error": "invalid_client"})

    with pytest.raises(AuthExchangeFailed, match="invalid_client"):
        await make_exchanger(handler).exchange_code("x")


@pytest.mark.asyncio
async def test_exchange_non_json_body():
    def handler(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with pytest.raises(AuthExchangeFailed):
        await make_exchanger(handler).exchange_code("x")


@pytest.mark.asyncio
async def test_exchange_without_access_token():
    def handler(request):
        return httpx.Response(200, json={"token_type": "bearer"})

    with pytest.raises(AuthExchangeFailed, match="no access_token"):
        await make_exchanger(handler).exchange_code("x")


@pytest.mark.asyncio
async def test_exchange_error_status_without_error_field():
    def handler(request):
        return httpx.Response(500, json={"access_token": "at"})

    with pytest.raises(AuthExchangeFailed, match="500"):
        await make_exchanger(handler).exchange_code("x")


@pytest.mark.asyncio
async def test_fetch_identity_employer():
    def handler(request):
        assert request.headers["authorization"] == "Bearer at"
        assert request.headers["user-agent"] == "HH-Airtable-App/1.0"
        return httpx.Response(200, json={"email": "hr@example.com", "employer": {"id": "42", "name": "Техпром"}})

    identity = await make_exchanger(handler).fetch_identity(Token(access_token="at"))

    assert identity.email == "hr@example.com"
    assert identity.employer == "Техпром"
    assert identity.employer_id == "42"
    assert identity.is_employer is True


@pytest.mark.asyncio
async def test_fetch_identity_missing_fields_default():
    identity = await make_exchanger(lambda r: httpx.Response(200, json={})).fetch_identity(Token(access_token="at"))

    assert identity.email is None
    assert identity.employer is None
    assert identity.employer_id is None
    assert identity.is_employer is False


@pytest.mark.asyncio
async def test_fetch_identity_failure_is_not_fatal():
    identity = await make_exchanger(lambda r: httpx.Response(403, json={"errors": []})).fetch_identity(
        Token(access_token="at")
    )
    assert identity.is_employer is False
