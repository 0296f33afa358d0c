"""OAuth login, landing status and logout."""

import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from hh_airtable.api.deps import get_oauth_exchanger, get_token_provider
from hh_airtable.api.schemas import LandingResponse
from hh_airtable.errors import AuthExchangeFailed, Unauthenticated
from hh_airtable.session import SessionTokenProvider
from hh_airtable.tools import OAuthExchanger

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=LandingResponse)
async def landing(
    error: str | None = None,
    provider: SessionTokenProvider = Depends(get_token_provider),
):
    """Login status for the current browser session."""
    try:
        record = provider.resolve()
    except Unauthenticated:
        return LandingResponse(authenticated=False, error=error)
    return LandingResponse(authenticated=True, user=record.user_info, error=error)


@router.get("/auth")
def start_auth(oauth: OAuthExchanger = Depends(get_oauth_exchanger)):
    """Send the operator to the provider's consent page."""
    return RedirectResponse(oauth.authorize_url(), status_code=302)


@router.get("/callback")
async def oauth_callback(
    code: str | None = None,
    oauth: OAuthExchanger = Depends(get_oauth_exchanger),
    provider: SessionTokenProvider = Depends(get_token_provider),
):
    """Provider redirect target: exchange the code and persist the login."""
    if not code:
        return RedirectResponse("/?error=no_code", status_code=302)

    try:
        token = await oauth.exchange_code(code)
        identity = await oauth.fetch_identity(token)
    except (AuthExchangeFailed, httpx.HTTPError) as e:
        logger.error(f"Auth error: {e}")
        return RedirectResponse("/?error=auth_failed", status_code=302)

    provider.login(token, identity)
    logger.info(f"Logged in as {identity.email or 'unknown user'}")
    return RedirectResponse("/", status_code=302)


@router.get("/logout")
async def logout(provider: SessionTokenProvider = Depends(get_token_provider)):
    provider.logout()
    return RedirectResponse("/", status_code=302)
