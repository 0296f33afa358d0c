"""FastAPI dependencies wiring sessions, clients and the sync pipeline."""

import uuid

from fastapi import Depends, Request

from hh_airtable.config import settings
from hh_airtable.models import Token
from hh_airtable.session import CachedSessionRepository, SessionTokenProvider, TokenStore, get_session_cache
from hh_airtable.sync.dedup import Deduplicator
from hh_airtable.sync.orchestrator import SyncOrchestrator
from hh_airtable.sync.pacing import FixedIntervalPacer, Pacer
from hh_airtable.tools import AirtableClient, OAuthExchanger, ResumeClient

SESSION_ID_KEY = "sid"

_token_store: TokenStore | None = None


async def get_session_repository(request: Request) -> CachedSessionRepository:
    """Session backend for this browser, keyed by the id in the signed cookie."""
    session_id = request.session.get(SESSION_ID_KEY)
    if not session_id:
        session_id = str(uuid.uuid4())
        request.session[SESSION_ID_KEY] = session_id
    return CachedSessionRepository(get_session_cache(), session_id)


def get_token_store() -> TokenStore:
    global _token_store
    if _token_store is None:
        _token_store = TokenStore(settings.tokens_file)
    return _token_store


async def get_token_provider(
    request_session: CachedSessionRepository = Depends(get_session_repository),
    store: TokenStore = Depends(get_token_store),
) -> SessionTokenProvider:
    return SessionTokenProvider(request_session, store)


async def get_current_token(provider: SessionTokenProvider = Depends(get_token_provider)) -> Token:
    """Raises Unauthenticated, which the app turns into a redirect to /."""
    return provider.get_token()


def get_oauth_exchanger() -> OAuthExchanger:
    return OAuthExchanger.from_settings()


def get_resume_client(token: Token = Depends(get_current_token)) -> ResumeClient:
    return ResumeClient.from_settings(token)


def get_store_client() -> AirtableClient:
    return AirtableClient.from_settings()


def get_pacer() -> Pacer:
    return FixedIntervalPacer(settings.batch_delay)


def get_orchestrator(
    client: ResumeClient = Depends(get_resume_client),
    store: AirtableClient = Depends(get_store_client),
    pacer: Pacer = Depends(get_pacer),
) -> SyncOrchestrator:
    return SyncOrchestrator(
        client,
        store,
        deduplicator=Deduplicator(store, timeout=settings.dedup_timeout),
        pacer=pacer,
    )
