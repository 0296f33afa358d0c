"""Session package: repository interface plus cache and file backends."""

from hh_airtable.session.base import SessionRepository
from hh_airtable.session.cache import CachedSessionRepository, SessionState, get_session_cache
from hh_airtable.session.provider import SessionTokenProvider
from hh_airtable.session.store import TokenStore

__all__ = [
    "SessionRepository",
    "CachedSessionRepository",
    "SessionState",
    "get_session_cache",
    "SessionTokenProvider",
    "TokenStore",
]
