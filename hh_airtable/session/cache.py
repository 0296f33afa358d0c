"""
Request-scoped session backend.

Session state lives server-side in a bounded TTL cache keyed by the session
id carried in the signed session cookie. Alongside the login record it keeps
the ids of resumes whose contacts were paid-unlocked during this session.

TTLCache is not thread-safe: it is only touched from async dependencies and
handlers running on the event loop.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from cachetools import TTLCache

from hh_airtable.config import settings
from hh_airtable.models import PersistedSession, Token, UserIdentity


@dataclass
class SessionState:
    session: PersistedSession | None = None
    unlocked: set[str] = field(default_factory=set)


# Bounded TTL cache: max 500 browser sessions, evicted after SESSION_TTL.
# An evicted login is restored from the token file on the next request.
_session_cache: TTLCache | None = None


def get_session_cache() -> TTLCache:
    """Get or create the process-wide session cache."""
    global _session_cache
    if _session_cache is None:
        _session_cache = TTLCache(maxsize=500, ttl=settings.session_ttl)
    return _session_cache


class CachedSessionRepository:
    """Cache backend for SessionRepository, bound to one session id.

    Reads never create an entry, so anonymous requests do not take cache slots.
    """

    def __init__(self, cache: TTLCache, session_id: str):
        self._cache = cache
        self.session_id = session_id

    def _existing(self) -> SessionState | None:
        return self._cache.get(self.session_id)

    def _writable(self) -> SessionState:
        state = self._existing()
        if state is None:
            state = SessionState()
            self._cache[self.session_id] = state
        return state

    def get(self) -> PersistedSession | None:
        state = self._existing()
        return state.session if state else None

    def set(self, token: Token, identity: UserIdentity | None) -> None:
        self._writable().session = PersistedSession(
            tokens=token, user_info=identity, saved_at=datetime.now(UTC)
        )

    def restore(self, record: PersistedSession) -> None:
        """Adopt a record loaded from the durable store as-is."""
        self._writable().session = record

    def clear(self) -> None:
        self._cache.pop(self.session_id, None)

    def mark_unlocked(self, resume_id: str) -> None:
        self._writable().unlocked.add(resume_id)

    def is_unlocked(self, resume_id: str) -> bool:
        state = self._existing()
        return state is not None and resume_id in state.unlocked
