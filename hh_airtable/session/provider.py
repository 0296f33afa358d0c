"""Resolves a usable bearer token for the current request."""

import logging

from hh_airtable.errors import Unauthenticated
from hh_airtable.models import PersistedSession, Token, UserIdentity
from hh_airtable.session.cache import CachedSessionRepository
from hh_airtable.session.store import TokenStore

logger = logging.getLogger(__name__)


class SessionTokenProvider:
    """Request session first, then the token file.

    Expiry is not checked here: an expired token is handed out like any other
    and fails at the first provider call that rejects it.
    """

    def __init__(self, request_session: CachedSessionRepository, store: TokenStore):
        self.request_session = request_session
        self.store = store

    def resolve(self) -> PersistedSession:
        record = self.request_session.get()
        if record is not None and record.tokens.is_usable:
            return record

        stored = self.store.load()
        if stored is not None and stored.tokens.is_usable:
            self.request_session.restore(stored)
            logger.info("Restored tokens from file")
            return stored

        raise Unauthenticated()

    def get_token(self) -> Token:
        return self.resolve().tokens

    def login(self, token: Token, identity: UserIdentity | None) -> None:
        """Persist a fresh login to both backends."""
        self.request_session.set(token, identity)
        self.store.save(token, identity)

    def logout(self) -> None:
        self.request_session.clear()
        self.store.clear()
