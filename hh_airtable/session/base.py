"""Session repository interface shared by the cache and file backends."""

from typing import Protocol, runtime_checkable

from hh_airtable.models import PersistedSession, Token, UserIdentity


@runtime_checkable
class SessionRepository(Protocol):
    """get/set/clear over one {token, identity} record."""

    def get(self) -> PersistedSession | None: ...

    def set(self, token: Token, identity: UserIdentity | None) -> None: ...

    def clear(self) -> None: ...
