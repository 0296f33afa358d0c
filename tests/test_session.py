import pytest
from cachetools import TTLCache

from hh_airtable.errors import Unauthenticated
from hh_airtable.models import Token, UserIdentity
from hh_airtable.session import CachedSessionRepository, SessionRepository, SessionTokenProvider, TokenStore


@pytest.fixture
def cache():
    return TTLCache(maxsize=10, ttl=60)


def test_request_session_wins(tmp_path, cache, token):
    repo = CachedSessionRepository(cache, "sid-1")
    repo.set(token, UserIdentity(email="hr@example.com"))
    store = TokenStore(tmp_path / "missing.json")

    provider = SessionTokenProvider(repo, store)

    assert provider.get_token() == token


def test_falls_back_to_file_and_restores(tmp_path, cache, token):
    store = TokenStore(tmp_path / "stored_tokens.json")
    store.save(token, UserIdentity(email="hr@example.com"))
    repo = CachedSessionRepository(cache, "sid-1")

    provider = SessionTokenProvider(repo, store)

    assert provider.get_token().access_token == token.access_token
    assert repo.get() is not None
    assert repo.get().user_info.email == "hr@example.com"


def test_no_token_anywhere_raises(tmp_path, cache):
    provider = SessionTokenProvider(CachedSessionRepository(cache, "sid-1"), TokenStore(tmp_path / "x.json"))
    with pytest.raises(Unauthenticated):
        provider.get_token()


def test_empty_access_token_is_not_usable(tmp_path, cache):
    repo = CachedSessionRepository(cache, "sid-1")
    repo.set(Token(access_token=""), None)
    store = TokenStore(tmp_path / "stored_tokens.json")
    store.save(Token(access_token=""), None)

    with pytest.raises(Unauthenticated):
        SessionTokenProvider(repo, store).get_token()


def test_logout_clears_both_backends(tmp_path, cache, token):
    path = tmp_path / "stored_tokens.json"
    repo = CachedSessionRepository(cache, "sid-1")
    provider = SessionTokenProvider(repo, TokenStore(path))
    provider.login(token, None)
    assert path.exists()

    provider.logout()

    assert repo.get() is None
    assert not path.exists()
    with pytest.raises(Unauthenticated):
        provider.get_token()


def test_sessions_are_isolated_by_id(cache, token):
    first = CachedSessionRepository(cache, "sid-1")
    second = CachedSessionRepository(cache, "sid-2")
    first.set(token, None)
    first.mark_unlocked("abc")

    assert second.get() is None
    assert not second.is_unlocked("abc")
    assert first.is_unlocked("abc")


def test_both_backends_are_session_repositories(tmp_path, cache):
    assert isinstance(CachedSessionRepository(cache, "sid-1"), SessionRepository)
    assert isinstance(TokenStore(tmp_path / "stored_tokens.json"), SessionRepository)


def test_anonymous_reads_take_no_cache_slot(tmp_path, cache):
    repo = CachedSessionRepository(cache, "anon")

    with pytest.raises(Unauthenticated):
        SessionTokenProvider(repo, TokenStore(tmp_path / "missing.json")).get_token()
    assert repo.is_unlocked("a1b2c3") is False

    assert "anon" not in cache
    assert len(cache) == 0


def test_unlocked_ids_stay_with_their_session(cache):
    repo = CachedSessionRepository(cache, "sid-1")
    repo.mark_unlocked("a1b2c3")

    assert repo.is_unlocked("a1b2c3") is True
    assert CachedSessionRepository(cache, "sid-2").is_unlocked("a1b2c3") is False
    assert list(cache) == ["sid-1"]
