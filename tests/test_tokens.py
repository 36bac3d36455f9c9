from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from google.auth.exceptions import RefreshError

from setlist.auth.tokens import (
    NO_REFRESH_TOKEN,
    REFRESH_FAILED,
    RefreshedToken,
    TokenManager,
    TokenSet,
    TokenState,
)
from setlist.dependencies import SESSION_EMAIL, SESSION_TOKENS, get_current_user
from setlist.errors import AuthExpired, AuthRequired

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class StubRefresher:
    def __init__(self, result=None, error=None):
        self.result = result or RefreshedToken("new-access", NOW + timedelta(hours=1))
        self.error = error
        self.calls = []

    def __call__(self, refresh_token):
        self.calls.append(refresh_token)
        if self.error:
            raise self.error
        return self.result


def manager(settings, refresher=None):
    return TokenManager(settings, refresher=refresher or StubRefresher(), clock=lambda: NOW)


def tokens(expires_in: timedelta, **kwargs) -> TokenSet:
    return TokenSet(
        access_token=kwargs.pop("access_token", "old-access"),
        refresh_token=kwargs.pop("refresh_token", "refresh-1"),
        expires_at=NOW + expires_in,
        **kwargs,
    )


@pytest.mark.parametrize("expires_in, state", [
    (timedelta(hours=1), TokenState.FRESH),
    (timedelta(minutes=5, seconds=1), TokenState.FRESH),
    (timedelta(minutes=5), TokenState.STALE),
    (timedelta(seconds=30), TokenState.STALE),
    (timedelta(0), TokenState.NEEDS_REFRESH),
    (timedelta(minutes=-10), TokenState.NEEDS_REFRESH),
])
def test_states_respect_safety_margin(settings, expires_in, state):
    assert manager(settings).state(tokens(expires_in)) is state


def test_error_is_refresh_failed_state(settings):
    t = tokens(timedelta(hours=1), error=REFRESH_FAILED)
    assert manager(settings).state(t) is TokenState.REFRESH_FAILED


def test_fresh_tokens_are_not_refreshed(settings):
    refresher = StubRefresher()
    t = tokens(timedelta(hours=1))

    assert manager(settings, refresher).ensure_fresh(t) is t
    assert refresher.calls == []


def test_stale_token_refreshed_once(settings):
    refresher = StubRefresher()
    result = manager(settings, refresher).ensure_fresh(tokens(timedelta(minutes=2)))

    assert refresher.calls == ["refresh-1"]
    assert result.access_token == "new-access"
    assert result.refresh_token == "refresh-1"
    assert result.error is None
    assert manager(settings).state(result) is TokenState.FRESH


def test_rotated_refresh_token_is_kept(settings):
    refresher = StubRefresher(RefreshedToken("a2", NOW + timedelta(hours=1), "refresh-2"))
    result = manager(settings, refresher).ensure_fresh(tokens(timedelta(minutes=-1)))
    assert result.refresh_token == "refresh-2"


def test_naive_expiry_is_treated_as_utc(settings):
    naive = (NOW + timedelta(hours=1)).replace(tzinfo=None)
    refresher = StubRefresher(RefreshedToken("a2", naive))
    result = manager(settings, refresher).ensure_fresh(tokens(timedelta(minutes=-1)))
    assert result.expires_at == NOW + timedelta(hours=1)


def test_refresh_failure_is_terminal(settings):
    refresher = StubRefresher(error=RefreshError("invalid_grant"))
    m = manager(settings, refresher)

    failed = m.ensure_fresh(tokens(timedelta(minutes=-1)))

    assert failed.error == REFRESH_FAILED
    assert m.state(failed) is TokenState.REFRESH_FAILED
    with pytest.raises(AuthExpired):
        m.require_valid(failed)

    # No retry on later calls
    assert m.ensure_fresh(failed) is failed
    assert refresher.calls == ["refresh-1"]


def test_missing_refresh_token_needs_reauthentication(settings):
    m = manager(settings)
    result = m.ensure_fresh(tokens(timedelta(minutes=-1), refresh_token=None))
    assert result.error == NO_REFRESH_TOKEN
    with pytest.raises(AuthExpired):
        m.require_valid(result)


def test_no_tokens_is_auth_required_not_expired(settings):
    with pytest.raises(AuthRequired):
        manager(settings).require_valid(None)


def test_session_round_trip():
    t = TokenSet("a", "r", NOW, None)
    assert TokenSet.from_session(t.to_session()) == t
    assert TokenSet.from_session({}) is None
    assert TokenSet.from_session(None) is None


def test_current_user_from_session(settings):
    request = SimpleNamespace(session={
        SESSION_EMAIL: "minji@example.com",
        SESSION_TOKENS: tokens(timedelta(hours=1)).to_session(),
    })

    user = get_current_user(request, settings, manager(settings))

    assert user.email == "minji@example.com"
    assert user.display_name == "민지"
    assert user.credentials.token == "old-access"


def test_current_user_persists_refreshed_tokens(settings):
    request = SimpleNamespace(session={
        SESSION_EMAIL: "alex@example.com",
        SESSION_TOKENS: tokens(timedelta(minutes=1)).to_session(),
    })

    user = get_current_user(request, settings, manager(settings))

    assert user.credentials.token == "new-access"
    assert request.session[SESSION_TOKENS]["access_token"] == "new-access"


def test_current_user_records_failed_refresh(settings):
    request = SimpleNamespace(session={
        SESSION_EMAIL: "alex@example.com",
        SESSION_TOKENS: tokens(timedelta(minutes=-1)).to_session(),
    })
    m = manager(settings, StubRefresher(error=RefreshError("invalid_grant")))

    with pytest.raises(AuthExpired):
        get_current_user(request, settings, m)

    assert request.session[SESSION_TOKENS]["error"] == REFRESH_FAILED


def test_current_user_without_session(settings):
    with pytest.raises(AuthRequired):
        get_current_user(SimpleNamespace(session={}), settings, manager(settings))
