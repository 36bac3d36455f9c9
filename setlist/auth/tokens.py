"""
Access/refresh token lifecycle.

A token is treated as expired a safety margin before its real expiry so it
cannot die mid-request. Refresh is attempted once; a failed refresh is a
terminal state that only a new sign-in clears.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from setlist.errors import AuthExpired, AuthRequired
from setlist.log import get_logger
from setlist.settings import Settings

REFRESH_FAILED = "RefreshAccessTokenError"
NO_REFRESH_TOKEN = "NoRefreshToken"


class TokenState(str, Enum):
    FRESH = "fresh"
    STALE = "stale_but_valid"
    NEEDS_REFRESH = "needs_refresh"
    REFRESH_FAILED = "refresh_failed"


@dataclass(frozen=True)
class TokenSet:
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    error: Optional[str] = None

    @classmethod
    def from_session(cls, data: Optional[dict]) -> Optional["TokenSet"]:
        if not data or not data.get("access_token"):
            return None
        expires_at = data.get("expires_at")
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_at=(
                datetime.fromtimestamp(float(expires_at), tz=timezone.utc)
                if expires_at is not None
                else None
            ),
            error=data.get("error"),
        )

    def to_session(self) -> dict:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at.timestamp() if self.expires_at else None,
            "error": self.error,
        }


class RefreshedToken(NamedTuple):
    access_token: str
    expires_at: Optional[datetime]
    refresh_token: Optional[str] = None


Refresher = Callable[[str], RefreshedToken]


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # google-auth reports expiry as a naive UTC datetime
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TokenManager:
    """Produces a usable access token from a stored token pair."""

    def __init__(
        self,
        settings: Settings,
        refresher: Optional[Refresher] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._settings = settings
        self._refresher = refresher or self._refresh_with_google
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._margin = timedelta(seconds=settings.TOKEN_EXPIRY_MARGIN_SECONDS)
        self._logger = get_logger("auth.tokens")

    def state(self, tokens: TokenSet) -> TokenState:
        if tokens.error:
            return TokenState.REFRESH_FAILED
        if tokens.expires_at is None:
            return TokenState.FRESH

        remaining = as_utc(tokens.expires_at) - self._clock()
        if remaining <= timedelta(0):
            return TokenState.NEEDS_REFRESH
        if remaining <= self._margin:
            return TokenState.STALE
        return TokenState.FRESH

    def ensure_fresh(self, tokens: TokenSet) -> TokenSet:
        """
        Return tokens safe to use for a request.

        Refreshes once when stale or expired. On failure the returned set
        carries an error and is in the REFRESH_FAILED state.
        """
        state = self.state(tokens)
        if state in (TokenState.FRESH, TokenState.REFRESH_FAILED):
            return tokens

        if not tokens.refresh_token:
            self._logger.warning("Access token expiring and no refresh token available")
            return replace(tokens, error=NO_REFRESH_TOKEN)

        try:
            self._logger.debug(f"Refreshing access token ({state.value})")
            refreshed = self._refresher(tokens.refresh_token)
        except (GoogleAuthError, ValueError) as e:
            self._logger.error(f"Failed to refresh token: {e}")
            return replace(tokens, error=REFRESH_FAILED)

        self._logger.debug("Successfully refreshed access token")
        return TokenSet(
            access_token=refreshed.access_token,
            # Google only rotates the refresh token occasionally
            refresh_token=refreshed.refresh_token or tokens.refresh_token,
            expires_at=as_utc(refreshed.expires_at),
            error=None,
        )

    def require_valid(self, tokens: Optional[TokenSet]) -> TokenSet:
        """Raise the matching auth error unless tokens are usable."""
        if tokens is None:
            raise AuthRequired("Sign-in required.")
        if self.state(tokens) is TokenState.REFRESH_FAILED:
            raise AuthExpired("Authorization expired. Please sign in again.", details=tokens.error)
        return tokens

    def credentials(self, tokens: TokenSet) -> Credentials:
        """
        Credentials for API clients.

        No refresh token is attached; refreshing happens only in ensure_fresh.
        """
        return Credentials(token=tokens.access_token)

    def _refresh_with_google(self, refresh_token: str) -> RefreshedToken:
        creds = Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=self._settings.TOKEN_URI,
            client_id=self._settings.GOOGLE_CLIENT_ID,
            client_secret=self._settings.GOOGLE_CLIENT_SECRET,
        )
        creds.refresh(Request())
        return RefreshedToken(
            access_token=creds.token,
            expires_at=as_utc(creds.expiry),
            refresh_token=creds.refresh_token,
        )


def credentials_from_refresh_token(settings: Settings, refresh_token: str) -> Any:
    """
    Exchange a stored refresh token for API credentials outside a web session.
    """
    manager = TokenManager(settings)
    tokens = manager.ensure_fresh(
        TokenSet(
            access_token="",
            refresh_token=refresh_token,
            expires_at=datetime.fromtimestamp(0, tz=timezone.utc),
        )
    )
    return manager.credentials(manager.require_valid(tokens))
