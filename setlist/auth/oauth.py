"""
OAuth2 authorization-code flow against Google.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Optional

from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from setlist.auth.tokens import TokenSet, as_utc
from setlist.errors import AuthExpired, InvalidInput, translate_http_error
from setlist.log import get_logger
from setlist.settings import Settings

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"

logger = get_logger("auth.oauth")


class AuthorizationRequest(NamedTuple):
    url: str
    state: str
    code_verifier: Optional[str]


class SignIn(NamedTuple):
    tokens: TokenSet
    email: str


def _client_config(settings: Settings) -> dict:
    return {
        "web": {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "client_secret": settings.GOOGLE_CLIENT_SECRET,
            "auth_uri": AUTH_URI,
            "token_uri": settings.TOKEN_URI,
            "redirect_uris": [settings.OAUTH_REDIRECT_URI],
        }
    }


def build_flow(
    settings: Settings,
    state: Optional[str] = None,
    code_verifier: Optional[str] = None,
) -> Flow:
    return Flow.from_client_config(
        _client_config(settings),
        scopes=settings.OAUTH_SCOPES,
        redirect_uri=settings.OAUTH_REDIRECT_URI,
        state=state,
        code_verifier=code_verifier,
    )


def authorization_url(settings: Settings) -> AuthorizationRequest:
    """
    Build the consent URL. Offline access with a forced consent prompt so a
    refresh token is issued on every sign-in.
    """
    flow = build_flow(settings)
    url, state = flow.authorization_url(
        access_type="offline",
        prompt="consent",
        include_granted_scopes="true",
    )
    return AuthorizationRequest(url=url, state=state, code_verifier=flow.code_verifier)


def fetch_user_email(credentials: Any) -> str:
    try:
        oauth2 = build("oauth2", "v2", credentials=credentials, cache_discovery=False)
        info = oauth2.userinfo().get().execute()
    except Exception as e:
        raise translate_http_error(e, "userinfo") from e

    email = info.get("email")
    if not email:
        raise InvalidInput("Signed-in account has no email address")
    return email


def exchange_code(
    settings: Settings,
    code: str,
    state: Optional[str],
    code_verifier: Optional[str] = None,
) -> SignIn:
    """
    Exchange an authorization code for tokens and identify the user.
    """
    if not code:
        raise InvalidInput("Missing authorization code")

    flow = build_flow(settings, state=state, code_verifier=code_verifier)
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        logger.error(f"OAuth code exchange failed: {e}")
        raise AuthExpired("Sign-in failed. Please try again.", details=str(e)) from e

    creds = flow.credentials
    email = fetch_user_email(creds)
    logger.info(f"Signed in {email}")

    return SignIn(
        tokens=TokenSet(
            access_token=creds.token,
            refresh_token=creds.refresh_token,
            expires_at=as_utc(creds.expiry),
        ),
        email=email,
    )
