"""
Sign-in endpoints for the Google OAuth authorization-code flow.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from setlist.auth.oauth import authorization_url, exchange_code
from setlist.dependencies import SESSION_EMAIL, SESSION_TOKENS, UserContext, get_current_user
from setlist.errors import AuthRequired, InvalidInput
from setlist.schemas import SessionOut
from setlist.settings import Settings, get_settings

router = APIRouter(prefix="/auth", tags=["auth"])

SESSION_OAUTH_STATE = "oauth_state"
SESSION_OAUTH_VERIFIER = "oauth_verifier"


@router.get("/signin")
def signin(request: Request, settings: Settings = Depends(get_settings)):
    """
    Redirect to Google's consent screen.
    """
    auth = authorization_url(settings)
    request.session[SESSION_OAUTH_STATE] = auth.state
    request.session[SESSION_OAUTH_VERIFIER] = auth.code_verifier
    return RedirectResponse(auth.url, status_code=302)


@router.get("/callback")
def callback(
    request: Request,
    code: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    error: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
):
    """
    Complete sign-in: exchange the code and start a session.
    """
    if error:
        raise AuthRequired(f"Sign-in was not completed: {error}")

    expected_state = request.session.get(SESSION_OAUTH_STATE)
    if not expected_state or state != expected_state:
        raise InvalidInput("OAuth state mismatch")

    result = exchange_code(
        settings,
        code or "",
        state,
        code_verifier=request.session.get(SESSION_OAUTH_VERIFIER),
    )

    request.session.clear()
    request.session[SESSION_EMAIL] = result.email
    request.session[SESSION_TOKENS] = result.tokens.to_session()
    return RedirectResponse("/", status_code=302)


@router.post("/signout")
def signout(request: Request):
    request.session.clear()
    return {"status": "signed_out"}


@router.get("/session", response_model=SessionOut)
def current_session(user: UserContext = Depends(get_current_user)):
    return SessionOut(email=user.email, display_name=user.display_name)
