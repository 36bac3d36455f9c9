"""
FastAPI dependencies for authentication, Google API clients, etc.
"""

from dataclasses import dataclass
from typing import Any, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from setlist.auth.tokens import TokenManager, TokenSet
from setlist.errors import AuthRequired, ConfigurationError, InvalidInput
from setlist.ledger.reconcile import PlaylistReconciler
from setlist.ledger.submissions import SubmissionSheet
from setlist.schemas import ParseRequest, RateRequest, SaveRequest
from setlist.settings import Settings, get_settings
from setlist.sheets.client import GoogleSheetRepository, SheetRepository, build_sheets_service
from setlist.youtube.ids import get_video_id
from setlist.youtube.metadata import build_youtube_service
from setlist.youtube.playlist import YouTubePlaylistClient

SESSION_EMAIL = "email"
SESSION_TOKENS = "tokens"


@dataclass
class UserContext:
    """The signed-in user for one request."""
    email: str
    display_name: str
    credentials: Any


def get_token_manager(settings: Settings = Depends(get_settings)) -> TokenManager:
    return TokenManager(settings)


def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    manager: TokenManager = Depends(get_token_manager),
) -> UserContext:
    """
    Resolve the session's user and a usable access token.

    Refreshed tokens are written back to the session. A failed refresh is
    also recorded, so later requests fail fast until the user signs in again.
    """
    email = request.session.get(SESSION_EMAIL)
    tokens = TokenSet.from_session(request.session.get(SESSION_TOKENS))
    if not email or tokens is None:
        raise AuthRequired("Sign-in required.")

    manager.require_valid(tokens)

    refreshed = manager.ensure_fresh(tokens)
    if refreshed != tokens:
        request.session[SESSION_TOKENS] = refreshed.to_session()
    manager.require_valid(refreshed)

    return UserContext(
        email=email,
        display_name=settings.display_name_for(email),
        credentials=manager.credentials(refreshed),
    )


def get_sheet_repository(
    user: UserContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> SheetRepository:
    if not settings.SPREADSHEET_ID:
        raise ConfigurationError("SPREADSHEET_ID is not configured")
    return GoogleSheetRepository(build_sheets_service(user.credentials), settings.SPREADSHEET_ID)


def get_submission_sheet(
    repo: SheetRepository = Depends(get_sheet_repository),
    settings: Settings = Depends(get_settings),
) -> SubmissionSheet:
    return SubmissionSheet(repo, settings)


def get_youtube(user: UserContext = Depends(get_current_user)) -> Any:
    return build_youtube_service(user.credentials)


def get_reconciler(
    youtube: Any = Depends(get_youtube),
    settings: Settings = Depends(get_settings),
) -> PlaylistReconciler:
    return PlaylistReconciler(YouTubePlaylistClient(youtube), settings.YOUTUBE_PLAYLIST_ID)


# --- Input validation ---
# Each parses its own body, so a bad request fails here before any
# dependency declared after it (session, token refresh, Google clients) runs.

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_body(request: Request, model: type[ModelT]) -> ModelT:
    """Parse the JSON body into `model`, reporting any problem as InvalidInput."""
    try:
        data = await request.json()
    except ValueError as e:
        raise InvalidInput("Request body must be JSON") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidInput(
            "Invalid request",
            details=e.errors(include_url=False, include_context=False),
        ) from e


async def validated_parse(request: Request) -> ParseRequest:
    payload = await read_body(request, ParseRequest)
    get_video_id(payload.url)
    return payload


async def validated_save(request: Request) -> SaveRequest:
    payload = await read_body(request, SaveRequest)
    if not payload.artist.strip() or not payload.title.strip() or not payload.url.strip():
        raise InvalidInput("artist, title and url are all required")

    url = payload.url.strip()
    if not url.startswith(("http://", "https://")) or '"' in url:
        raise InvalidInput(f"Not a valid YouTube URL: {url}")
    get_video_id(url)
    return payload.model_copy(update={"url": url})


async def validated_rating(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> RateRequest:
    payload = await read_body(request, RateRequest)
    if payload.rating not in settings.valid_ratings:
        raise InvalidInput(
            f"Invalid rating: {payload.rating!r}",
            details={"allowed": settings.RATING_TOKENS},
        )
    return payload
