"""
Leaderboard read and rating endpoints.
"""

from fastapi import APIRouter, Depends

from setlist.dependencies import (
    UserContext,
    get_current_user,
    get_sheet_repository,
    get_submission_sheet,
    validated_rating,
)
from setlist.ledger.leaderboard import read_leaderboard
from setlist.ledger.ratings import RatingLedger
from setlist.ledger.submissions import SubmissionSheet
from setlist.schemas import (
    ErrorResponse,
    LeaderboardEntryOut,
    LeaderboardResponse,
    RateRequest,
    RateResponse,
    request_body,
)
from setlist.settings import Settings, get_settings
from setlist.sheets.client import SheetRepository

router = APIRouter(
    prefix="/v1",
    tags=["leaderboard"],
    responses={401: {"model": ErrorResponse}},
)


@router.get("/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(
    user: UserContext = Depends(get_current_user),
    repo: SheetRepository = Depends(get_sheet_repository),
    settings: Settings = Depends(get_settings),
):
    """
    List songs from every leaderboard sheet with the caller's own rating.
    """
    view = read_leaderboard(repo, settings, user.display_name)

    return LeaderboardResponse(
        entries=[LeaderboardEntryOut.model_validate(e) for e in view.entries],
        playlist_id=settings.YOUTUBE_PLAYLIST_ID or None,
        message=None if view.sheets else "No leaderboard sheet found",
    )


@router.post("/rate", response_model=RateResponse, openapi_extra=request_body(RateRequest))
def rate_song(
    payload: RateRequest = Depends(validated_rating),
    user: UserContext = Depends(get_current_user),
    sheet: SubmissionSheet = Depends(get_submission_sheet),
):
    """
    Store the caller's rating for a submission row.

    - **row**: the submission's row in the submission sheet
    - **rating**: one of the configured rating tokens, or "" to clear
    """
    result = RatingLedger(sheet).set_rating(payload.row, user.display_name, payload.rating)
    return RateResponse.model_validate(result)
