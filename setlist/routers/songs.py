"""
Song submission endpoints: resolve a URL, save it to the sheet, sync the playlist.
"""

from typing import Any

from fastapi import APIRouter, Depends

from setlist.dependencies import (
    UserContext,
    get_current_user,
    get_reconciler,
    get_submission_sheet,
    get_youtube,
    validated_parse,
    validated_save,
)
from setlist.errors import SetlistError
from setlist.ledger.reconcile import PlaylistReconciler, sync_playlist
from setlist.ledger.submissions import SubmissionSheet
from setlist.log import get_logger
from setlist.schemas import (
    ErrorResponse,
    ParseRequest,
    ParseResponse,
    SaveRequest,
    SaveResponse,
    SyncOut,
    request_body,
)
from setlist.youtube.metadata import resolve

logger = get_logger(__name__)

router = APIRouter(
    prefix="/v1",
    tags=["songs"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


@router.post("/parse", response_model=ParseResponse, openapi_extra=request_body(ParseRequest))
def parse_url(
    payload: ParseRequest = Depends(validated_parse),
    youtube: Any = Depends(get_youtube),
):
    """
    Resolve a YouTube URL to its title and channel.

    The channel name is offered as the artist; the user may edit both
    before saving.
    """
    metadata = resolve(youtube, payload.url)
    return ParseResponse(
        artist=metadata.channel_title,
        title=metadata.title,
        url=payload.url,
        video_id=metadata.video_id,
    )


@router.post("/save", response_model=SaveResponse, openapi_extra=request_body(SaveRequest))
def save_song(
    payload: SaveRequest = Depends(validated_save),
    user: UserContext = Depends(get_current_user),
    sheet: SubmissionSheet = Depends(get_submission_sheet),
    reconciler: PlaylistReconciler = Depends(get_reconciler),
):
    """
    Append the song to the submission sheet, then sync the playlist.

    The sync is best-effort: its failure is logged and reported as a null
    `playlist_sync`, and the saved row stays.
    """
    row = sheet.submit(user.display_name, payload.artist, payload.title, payload.url)

    playlist_sync = None
    try:
        result = sync_playlist(sheet, reconciler)
        playlist_sync = SyncOut.model_validate(result)
    except SetlistError as e:
        logger.warning(f"Playlist sync after save failed: {e}")

    return SaveResponse(
        row=row,
        user_name=user.display_name,
        artist=payload.artist,
        title=payload.title,
        url=payload.url,
        playlist_sync=playlist_sync,
    )


@router.post("/sync-playlist", response_model=SyncOut)
def force_sync(
    sheet: SubmissionSheet = Depends(get_submission_sheet),
    reconciler: PlaylistReconciler = Depends(get_reconciler),
):
    """
    Rebuild the YouTube playlist from the sheet.
    """
    result = sync_playlist(sheet, reconciler)
    return SyncOut.model_validate(result)
