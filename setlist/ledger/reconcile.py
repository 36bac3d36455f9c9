"""
Keep the shared YouTube playlist in the sheet's order.

The playlist is fully derived from the sheet: every existing item is
deleted and the sheet's videos are inserted again, in order. A video that
fails to insert is logged and counted; it never aborts the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from setlist.errors import ConfigurationError, SetlistError
from setlist.ledger.submissions import SubmissionSheet
from setlist.log import get_logger
from setlist.youtube.playlist import PlaylistClient

logger = get_logger(__name__)


@dataclass
class SyncResult:
    """Outcome of one reconciliation."""
    deleted: int = 0
    added: int = 0
    total: int = 0
    failed: list[str] = field(default_factory=list)


class PlaylistReconciler:
    def __init__(self, client: PlaylistClient, playlist_id: str):
        self.client = client
        self.playlist_id = playlist_id

    def check_configured(self) -> None:
        if not self.playlist_id:
            raise ConfigurationError("YOUTUBE_PLAYLIST_ID is not configured")

    def reconcile(self, video_ids: list[str]) -> SyncResult:
        """
        Replace the playlist's contents with `video_ids`, in order.
        """
        self.check_configured()
        logger.info(f"Videos to sync: {len(video_ids)}")

        item_ids = self.client.list_item_ids(self.playlist_id)
        logger.info(f"Existing playlist items to delete: {len(item_ids)}")

        for item_id in item_ids:
            self.client.delete_item(item_id)

        result = SyncResult(deleted=len(item_ids), total=len(video_ids))

        for video_id in video_ids:
            try:
                self.client.insert_video(self.playlist_id, video_id)
                result.added += 1
            except SetlistError as e:
                logger.warning(f"Failed to add video {video_id}: {e}")
                result.failed.append(video_id)

        logger.info(
            f"Playlist sync complete: deleted={result.deleted} "
            f"added={result.added} total={result.total}"
        )
        return result


def sync_playlist(sheet: SubmissionSheet, reconciler: PlaylistReconciler) -> SyncResult:
    """Rebuild the playlist from the sheet's link column."""
    reconciler.check_configured()
    return reconciler.reconcile(sheet.playlist_video_ids())
