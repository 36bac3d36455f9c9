"""
Playlist item operations on the YouTube Data API.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from setlist.errors import translate_http_error
from setlist.log import get_logger

PAGE_SIZE = 50


class PlaylistClient(Protocol):
    """Playlist operations the reconciler depends on."""

    def list_item_ids(self, playlist_id: str) -> list[str]: ...

    def delete_item(self, item_id: str) -> None: ...

    def insert_video(self, playlist_id: str, video_id: str) -> None: ...


class YouTubePlaylistClient:
    """PlaylistClient backed by the YouTube Data API v3."""

    def __init__(self, youtube: Any):
        self._youtube = youtube
        self._logger = get_logger(__name__)

    def _execute(self, request: Any, context: str) -> dict:
        try:
            return request.execute() or {}
        except Exception as e:
            raise translate_http_error(e, f"YouTube {context}") from e

    def list_item_ids(self, playlist_id: str) -> list[str]:
        """
        Get the IDs of all items in a playlist, following page tokens.

        These are playlist item IDs (needed for deletion), not video IDs.
        """
        item_ids: list[str] = []
        next_page_token: Optional[str] = None

        while True:
            response = self._execute(
                self._youtube.playlistItems().list(
                    part="id",
                    playlistId=playlist_id,
                    maxResults=PAGE_SIZE,
                    pageToken=next_page_token,
                ),
                "playlistItems.list",
            )

            for item in response.get("items", []):
                if item.get("id"):
                    item_ids.append(item["id"])

            next_page_token = response.get("nextPageToken")
            if not next_page_token:
                break

        return item_ids

    def delete_item(self, item_id: str) -> None:
        self._execute(
            self._youtube.playlistItems().delete(id=item_id),
            "playlistItems.delete",
        )

    def insert_video(self, playlist_id: str, video_id: str) -> None:
        self._execute(
            self._youtube.playlistItems().insert(
                part="snippet",
                body={
                    "snippet": {
                        "playlistId": playlist_id,
                        "resourceId": {
                            "kind": "youtube#video",
                            "videoId": video_id,
                        },
                    }
                },
            ),
            "playlistItems.insert",
        )
