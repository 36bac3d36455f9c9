"""
Fetch video metadata from YouTube Data API v3.
"""

from datetime import datetime
from typing import Any, Optional
from dataclasses import dataclass

from googleapiclient.discovery import build

from setlist.errors import InvalidInput, NotFound, translate_http_error
from setlist.log import get_logger
from setlist.youtube.ids import get_video_id

logger = get_logger(__name__)


@dataclass
class VideoMetadata:
    """Container for YouTube video metadata."""
    video_id: str
    title: str
    channel_title: str
    channel_id: str = ""
    published_at: Optional[datetime] = None


def build_youtube_service(credentials: Any) -> Any:
    """Build an authenticated YouTube Data API client."""
    return build("youtube", "v3", credentials=credentials, cache_discovery=False)


def _parse_published_at(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        # ISO 8601 format: 2025-01-15T14:30:00Z
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None


def get_video_metadata(youtube: Any, video_id: str) -> VideoMetadata:
    """
    Fetches video metadata using YouTube Data API v3.

    Args:
        youtube: YouTube API client
        video_id: YouTube video ID (11 characters)

    Returns:
        VideoMetadata with title and channel info

    Raises:
        NotFound: no video with that ID
        AuthExpired: the API rejected the credentials
        UpstreamError: any other API failure
    """
    try:
        response = youtube.videos().list(part="snippet", id=video_id).execute()
    except Exception as e:
        logger.error(f"YouTube API Error for {video_id}: {e}")
        raise translate_http_error(e, "YouTube videos.list") from e

    items = response.get("items") or []
    if not items:
        raise NotFound(f"Video not found: {video_id}")

    snippet = items[0].get("snippet", {})
    return VideoMetadata(
        video_id=video_id,
        title=snippet.get("title", ""),
        channel_title=snippet.get("channelTitle", ""),
        channel_id=snippet.get("channelId", ""),
        published_at=_parse_published_at(snippet.get("publishedAt")),
    )


def resolve(youtube: Any, url: str) -> VideoMetadata:
    """
    Resolve a submitted URL to its video's metadata.

    The URL is validated before any API call.
    """
    if not url or not url.strip():
        raise InvalidInput("No URL provided")

    video_id = get_video_id(url)
    logger.info(f"Resolving video {video_id}")
    return get_video_metadata(youtube, video_id)
