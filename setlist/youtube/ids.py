"""
YouTube video ID extraction from various URL formats.
"""

import re
from typing import Optional

from setlist.errors import InvalidInput

# v=, embed/, live/, shorts/ or youtu.be/ followed by exactly 11 id characters
VIDEO_ID_RE = re.compile(
    r"(?:[?&]v=|\/embed\/|\/live\/|\/shorts\/|youtu\.be\/)([0-9A-Za-z_-]{11})(?![0-9A-Za-z_-])"
)
BARE_ID_RE = re.compile(r"^[0-9A-Za-z_-]{11}$")


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extracts the YouTube video ID from a URL, or None.

    Supported formats:
    - https://www.youtube.com/watch?v=VIDEO_ID
    - https://youtu.be/VIDEO_ID
    - https://www.youtube.com/embed/VIDEO_ID
    - https://www.youtube.com/live/VIDEO_ID
    - https://www.youtube.com/shorts/VIDEO_ID
    - a bare 11-character VIDEO_ID
    """
    if not url:
        return None

    url = url.strip()
    match = VIDEO_ID_RE.search(url)
    if match:
        return match.group(1)

    if BARE_ID_RE.match(url):
        return url

    return None


def get_video_id(url: str) -> str:
    """
    Like extract_video_id, but raises InvalidInput when no ID is found.
    """
    video_id = extract_video_id(url)
    if video_id is None:
        raise InvalidInput(f"Not a valid YouTube URL: {url}")
    return video_id


def build_video_url(video_id: str) -> str:
    """
    Build a standard YouTube URL from a video ID.
    """
    return f"https://www.youtube.com/watch?v={video_id}"
