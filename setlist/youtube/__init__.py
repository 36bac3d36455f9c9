# YouTube API modules
from setlist.youtube.ids import extract_video_id, get_video_id
from setlist.youtube.metadata import VideoMetadata, build_youtube_service, get_video_metadata, resolve
from setlist.youtube.playlist import PlaylistClient, YouTubePlaylistClient

__all__ = [
    "extract_video_id",
    "get_video_id",
    "VideoMetadata",
    "build_youtube_service",
    "get_video_metadata",
    "resolve",
    "PlaylistClient",
    "YouTubePlaylistClient",
]
