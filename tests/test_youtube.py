import pytest

from setlist.errors import AuthExpired, InvalidInput, NotFound, UpstreamError
from setlist.youtube.ids import build_video_url, extract_video_id, get_video_id
from setlist.youtube.metadata import get_video_metadata, resolve
from setlist.youtube.playlist import YouTubePlaylistClient
from tests.fakes import FakeYouTube, http_error

VIDEO = {
    "snippet": {
        "title": "Hype Boy",
        "channelTitle": "NewJeans",
        "channelId": "UC123",
        "publishedAt": "2022-08-01T09:00:00Z",
    }
}


@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=10",
    "https://youtu.be/dQw4w9WgXcQ",
    "https://youtu.be/dQw4w9WgXcQ?si=abc",
    "https://www.youtube.com/embed/dQw4w9WgXcQ",
    "https://m.youtube.com/shorts/dQw4w9WgXcQ",
    "dQw4w9WgXcQ",
])
def test_extract_video_id(url):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", [
    "",
    "https://example.com/",
    "https://www.youtube.com/watch?v=short",
    "https://www.youtube.com/watch?v=dQw4w9WgXcQX",
    "https://www.youtube.com/channel/UCabc",
])
def test_invalid_urls_rejected(url):
    assert extract_video_id(url) is None
    with pytest.raises(InvalidInput):
        get_video_id(url)


def test_build_video_url():
    assert build_video_url("dQw4w9WgXcQ") == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_resolve_returns_title_and_channel():
    youtube = FakeYouTube(videos={"dQw4w9WgXcQ": VIDEO})

    metadata = resolve(youtube, "https://youtu.be/dQw4w9WgXcQ")

    assert metadata.video_id == "dQw4w9WgXcQ"
    assert metadata.title == "Hype Boy"
    assert metadata.channel_title == "NewJeans"
    assert metadata.published_at.year == 2022


def test_resolve_invalid_url_makes_no_call():
    youtube = FakeYouTube(videos={"dQw4w9WgXcQ": VIDEO})

    with pytest.raises(InvalidInput):
        resolve(youtube, "https://example.com/not-youtube")

    assert youtube.requests == []


def test_unknown_video_is_not_found():
    with pytest.raises(NotFound):
        get_video_metadata(FakeYouTube(), "dQw4w9WgXcQ")


@pytest.mark.parametrize("status", [401, 403])
def test_auth_statuses_become_auth_expired(status):
    youtube = FakeYouTube(error=http_error(status))
    with pytest.raises(AuthExpired):
        get_video_metadata(youtube, "dQw4w9WgXcQ")


def test_other_statuses_become_upstream_error():
    youtube = FakeYouTube(error=http_error(500))
    with pytest.raises(UpstreamError):
        get_video_metadata(youtube, "dQw4w9WgXcQ")


def test_playlist_listing_follows_page_tokens():
    youtube = FakeYouTube(pages={
        None: {"items": [{"id": "i1"}, {"id": "i2"}], "nextPageToken": "p2"},
        "p2": {"items": [{"id": "i3"}], "nextPageToken": "p3"},
        "p3": {"items": []},
    })

    ids = YouTubePlaylistClient(youtube).list_item_ids("PL123")

    assert ids == ["i1", "i2", "i3"]
    tokens = [kw["pageToken"] for name, kw in youtube.requests]
    assert tokens == [None, "p2", "p3"]


def test_playlist_insert_body():
    youtube = FakeYouTube()
    YouTubePlaylistClient(youtube).insert_video("PL123", "dQw4w9WgXcQ")

    name, kwargs = youtube.requests[0]
    assert name == "playlistItems.insert"
    snippet = kwargs["body"]["snippet"]
    assert snippet["playlistId"] == "PL123"
    assert snippet["resourceId"] == {"kind": "youtube#video", "videoId": "dQw4w9WgXcQ"}


def test_playlist_errors_are_translated():
    client = YouTubePlaylistClient(FakeYouTube(error=http_error(401)))
    with pytest.raises(AuthExpired):
        client.delete_item("i1")
