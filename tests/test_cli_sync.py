import pytest

from setlist.cli.sync import missing_config, run_sync
from setlist.errors import ConfigurationError
from setlist.ledger.reconcile import PlaylistReconciler
from setlist.ledger.submissions import SubmissionSheet
from tests.fakes import FakePlaylistClient, link


@pytest.fixture
def sheet(repo, settings):
    repo.add_rows("선곡", 1, [
        ["링크"],
        [link("https://youtu.be/aaaaaaaaaaa")],
        [link("https://www.youtube.com/watch?v=bbbbbbbbbbb")],
    ], first_col="E")
    return SubmissionSheet(repo, settings)


def test_run_sync_replaces_playlist(sheet):
    playlist = FakePlaylistClient(["zzzzzzzzzzz"])

    stats = run_sync(sheet, PlaylistReconciler(playlist, "PL123"))

    assert (stats.total, stats.deleted, stats.added) == (2, 1, 2)
    assert playlist.video_ids == ["aaaaaaaaaaa", "bbbbbbbbbbb"]


def test_dry_run_leaves_playlist_alone(sheet):
    playlist = FakePlaylistClient(["zzzzzzzzzzz"])

    stats = run_sync(sheet, PlaylistReconciler(playlist, "PL123"), dry_run=True)

    assert stats.video_ids == ["aaaaaaaaaaa", "bbbbbbbbbbb"]
    assert playlist.calls == []
    assert playlist.video_ids == ["zzzzzzzzzzz"]


def test_unconfigured_playlist_fails_before_reading(sheet, repo):
    with pytest.raises(ConfigurationError):
        run_sync(sheet, PlaylistReconciler(FakePlaylistClient(), ""))
    assert repo.calls == []


def test_failed_inserts_are_reported(sheet):
    playlist = FakePlaylistClient(reject={"aaaaaaaaaaa"})

    stats = run_sync(sheet, PlaylistReconciler(playlist, "PL123"))

    assert stats.added == 1
    assert stats.failed == ["aaaaaaaaaaa"]


def test_missing_config(monkeypatch):
    from setlist.settings import Settings

    monkeypatch.delenv("YOUTUBE_PLAYLIST_ID")
    assert missing_config(Settings()) == ["YOUTUBE_PLAYLIST_ID"]
