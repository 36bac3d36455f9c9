import pytest

from setlist.errors import AuthExpired, ConfigurationError
from setlist.ledger.reconcile import PlaylistReconciler, sync_playlist
from setlist.ledger.submissions import SubmissionSheet
from tests.fakes import FakePlaylistClient, link

A, B, C = "aaaaaaaaaaa", "bbbbbbbbbbb", "ccccccccccc"
X, Y = "xxxxxxxxxxx", "yyyyyyyyyyy"


def test_replaces_playlist_with_sheet_order():
    client = FakePlaylistClient([X, Y])

    result = PlaylistReconciler(client, "PL123").reconcile([A, B, C])

    assert (result.deleted, result.added, result.total) == (2, 3, 3)
    assert result.failed == []
    assert client.video_ids == [A, B, C]


def test_same_starting_state_gives_same_counts():
    first = PlaylistReconciler(FakePlaylistClient([X, Y]), "PL123").reconcile([A, B, C])
    second = PlaylistReconciler(FakePlaylistClient([X, Y]), "PL123").reconcile([A, B, C])
    assert first == second


def test_repeated_sync_is_stable():
    client = FakePlaylistClient([X, Y])
    reconciler = PlaylistReconciler(client, "PL123")

    reconciler.reconcile([A, B, C])
    again = reconciler.reconcile([A, B, C])

    assert (again.deleted, again.added, again.total) == (3, 3, 3)
    assert client.video_ids == [A, B, C]


def test_failed_insert_does_not_abort():
    client = FakePlaylistClient([X, Y], reject={B})

    result = PlaylistReconciler(client, "PL123").reconcile([A, B, C])

    assert (result.deleted, result.added, result.total) == (2, 2, 3)
    assert result.failed == [B]
    assert client.video_ids == [A, C]


def test_missing_playlist_id_fails_before_network():
    client = FakePlaylistClient([X])

    with pytest.raises(ConfigurationError):
        PlaylistReconciler(client, "").reconcile([A])

    assert client.calls == []


def test_enumeration_failure_propagates():
    class Expired(FakePlaylistClient):
        def list_item_ids(self, playlist_id):
            raise AuthExpired("token rejected")

    with pytest.raises(AuthExpired):
        PlaylistReconciler(Expired(), "PL123").reconcile([A])


def test_empty_sheet_empties_playlist():
    client = FakePlaylistClient([X, Y])
    result = PlaylistReconciler(client, "PL123").reconcile([])
    assert (result.deleted, result.added, result.total) == (2, 0, 0)
    assert client.video_ids == []


def test_sync_reads_sheet_links(repo, settings):
    repo.add_rows("선곡", 1, [
        ["유튜브 링크"],
        [link(f"https://youtu.be/{A}")],
        [link(f"https://youtu.be/{B}")],
        [link(f"https://youtu.be/{A}")],
    ], first_col="E")
    client = FakePlaylistClient([X])

    result = sync_playlist(SubmissionSheet(repo, settings), PlaylistReconciler(client, "PL123"))

    assert (result.deleted, result.added, result.total) == (1, 2, 2)
    assert client.video_ids == [A, B]


def test_sync_unconfigured_reads_nothing(repo, settings):
    with pytest.raises(ConfigurationError):
        sync_playlist(SubmissionSheet(repo, settings), PlaylistReconciler(FakePlaylistClient(), ""))
    assert repo.calls == []
