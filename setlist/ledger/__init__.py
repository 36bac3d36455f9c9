# Sheet-backed ledger: submissions, ratings, leaderboard, playlist sync
from setlist.ledger.leaderboard import LeaderboardEntry, LeaderboardView, read_leaderboard
from setlist.ledger.ratings import RatingLedger, RatingResult
from setlist.ledger.reconcile import PlaylistReconciler, SyncResult, sync_playlist
from setlist.ledger.submissions import SubmissionSheet

__all__ = [
    "LeaderboardEntry",
    "LeaderboardView",
    "read_leaderboard",
    "RatingLedger",
    "RatingResult",
    "PlaylistReconciler",
    "SyncResult",
    "sync_playlist",
    "SubmissionSheet",
]
