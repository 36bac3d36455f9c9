#!/usr/bin/env python3
"""
Force a playlist rebuild from the command line.

Reads the submission sheet and replaces the YouTube playlist's contents
with its links, in sheet order. Authenticates with a stored refresh token.

Usage:
    python -m setlist.cli.sync                        # Use SYNC_REFRESH_TOKEN
    python -m setlist.cli.sync --refresh-token TOKEN  # Explicit token
    python -m setlist.cli.sync --dry-run              # Only list what would be added
    python -m setlist.cli.sync --check-config         # Check configuration and exit
"""

import argparse
import os
import sys
from dataclasses import dataclass, field

from setlist.auth.tokens import credentials_from_refresh_token
from setlist.errors import SetlistError
from setlist.ledger.reconcile import PlaylistReconciler
from setlist.ledger.submissions import SubmissionSheet
from setlist.log import init_logging
from setlist.settings import Settings, get_settings
from setlist.sheets.client import GoogleSheetRepository, build_sheets_service
from setlist.youtube.ids import build_video_url
from setlist.youtube.metadata import build_youtube_service
from setlist.youtube.playlist import YouTubePlaylistClient


@dataclass
class SyncStats:
    """Statistics for the sync run."""
    total: int = 0
    deleted: int = 0
    added: int = 0
    dry_run: bool = False
    video_ids: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def print_summary(self):
        """Print a summary of the sync run."""
        print("\n" + "=" * 60)
        print("PLAYLIST SYNC SUMMARY" + (" (dry run)" if self.dry_run else ""))
        print("=" * 60)
        print(f"Videos in sheet:         {self.total}")
        if self.dry_run:
            for video_id in self.video_ids:
                print(f"  {build_video_url(video_id)}")
            return
        print(f"Items deleted:           {self.deleted}")
        print(f"Videos added:            {self.added}")

        if self.failed:
            print("\nFailed to add:")
            for video_id in self.failed:
                print(f"  {video_id}")


def run_sync(
    sheet: SubmissionSheet,
    reconciler: PlaylistReconciler,
    dry_run: bool = False,
) -> SyncStats:
    """
    Rebuild the playlist from the sheet, or only report the sheet's videos.
    """
    reconciler.check_configured()
    video_ids = sheet.playlist_video_ids()
    stats = SyncStats(total=len(video_ids), dry_run=dry_run, video_ids=video_ids)

    if dry_run:
        return stats

    result = reconciler.reconcile(video_ids)
    stats.deleted = result.deleted
    stats.added = result.added
    stats.failed = list(result.failed)
    return stats


def missing_config(settings: Settings) -> list[str]:
    missing = []
    for key in ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "SPREADSHEET_ID", "YOUTUBE_PLAYLIST_ID"):
        if not getattr(settings, key):
            missing.append(key)
    return missing


def main():
    """Main entry point for the sync CLI."""
    parser = argparse.ArgumentParser(
        description="Rebuild the YouTube playlist from the submission sheet."
    )
    parser.add_argument(
        "--refresh-token",
        default=os.getenv("SYNC_REFRESH_TOKEN", ""),
        help="OAuth refresh token (default: SYNC_REFRESH_TOKEN)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Don't touch the playlist, just show what would be added"
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Just check configuration and exit"
    )

    args = parser.parse_args()

    settings = get_settings()
    init_logging(settings.LOG_LEVEL)

    missing = missing_config(settings)
    if not args.refresh_token:
        missing.append("SYNC_REFRESH_TOKEN")

    if missing:
        print("Configuration errors:")
        for key in missing:
            print(f"  Missing: {key}")
        sys.exit(1)

    if args.check_config:
        print("Configuration OK!")
        print(f"  SPREADSHEET_ID: {settings.SPREADSHEET_ID}")
        print(f"  YOUTUBE_PLAYLIST_ID: {settings.YOUTUBE_PLAYLIST_ID}")
        sys.exit(0)

    try:
        credentials = credentials_from_refresh_token(settings, args.refresh_token)
        sheet = SubmissionSheet(
            GoogleSheetRepository(build_sheets_service(credentials), settings.SPREADSHEET_ID),
            settings,
        )
        reconciler = PlaylistReconciler(
            YouTubePlaylistClient(build_youtube_service(credentials)),
            settings.YOUTUBE_PLAYLIST_ID,
        )

        stats = run_sync(sheet, reconciler, dry_run=args.dry_run)
        stats.print_summary()

        sys.exit(1 if stats.failed else 0)

    except SetlistError as e:
        print(f"Sync failed [{e.code}]: {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\nSync interrupted by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
