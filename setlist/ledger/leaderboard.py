"""
Read-only leaderboard projection.

Leaderboard sheets are views over the submission sheet (any sheet whose
title contains the marker). Each data row carries a back-reference to its
submission row so ratings can be written to the right place.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from setlist.settings import Settings
from setlist.sheets.a1 import a1_range, column_index
from setlist.sheets.client import SheetRepository
from setlist.sheets.hyperlink import CellData, decode_hyperlink
from setlist.sheets.locator import find_user_column

# Positions relative to LEADERBOARD_FIRST_COLUMN
COL_ARTIST = 0
COL_TITLE = 1
COL_YOUTUBE = 2


@dataclass
class LeaderboardEntry:
    artist: str
    title: str
    youtube_url: str
    rating: str
    original_row: int
    sheet_name: str


@dataclass
class LeaderboardView:
    sheets: list[str] = field(default_factory=list)
    entries: list[LeaderboardEntry] = field(default_factory=list)


def _cell(row: Sequence[CellData], index: Optional[int]) -> CellData:
    if index is None or index < 0 or index >= len(row):
        return CellData()
    return row[index]


def _text(row: Sequence[CellData], index: Optional[int]) -> str:
    return _cell(row, index).formatted_value or ""


def _parse_row_number(value: str) -> int:
    match = re.match(r"\s*(\d+)", value or "")
    return int(match.group(1)) if match else 0


def leaderboard_sheets(repo: SheetRepository, settings: Settings) -> list[str]:
    marker = settings.LEADERBOARD_SHEET_MARKER
    return [t for t in repo.sheet_titles() if t and marker in t]


def read_sheet_entries(
    repo: SheetRepository,
    settings: Settings,
    sheet_title: str,
    display_name: str,
) -> list[LeaderboardEntry]:
    first = column_index(settings.LEADERBOARD_FIRST_COLUMN)
    rating_start = column_index(settings.LEADERBOARD_RATING_START) - first
    original_col = column_index(settings.LEADERBOARD_ORIGINAL_ROW_COLUMN) - first

    rows = repo.read_cells(
        a1_range(sheet_title, settings.LEADERBOARD_FIRST_COLUMN, settings.LEADERBOARD_LAST_COLUMN)
    )
    if not rows:
        return []

    header = [c.formatted_value or "" for c in rows[0]]
    user_col = find_user_column(header, display_name, start=rating_start)

    entries = []
    for row in rows[1:]:
        artist = _text(row, COL_ARTIST)
        title = _text(row, COL_TITLE)
        if not artist and not title:
            continue

        entries.append(LeaderboardEntry(
            artist=artist,
            title=title,
            youtube_url=decode_hyperlink(_cell(row, COL_YOUTUBE)),
            rating=_text(row, user_col) if user_col is not None else "",
            original_row=_parse_row_number(_text(row, original_col)),
            sheet_name=sheet_title,
        ))

    return entries


def read_leaderboard(
    repo: SheetRepository,
    settings: Settings,
    display_name: str,
) -> LeaderboardView:
    """Collect entries from every leaderboard sheet, in sheet order."""
    view = LeaderboardView(sheets=leaderboard_sheets(repo, settings))
    for title in view.sheets:
        view.entries.extend(read_sheet_entries(repo, settings, title, display_name))
    return view
