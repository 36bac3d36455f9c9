"""
The submission sheet: one row per submitted song.

Row layout, starting at SUBMISSION_FIRST_COLUMN:
    submitter | artist | title | =HYPERLINK("<url>"; "URL")

The sheet is append-only and edited by hand as well, so the next row is
located at write time rather than tracked.
"""

from __future__ import annotations

from typing import Optional

from setlist.errors import InvalidInput
from setlist.log import get_logger
from setlist.settings import Settings
from setlist.sheets.a1 import a1_range, offset_column
from setlist.sheets.client import SheetRepository
from setlist.sheets.hyperlink import CellData, decode_hyperlink, encode_hyperlink
from setlist.sheets.locator import find_append_target
from setlist.youtube.ids import extract_video_id

SHEET_ROW_COUNT = 1000
SUBMISSION_WIDTH = 4

logger = get_logger(__name__)


class SubmissionSheet:
    """Row/cell access to the submission sheet."""

    def __init__(self, repo: SheetRepository, settings: Settings):
        self.repo = repo
        self.settings = settings
        self.title = settings.SUBMISSION_SHEET
        self.first_column = settings.SUBMISSION_FIRST_COLUMN
        self.last_column = offset_column(self.first_column, SUBMISSION_WIDTH - 1)

    def ensure_sheet(self) -> bool:
        """
        Create the sheet with its header row if it does not exist.
        Returns True if it was created.
        """
        if self.title in self.repo.sheet_titles():
            return False

        self.repo.add_sheet(self.title, SHEET_ROW_COUNT, SUBMISSION_WIDTH)
        start = self.settings.SUBMISSION_START_ROW
        self.repo.write_values(
            a1_range(self.title, f"{self.first_column}{start}", f"{self.last_column}{start}"),
            [list(self.settings.SUBMISSION_HEADER)],
            raw=True,
        )
        return True

    def find_row(self) -> int:
        """The row the next submission will be written to."""
        rows = self.repo.read_values(a1_range(self.title, self.first_column, self.last_column))
        return find_append_target(rows, self.settings.SUBMISSION_START_ROW)

    def append_row(self, values: list[str]) -> int:
        """Write `values` into the next free row. Returns the row number."""
        row = self.find_row()
        self.repo.write_values(
            a1_range(self.title, f"{self.first_column}{row}", f"{self.last_column}{row}"),
            [values],
        )
        logger.info(f"Appended submission at {self.title}!{row}")
        return row

    def read_column_range(self, column: str, skip_rows: int = 0) -> list[CellData]:
        """Cells of one column, top to bottom."""
        rows = self.repo.read_cells(a1_range(self.title, column, column))
        return [row[0] if row else CellData() for row in rows[skip_rows:]]

    def read_cell(self, row: int, column: str) -> str:
        values = self.repo.read_values(a1_range(self.title, f"{column}{row}"))
        if values and values[0]:
            return values[0][0]
        return ""

    def write_cell(self, row: int, column: str, value: str) -> None:
        """Write a single literal value (not parsed as a formula)."""
        self.repo.write_values(a1_range(self.title, f"{column}{row}"), [[value]], raw=True)

    def submit(self, user_name: str, artist: str, title: str, url: str) -> int:
        """
        Record a submission. Creates the sheet on first use.
        Returns the row written.
        """
        if not artist or not title or not url:
            raise InvalidInput("artist, title and url are all required")
        if not user_name:
            raise InvalidInput("Submitter name is required")

        link = encode_hyperlink(url)
        self.ensure_sheet()
        return self.append_row([user_name, artist, title, link])

    def playlist_video_ids(self, link_column: Optional[str] = None) -> list[str]:
        """
        Video IDs linked from the sheet, in row order.

        The first row is a header. Duplicates and cells without a
        recognisable video link are dropped.
        """
        column = link_column or self.settings.PLAYLIST_LINK_COLUMN
        video_ids: list[str] = []
        seen: set[str] = set()

        for cell in self.read_column_range(column, skip_rows=1):
            video_id = extract_video_id(decode_hyperlink(cell))
            if video_id and video_id not in seen:
                seen.add(video_id)
                video_ids.append(video_id)

        return video_ids
