"""
Per-user ratings stored in the submission sheet.

Each member owns one column in the ratings region, identified by their
display name in header row 1. Columns are never created here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from setlist.errors import InvalidInput, NotFound
from setlist.ledger.submissions import SubmissionSheet
from setlist.log import get_logger
from setlist.sheets.a1 import a1_range, offset_column
from setlist.sheets.locator import find_user_column

logger = get_logger(__name__)


@dataclass
class RatingResult:
    row: int
    rating: str
    column: str


class RatingLedger:
    def __init__(self, sheet: SubmissionSheet):
        self.sheet = sheet
        self.settings = sheet.settings

    def validate(self, row: int, rating: str) -> None:
        if rating not in self.settings.valid_ratings:
            raise InvalidInput(
                f"Invalid rating: {rating!r}",
                details={"allowed": self.settings.RATING_TOKENS},
            )
        if isinstance(row, bool) or not isinstance(row, int) or row < 1:
            raise InvalidInput(f"Invalid row: {row!r}")

    def find_column(self, display_name: str) -> Optional[str]:
        """Column letter of the user's rating column, or None."""
        start = self.settings.RATING_HEADER_START
        header_range = a1_range(
            self.sheet.title, f"{start}1", f"{self.settings.RATING_HEADER_END}1"
        )
        values = self.sheet.repo.read_values(header_range)
        header = values[0] if values else []

        offset = find_user_column(header, display_name)
        if offset is None:
            return None
        return offset_column(start, offset)

    def _require_column(self, display_name: str) -> str:
        if not display_name:
            raise InvalidInput("Display name is required")
        column = self.find_column(display_name)
        if column is None:
            raise NotFound(f"No rating column for user: {display_name}")
        return column

    def set_rating(self, row: int, display_name: str, rating: str) -> RatingResult:
        """
        Write `rating` into the user's column at `row`. An empty rating
        clears the cell.
        """
        self.validate(row, rating)
        column = self._require_column(display_name)

        self.sheet.write_cell(row, column, rating)
        logger.info(f"{display_name} rated row {row} as {rating!r} ({column})")
        return RatingResult(row=row, rating=rating, column=column)

    def get_rating(self, row: int, display_name: str) -> str:
        if isinstance(row, bool) or not isinstance(row, int) or row < 1:
            raise InvalidInput(f"Invalid row: {row!r}")
        column = self._require_column(display_name)
        return self.sheet.read_cell(row, column)
