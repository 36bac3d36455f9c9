"""
Row and column lookups over values read from the sheet.

Rows are lists of cell strings as returned by the Sheets values API: index 0
is row 1 and trailing empty rows/cells are omitted.
"""

from typing import Optional, Sequence


def find_append_target(rows: Sequence[Sequence[str]], start_row: int = 3) -> int:
    """
    Return the 1-based row to write the next submission to.

    Scans from `start_row` for the first row whose leading cell is empty.
    If every scanned row is populated, returns one past the last row.
    """
    for row_number in range(start_row, len(rows) + 1):
        row = rows[row_number - 1]
        if not row or not row[0]:
            return row_number

    return max(len(rows) + 1, start_row)


def find_user_column(
    header_row: Sequence[str],
    display_name: str,
    start: int = 0,
) -> Optional[int]:
    """
    Index of the first header cell equal to `display_name`, scanning from `start`.

    Returns None when the name is absent; there is no fallback column.
    """
    if not display_name:
        return None

    for index in range(max(start, 0), len(header_row)):
        if header_row[index] == display_name:
            return index

    return None
