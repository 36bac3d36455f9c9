"""
A1 notation helpers: column letters, indices and range strings.
"""

import re

_COLUMN_RE = re.compile(r"^[A-Za-z]+$")


def column_index(letters: str) -> int:
    """
    Convert a column letter to a 0-based index.

    "A" -> 0, "Z" -> 25, "AA" -> 26, "AE" -> 30
    """
    if not letters or not _COLUMN_RE.match(letters):
        raise ValueError(f"Invalid column letter: {letters!r}")

    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


def column_letter(index: int) -> str:
    """
    Convert a 0-based column index to its letter.

    0 -> "A", 20 -> "U", 30 -> "AE"
    """
    if index < 0:
        raise ValueError(f"Column index must be non-negative: {index}")

    letters = ""
    temp = index
    while temp >= 0:
        letters = chr(temp % 26 + ord("A")) + letters
        temp = temp // 26 - 1
    return letters


def offset_column(letters: str, offset: int) -> str:
    """Column `offset` places to the right of `letters`."""
    return column_letter(column_index(letters) + offset)


def quote_sheet(title: str) -> str:
    """Quote a sheet title for use in a range when it needs it."""
    if re.fullmatch(r"\w+", title):
        return title
    return "'" + title.replace("'", "''") + "'"


def a1_range(sheet: str, start: str, end: str = "") -> str:
    """
    Build a range string.

    a1_range("Sheet", "A3", "D3") -> "Sheet!A3:D3"
    a1_range("Sheet", "E", "E")   -> "Sheet!E:E"
    """
    ref = f"{start}:{end}" if end else start
    return f"{quote_sheet(sheet)}!{ref}"
