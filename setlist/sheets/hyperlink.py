"""
Encode and decode URLs stored as spreadsheet hyperlink cells.

Writes always use the HYPERLINK formula. Reads accept whatever the cell
exposes, since cells may have been filled by pasting, by formula or through
the API's hyperlink attribute.
"""

import re
from dataclasses import dataclass
from typing import Optional

from setlist.errors import InvalidInput

LINK_LABEL = "URL"

# Only the first argument matters, so ";" and "," separators both match.
# Each quote style runs to its own closing quote, so "...it's..." stays whole.
_HYPERLINK_RE = re.compile(r"""=HYPERLINK\s*\(\s*(?:"([^"]+)"|'([^']+)')""", re.IGNORECASE)


@dataclass
class CellData:
    """The parts of a sheet cell a link can be recovered from."""
    hyperlink: Optional[str] = None
    formula: Optional[str] = None
    formatted_value: Optional[str] = None

    @classmethod
    def from_api(cls, cell: Optional[dict]) -> "CellData":
        """Build from a Sheets API CellData resource."""
        if not cell:
            return cls()
        entered = cell.get("userEnteredValue") or {}
        return cls(
            hyperlink=cell.get("hyperlink"),
            formula=entered.get("formulaValue"),
            formatted_value=cell.get("formattedValue"),
        )


def encode_hyperlink(url: str, label: str = LINK_LABEL) -> str:
    """
    Wrap a URL in a HYPERLINK formula with a fixed display label.

    The formula is written USER_ENTERED, so a double quote in either
    argument would end the string literal early and is rejected.
    """
    if not url or any(c in url for c in '"\r\n'):
        raise InvalidInput(f"URL cannot be stored as a link: {url!r}")
    if '"' in label:
        raise InvalidInput(f"Link label cannot contain a double quote: {label!r}")
    return f'=HYPERLINK("{url}"; "{label}")'


def url_from_formula(formula: Optional[str]) -> str:
    """Extract the first quoted argument of a HYPERLINK formula."""
    if not formula:
        return ""
    match = _HYPERLINK_RE.search(formula)
    if not match:
        return ""
    return match.group(1) or match.group(2)


def decode_hyperlink(cell: CellData) -> str:
    """
    Recover the URL from a cell, or "" when the cell holds no link.

    Priority: hyperlink attribute, HYPERLINK formula, absolute URL text.
    """
    if cell.hyperlink:
        return cell.hyperlink

    url = url_from_formula(cell.formula)
    if url:
        return url

    text = cell.formatted_value or ""
    if text.startswith("http://") or text.startswith("https://"):
        return text

    return ""
