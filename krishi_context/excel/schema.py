from __future__ import annotations

import math
import numbers
from collections.abc import Sequence
from typing import Any

from ..models.tables import DetectedTable, RawSheet

"""Header row detection for loosely structured dataset sheets.

Dataset sheets begin with title / metadata rows, so the header is not at a
fixed position. The header is the first row whose first cell is exactly one
of the marker strings (no strip, no case folding).

- Market sheets: marker "District". Sheets with fewer than MIN_MARKET_ROWS
  rows, or without the marker, give None.
- Ranking sheets: markers "Crop" / "Crop Name" / "Name". Without a marker
  row 0 is used as the header.
"""

__all__ = [
    "MARKET_HEADER_MARKERS",
    "RANKING_HEADER_MARKERS",
    "MIN_MARKET_ROWS",
    "is_blank",
    "is_missing_key",
    "find_header_row",
    "extract_table",
    "detect_market_table",
    "detect_ranking_table",
]

MARKET_HEADER_MARKERS: tuple[str, ...] = ("District",)
RANKING_HEADER_MARKERS: tuple[str, ...] = ("Crop", "Crop Name", "Name")

# title + blank + header + at least one data row
MIN_MARKET_ROWS = 4


def is_blank(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, str):
        return cell == ""
    if isinstance(cell, float):
        return math.isnan(cell)
    return False


def is_missing_key(cell: Any) -> bool:
    """True when a first cell cannot name a data row.

    Blank cells plus numeric 0 and False, as a truthiness test on the
    spreadsheet value would see them. The string "0" is a key.
    """
    if is_blank(cell) or cell is False:
        return True
    return isinstance(cell, numbers.Real) and cell == 0


def _first_cell(row: Sequence[Any]) -> Any:
    return row[0] if len(row) > 0 else None


def find_header_row(sheet: RawSheet, markers: Sequence[str]) -> int | None:
    """Return the index of the first row whose first cell equals a marker."""
    for i, row in enumerate(sheet.rows):
        first = _first_cell(row)
        if isinstance(first, str) and first in markers:
            return i
    return None


def extract_table(sheet: RawSheet, header_row_index: int) -> DetectedTable:
    """Build a DetectedTable using `header_row_index` as the header row.

    Rows after the header whose first cell is missing (blank, 0 or False,
    including fully empty rows) are skipped.
    """
    if header_row_index < 0 or header_row_index >= len(sheet.rows):
        raise IndexError(
            f"sheet '{sheet.name}' has no row {header_row_index} (rows={len(sheet.rows)})"
        )
    header = sheet.rows[header_row_index]
    headers = ["" if is_blank(c) else str(c) for c in header]
    data_rows = [
        row for row in sheet.rows[header_row_index + 1:]
        if not is_missing_key(_first_cell(row))
    ]
    return DetectedTable(header_row_index=header_row_index, headers=headers, data_rows=data_rows)


def detect_market_table(sheet: RawSheet) -> DetectedTable | None:
    """Locate the District table of a market sheet, or None."""
    if len(sheet.rows) < MIN_MARKET_ROWS:
        return None
    idx = find_header_row(sheet, MARKET_HEADER_MARKERS)
    if idx is None:
        return None
    return extract_table(sheet, idx)


def detect_ranking_table(sheet: RawSheet) -> DetectedTable | None:
    """Locate the crop table of a ranking sheet.

    Falls back to row 0 as header when no marker row exists. Only an empty
    sheet gives None.
    """
    if not sheet.rows:
        return None
    idx = find_header_row(sheet, RANKING_HEADER_MARKERS)
    if idx is None:
        idx = 0  # permissive
    return extract_table(sheet, idx)
