from __future__ import annotations

import math
import numbers
import re
from typing import Any

from ..models.tables import DetectedTable

"""Numeric cell sanitation.

Invalid cells are dropped from a series, never coerced to 0, so a series can
be shorter than the table it came from.
"""

__all__ = [
    "parse_numeric",
    "price_series",
    "change_series",
]

# 先頭の10進数表記のみ ("1_000" の "_" や "0x" は数値扱いしない)
_DECIMAL_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_numeric(cell: Any) -> float | None:
    """Return the cell as a finite float, or None.

    - real numbers are kept (bool is not a number here)
    - strings give their leading decimal number, like a spreadsheet's
      parseFloat: "150kg" -> 150.0, "1,200" -> 1.0, "1_000" -> 1.0,
      "abc" -> None
    - NaN / inf / anything else -> None
    """
    if isinstance(cell, bool):
        return None
    if isinstance(cell, numbers.Real):
        value = float(cell)
    elif isinstance(cell, str):
        m = _DECIMAL_PREFIX.match(cell)
        if m is None:
            return None
        value = float(m.group(0))
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


def _check_column(table: DetectedTable, column: int) -> None:
    if column < 0:
        raise IndexError(f"column index must be >= 0 (got {column})")


def price_series(table: DetectedTable, column: int) -> list[float]:
    """Positive prices of one column in data row order."""
    _check_column(table, column)
    series: list[float] = []
    for cell in table.column(column):
        value = parse_numeric(cell)
        if value is None or value <= 0:
            continue
        series.append(value)
    return series


def change_series(table: DetectedTable, column: int) -> list[float]:
    """Change percentages of one column; sign is kept, only non-numeric is dropped."""
    _check_column(table, column)
    series: list[float] = []
    for cell in table.column(column):
        value = parse_numeric(cell)
        if value is None:
            continue
        series.append(value)
    return series
