from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Sheet-level models for spreadsheet datasets.

RawSheet is the untouched row/cell view of one workbook sheet. DetectedTable is
the header + data view produced by the schema detector (excel/schema.py).
"""

__all__ = [
    "RawSheet",
    "DetectedTable",
]


@dataclass(frozen=True)
class RawSheet:
    """One sheet of one dataset file, as read.

    Cells are int / float / str / datetime, or None for an empty cell.
    Rows may have different lengths (trailing empty cells are not stored).
    """
    name: str
    rows: tuple[tuple[Any, ...], ...] = ()

    @classmethod
    def from_rows(cls, name: str, rows: list[list[Any]]) -> RawSheet:
        return cls(name=name, rows=tuple(tuple(r) for r in rows))

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class DetectedTable:
    """Header row and data rows located inside a RawSheet.

    data_rows never contains the header row, rows above it, or rows whose
    first cell is blank, 0 or False.
    """
    header_row_index: int
    headers: list[str]
    data_rows: list[tuple[Any, ...]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.data_rows)

    def column(self, index: int) -> list[Any]:
        """Cells of one column in data row order (None where a row is too short)."""
        return [row[index] if index < len(row) else None for row in self.data_rows]
