from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.tables import RawSheet

"""Workbook reader for spreadsheet datasets.

Sheets are read without a header (header=None) because dataset files start
with title / metadata rows; locating the real header row is the job of
excel/schema.py. Empty cells (NaN) become None and trailing empty cells are
dropped so that short rows stay short.
"""

__all__ = [
    "WorkbookReadError",
    "read_workbook",
    "frame_to_raw_sheet",
]


class WorkbookReadError(Exception):
    """Raised when a dataset file exists but cannot be parsed as a workbook."""


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):  # pragma: no cover - non-scalar cell
        return value
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        # numpy scalar -> python scalar
        try:
            return value.item()
        except (AttributeError, ValueError):  # pragma: no cover
            return value
    return value


def frame_to_raw_sheet(df: pd.DataFrame, sheet_name: str) -> RawSheet:
    """Convert a header-less DataFrame into a RawSheet.

    Steps:
    1. NaN / NaT cells -> None
    2. numpy scalars -> python scalars
    3. trailing None cells of each row are trimmed (a fully empty row becomes ())
    """
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        cells = [_clean_cell(v) for v in raw]
        while cells and cells[-1] is None:
            cells.pop()
        rows.append(cells)
    return RawSheet.from_rows(sheet_name, rows)


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, RawSheet]:
    """Read an Excel file returning RawSheets keyed by sheet name.

    Parameters
    ----------
    path: Excel file path
    target_sheets: restrict to these sheet names (None = all sheets)

    The returned dict keeps the workbook's sheet order; market workbooks rely
    on it (first sheet = default month).
    """
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:  # openpyxl / zipfile raise their own types for corrupt files
        raise WorkbookReadError(f"cannot read workbook {path}: {e}") from e

    sheets: dict[str, RawSheet] = {}
    try:
        for name in xls.sheet_names:
            if target_sheets is not None and str(name) not in target_sheets:
                continue
            df = xls.parse(name, header=None)
            sheets[str(name)] = frame_to_raw_sheet(df, str(name))
    finally:
        xls.close()
    return sheets
