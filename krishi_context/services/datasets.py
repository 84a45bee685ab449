from __future__ import annotations

import logging
from pathlib import Path

from ..excel.reader import WorkbookReadError, read_workbook
from ..excel.schema import detect_market_table, detect_ranking_table
from ..models.crops import RankedCropList
from ..models.market import MarketReport
from ..models.tables import RawSheet
from .market_stats import EXPECTED_MARKET_COLUMNS, check_market_layout, price_changes, summarize_market
from .ranking import build_ranked_crops

"""Dataset file store and dataset loaders.

Datasets are .xlsx files in one directory:
- the ranking workbook (default top10_crops_kerala.xlsx), first sheet used
- one market workbook per crop (<CROP>.xlsx), one sheet per month

A missing file is a normal outcome (None), not an error. A file that exists
but cannot be read raises DatasetError.
"""

__all__ = [
    "DATASET_SUFFIX",
    "DatasetError",
    "DatasetStore",
    "load_ranked_crops",
    "load_market_report",
]

DATASET_SUFFIX = ".xlsx"

logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when a dataset file exists but cannot be loaded."""


class DatasetStore:
    """Directory-backed dataset file store."""

    def __init__(self, directory: Path | str, ranking_dataset: str = "top10_crops_kerala") -> None:
        self.directory = Path(directory)
        self.ranking_dataset = ranking_dataset

    def path_for(self, identifier: str) -> Path:
        return self.directory / f"{identifier}{DATASET_SUFFIX}"

    def read_sheets(self, identifier: str) -> dict[str, RawSheet] | None:
        """Read every sheet of dataset `identifier`, or None when the file is missing."""
        path = self.path_for(identifier)
        if not path.is_file():
            logger.debug("dataset not found: %s", path)
            return None
        try:
            return read_workbook(path)
        except WorkbookReadError as e:
            raise DatasetError(str(e)) from e

    def scan(self) -> list[Path]:
        """Dataset files in the directory (non-recursive), sorted by name."""
        if not self.directory.is_dir():
            raise DatasetError(f"dataset directory not found: {self.directory}")
        try:
            return sorted(
                p for p in self.directory.iterdir() if p.is_file() and p.suffix == DATASET_SUFFIX
            )
        except OSError as e:
            raise DatasetError(f"error reading directory {self.directory}: {e}") from e

    def available_crops(self) -> list[str]:
        """Crop names that have a market workbook."""
        return [p.stem for p in self.scan() if p.stem != self.ranking_dataset]


def load_ranked_crops(store: DatasetStore) -> RankedCropList | None:
    """Top crops from the first sheet of the ranking workbook."""
    sheets = store.read_sheets(store.ranking_dataset)
    if not sheets:
        return None
    first = next(iter(sheets.values()))
    return build_ranked_crops(detect_ranking_table(first))


def load_market_report(
    store: DatasetStore,
    crop_name: str,
    month: str | None = None,
    log: logging.Logger | None = None,
) -> MarketReport | None:
    """Market statistics of `crop_name` for `month` (default: first sheet).

    None when the crop has no workbook, the month sheet is missing, or the
    sheet has no District table.
    """
    log = log or logger
    sheets = store.read_sheets(crop_name)
    if not sheets:
        return None
    months = list(sheets.keys())
    selected = month if month is not None else months[0]
    sheet = sheets.get(selected)
    if sheet is None:
        log.info("market dataset %s has no sheet for month=%s (available=%s)", crop_name, selected, months)
        return None

    table = detect_market_table(sheet)
    if table is None:
        log.info("market dataset %s month=%s: no District table found", crop_name, selected)
        return None

    for problem in check_market_layout(table):
        log.warning("market dataset %s month=%s layout: %s", crop_name, selected, problem)

    changes = price_changes(table) if len(table.headers) >= EXPECTED_MARKET_COLUMNS else None
    return MarketReport(
        summary=summarize_market(table, crop_name, selected),
        table=table,
        available_months=months,
        changes=changes,
    )
