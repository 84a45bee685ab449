from __future__ import annotations

import statistics

from ..excel.sanitize import change_series, parse_numeric, price_series
from ..excel.schema import MARKET_HEADER_MARKERS, is_missing_key
from ..models.market import (
    DistrictPriceComparison,
    MarketSummary,
    PriceChangeSeries,
    PriceRange,
)
from ..models.tables import DetectedTable

"""Market statistics for District tables.

Columns are accessed by position, not by header name:
    0 district, 1 current price, 2 previous month price, 3 previous year price,
    4 month change %, 5 year change %
"""

__all__ = [
    "DISTRICT_COL",
    "CURRENT_PRICE_COL",
    "PREV_MONTH_PRICE_COL",
    "PREV_YEAR_PRICE_COL",
    "MONTH_CHANGE_COL",
    "YEAR_CHANGE_COL",
    "summarize_market",
    "price_changes",
    "district_price_comparison",
    "keyed_district_prices",
    "check_market_layout",
]

DISTRICT_COL = 0
CURRENT_PRICE_COL = 1
PREV_MONTH_PRICE_COL = 2
PREV_YEAR_PRICE_COL = 3
MONTH_CHANGE_COL = 4
YEAR_CHANGE_COL = 5

EXPECTED_MARKET_COLUMNS = YEAR_CHANGE_COL + 1


def summarize_market(table: DetectedTable | None, crop_name: str, month: str) -> MarketSummary:
    """Build the MarketSummary of the current-price column.

    total_districts is the number of data rows, whatever the number of valid
    prices. No valid price (or no table) gives avg_price=0 and range (0, 0).
    """
    if table is None:
        return MarketSummary(crop_name=crop_name, month=month)
    prices = price_series(table, CURRENT_PRICE_COL)
    if not prices:
        return MarketSummary(crop_name=crop_name, month=month, total_districts=table.row_count)
    return MarketSummary(
        crop_name=crop_name,
        month=month,
        total_districts=table.row_count,
        avg_price=statistics.fmean(prices),
        price_range=PriceRange(min=min(prices), max=max(prices)),
    )


def _district_labels(table: DetectedTable) -> list[str]:
    return [str(c) for c in table.column(DISTRICT_COL) if not is_missing_key(c)]


def price_changes(table: DetectedTable) -> PriceChangeSeries:
    """Month-over-month and year-over-year change series.

    Labels are cut to the length of the month series; rows dropped from a
    series are not tracked, so labels can drift from values.
    """
    month = change_series(table, MONTH_CHANGE_COL)
    year = change_series(table, YEAR_CHANGE_COL)
    labels = _district_labels(table)[: len(month)]
    return PriceChangeSeries(labels=labels, month_over_month=month, year_over_year=year)


def district_price_comparison(table: DetectedTable) -> DistrictPriceComparison:
    """Current / previous month / previous year prices with positional labels.

    The three series are filtered independently and the labels are cut to
    the shortest one. When different rows are dropped from different
    columns, position i no longer names the same district in every series;
    use keyed_district_prices() when that matters.
    """
    current = price_series(table, CURRENT_PRICE_COL)
    prev_month = price_series(table, PREV_MONTH_PRICE_COL)
    prev_year = price_series(table, PREV_YEAR_PRICE_COL)
    shortest = min(len(current), len(prev_month), len(prev_year))
    return DistrictPriceComparison(
        labels=_district_labels(table)[:shortest],
        current=list(current),
        previous_month=list(prev_month),
        previous_year=list(prev_year),
    )


def keyed_district_prices(table: DetectedTable) -> DistrictPriceComparison:
    """Per-district prices where every position refers to the same district.

    A district is kept only when all three of its prices are valid.
    """
    labels: list[str] = []
    current: list[float | None] = []
    prev_month: list[float | None] = []
    prev_year: list[float | None] = []
    for row in table.data_rows:
        values = []
        for col in (CURRENT_PRICE_COL, PREV_MONTH_PRICE_COL, PREV_YEAR_PRICE_COL):
            v = parse_numeric(row[col]) if col < len(row) else None
            values.append(v if v is not None and v > 0 else None)
        if any(v is None for v in values):
            continue
        labels.append(str(row[DISTRICT_COL]))
        current.append(values[0])
        prev_month.append(values[1])
        prev_year.append(values[2])
    return DistrictPriceComparison(
        labels=labels, current=current, previous_month=prev_month, previous_year=prev_year
    )


def check_market_layout(table: DetectedTable) -> list[str]:
    """Return layout problems of a District table (empty list = looks fine).

    Statistics are still computed positionally; the result is only used for
    warnings.
    """
    problems: list[str] = []
    if not table.headers or table.headers[DISTRICT_COL] not in MARKET_HEADER_MARKERS:
        problems.append(f"first header is {table.headers[:1]!r}, expected 'District'")
    if len(table.headers) < EXPECTED_MARKET_COLUMNS:
        problems.append(
            f"header has {len(table.headers)} columns, expected at least {EXPECTED_MARKET_COLUMNS}"
        )
    numeric_headers = [
        h for h in table.headers[CURRENT_PRICE_COL:EXPECTED_MARKET_COLUMNS] if parse_numeric(h) is not None
    ]
    if numeric_headers:
        # 価格セルがヘッダ行に紛れ込んでいる (列ずれの疑い)
        problems.append(f"numeric header cells {numeric_headers!r}")
    return problems
