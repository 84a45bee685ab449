from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .tables import DetectedTable

"""Market price models for per-crop monthly datasets.

A market workbook has one sheet per month. Each sheet holds a District table
with positional columns:
    [district, current price, previous month price, previous year price,
     month change %, year change %, ...]
"""

__all__ = [
    "PriceRange",
    "MarketSummary",
    "PriceChangeSeries",
    "DistrictPriceComparison",
    "MarketReport",
]


@dataclass(frozen=True)
class PriceRange:
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class MarketSummary:
    """Aggregate statistics of the current-price column for one crop/month.

    avg_price and price_range are 0 when no valid price exists.
    total_districts counts data rows, not valid prices.
    """
    crop_name: str
    month: str
    total_districts: int = 0
    avg_price: float = 0.0
    price_range: PriceRange = field(default_factory=PriceRange)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PriceChangeSeries:
    """Month-over-month / year-over-year change percentages per district."""
    labels: list[str]
    month_over_month: list[float]
    year_over_year: list[float]


@dataclass(frozen=True)
class DistrictPriceComparison:
    """Current / previous month / previous year prices per district label.

    Values are None only in the keyed variant, where a district can lack
    one of the three prices.
    """
    labels: list[str]
    current: list[float | None]
    previous_month: list[float | None]
    previous_year: list[float | None]


@dataclass(frozen=True)
class MarketReport:
    """Everything loaded from one market workbook for one month."""
    summary: MarketSummary
    table: DetectedTable
    available_months: list[str] = field(default_factory=list)
    changes: PriceChangeSeries | None = None
