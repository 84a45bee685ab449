"""Domain models for the agricultural context engine.

This package contains the dataclasses shared by the spreadsheet parsing,
context gathering and prompt composition layers.
"""

from .config_models import AppConfig, DatabaseConfig
from .context import AggregatedContext, FarmingRecord, Location, WeatherSnapshot
from .crops import NOT_AVAILABLE, RankedCrop, RankedCropList
from .market import (
    DistrictPriceComparison,
    MarketReport,
    MarketSummary,
    PriceChangeSeries,
    PriceRange,
)
from .source_failure import SourceFailure
from .tables import DetectedTable, RawSheet

__all__ = [
    # Configuration models
    "AppConfig",
    "DatabaseConfig",
    # Sheet models
    "RawSheet",
    "DetectedTable",
    # Dataset models
    "NOT_AVAILABLE",
    "RankedCrop",
    "RankedCropList",
    "PriceRange",
    "MarketSummary",
    "MarketReport",
    "PriceChangeSeries",
    "DistrictPriceComparison",
    # Context models
    "Location",
    "FarmingRecord",
    "WeatherSnapshot",
    "AggregatedContext",
    "SourceFailure",
]
