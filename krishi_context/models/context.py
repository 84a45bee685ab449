from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .crops import RankedCropList
from .market import MarketSummary
from .source_failure import SourceFailure

"""Per-request context models.

FarmingRecord and WeatherSnapshot are owned by external collaborators (record
store, weather provider) and are consumed read-only. AggregatedContext is
built fresh for every request by the context gatherer and discarded after the
prompt is composed.
"""

__all__ = [
    "Location",
    "FarmingRecord",
    "WeatherSnapshot",
    "AggregatedContext",
]


@dataclass(frozen=True)
class Location:
    lat: float | None = None
    lon: float | None = None

    @property
    def is_complete(self) -> bool:
        # 0.0 は有効な座標
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class FarmingRecord:
    crop_name: str
    planting_date: Any
    expected_harvest: Any = None
    notes: str | None = None
    soil_type: str | None = None


@dataclass(frozen=True)
class WeatherSnapshot:
    """Point-in-time weather reading. Never cached."""
    temperature: float
    humidity: float
    description: str
    wind_speed: float
    city: str


@dataclass(frozen=True)
class AggregatedContext:
    """Weather, records, rankings and market data gathered for one request.

    Any field may be empty when its source failed or was not requested;
    `failures` lists the sources that failed.
    """
    weather: WeatherSnapshot | None = None
    records: list[FarmingRecord] = field(default_factory=list)
    top_crops: RankedCropList | None = None
    market_data: MarketSummary | None = None
    failures: list[SourceFailure] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "weather": asdict(self.weather) if self.weather is not None else None,
            "records": [asdict(r) for r in self.records],
            "top_crops": self.top_crops.to_dict() if self.top_crops is not None else None,
            "market_data": self.market_data.to_dict() if self.market_data is not None else None,
            "failures": [asdict(f) for f in self.failures],
        }
