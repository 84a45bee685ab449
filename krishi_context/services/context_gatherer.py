from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from ..db.records import RECENT_RECORDS_LIMIT, RecordStore
from ..models.context import AggregatedContext, FarmingRecord, Location, WeatherSnapshot
from ..models.crops import RankedCropList
from ..models.market import MarketSummary
from ..models.source_failure import SourceFailure
from .datasets import DatasetStore, load_market_report, load_ranked_crops

"""Context gathering for one advisory request.

Four sources are fetched best-effort:
    weather      - only when a provider and a complete location are given
    records      - most recent farming records (cap 10)
    top_crops    - regional ranking dataset
    market_data  - market summary for the crop chosen by the crop policy
                   from the records (needs the records result first)

weather / records / top_crops start together on a thread pool; market_data
starts as soon as records resolves. Everything is joined before gather()
returns. A failing source degrades to None / [] and is recorded in
AggregatedContext.failures; gather() itself never raises for source errors.
"""

__all__ = [
    "WeatherProvider",
    "CropSelectionPolicy",
    "latest_record_crop",
    "ContextGatherer",
]

T = TypeVar("T")


class WeatherProvider(Protocol):
    def current(self, lat: float, lon: float) -> WeatherSnapshot:
        ...


CropSelectionPolicy = Callable[[Sequence[FarmingRecord]], str | None]


def latest_record_crop(records: Sequence[FarmingRecord]) -> str | None:
    """Crop of the most recent record (records are newest first)."""
    if not records:
        return None
    return records[0].crop_name or None


class ContextGatherer:
    """Builds an AggregatedContext from the injected collaborators."""

    def __init__(
        self,
        record_store: RecordStore,
        dataset_store: DatasetStore,
        weather_provider: WeatherProvider | None = None,
        *,
        logger: logging.Logger | None = None,
        crop_policy: CropSelectionPolicy = latest_record_crop,
        record_limit: int = RECENT_RECORDS_LIMIT,
        max_workers: int = 4,
    ) -> None:
        self.record_store = record_store
        self.dataset_store = dataset_store
        self.weather_provider = weather_provider
        self.logger = logger or logging.getLogger(__name__)
        self.crop_policy = crop_policy
        self.record_limit = record_limit
        self.max_workers = max_workers

    # ---- individual sources -------------------------------------------------

    def fetch_weather(self, location: Location | None) -> WeatherSnapshot | None:
        if self.weather_provider is None or location is None or not location.is_complete:
            return None
        return self.weather_provider.current(location.lat, location.lon)  # type: ignore[arg-type]

    def fetch_records(self) -> list[FarmingRecord]:
        return list(self.record_store.recent(limit=self.record_limit))

    def fetch_top_crops(self) -> RankedCropList | None:
        return load_ranked_crops(self.dataset_store)

    def fetch_market_data(self, records: Sequence[FarmingRecord]) -> MarketSummary | None:
        crop_name = self.crop_policy(records)
        if not crop_name:
            return None
        report = load_market_report(self.dataset_store, crop_name, log=self.logger)
        return report.summary if report is not None else None

    # ---- orchestration ------------------------------------------------------

    def _resolve(
        self,
        source: str,
        future: concurrent.futures.Future[T],
        default: T,
        failures: list[SourceFailure],
    ) -> T:
        try:
            return future.result()
        except Exception as e:
            self.logger.warning("context source %s unavailable: %s: %s", source, type(e).__name__, e)
            failures.append(SourceFailure.create(source, e))
            return default

    def gather(self, location: Location | None = None) -> AggregatedContext:
        failures: list[SourceFailure] = []
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="context"
        )
        try:
            weather_f = executor.submit(self.fetch_weather, location)
            records_f = executor.submit(self.fetch_records)
            top_crops_f = executor.submit(self.fetch_top_crops)

            records = self._resolve("records", records_f, [], failures)
            market_f = (
                executor.submit(self.fetch_market_data, records) if records else None
            )

            weather = self._resolve("weather", weather_f, None, failures)
            top_crops = self._resolve("top_crops", top_crops_f, None, failures)
            market_data = (
                self._resolve("market_data", market_f, None, failures) if market_f is not None else None
            )
        except BaseException:
            # 呼び出し側の中断: 未着手の取得は破棄
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        context = AggregatedContext(
            weather=weather,
            records=records,
            top_crops=top_crops,
            market_data=market_data,
            failures=failures,
        )
        self.logger.debug(
            "context gathered weather=%s records=%d top_crops=%s market_data=%s failures=%d",
            weather is not None,
            len(records),
            len(top_crops.crops) if top_crops is not None else 0,
            market_data is not None,
            len(failures),
        )
        return context
