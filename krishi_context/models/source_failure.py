from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""SourceFailure model for degraded context sources.

A context source (weather, records, top crops, market data) that fails is not
an error for the request: the field degrades to None / empty and one
SourceFailure is recorded. The record is serialized as one JSON line by
logging/error_log.py.
"""

__all__ = [
    "SourceFailure",
]


@dataclass(frozen=True)
class SourceFailure:
    """Structured record of one failed context source.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Context field that degraded (weather|records|top_crops|market_data)
        error_type: Exception class name of the failure
        message: Exception message
    """
    timestamp: str
    source: str
    error_type: str
    message: str

    @staticmethod
    def create(source: str, error: BaseException) -> SourceFailure:
        """Create a SourceFailure for `error` with the current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return SourceFailure(
            timestamp=ts,
            source=source,
            error_type=type(error).__name__,
            message=str(error),
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
