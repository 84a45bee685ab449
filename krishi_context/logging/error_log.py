from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.source_failure import SourceFailure

"""Buffered JSON Lines log of degraded context sources.

- fixed schema (SourceFailure fields only, no extra keys)
- one file per process: logs/context-failures-YYYYMMDD-HHMMSS.log (UTC),
  created on the first flush that has records
"""

__all__ = [
    "SourceFailure",
    "SourceFailureLog",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class SourceFailureLog:
    """In-memory buffer of SourceFailure records. flush() appends JSON lines."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[SourceFailure] = []
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"context-failures-{stamp}.log"
        return self._file_path

    def append(self, record: SourceFailure) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[SourceFailure]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None when nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
