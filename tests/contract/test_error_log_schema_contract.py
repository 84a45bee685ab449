from __future__ import annotations

import json
import re
from pathlib import Path

from krishi_context.logging.error_log import SourceFailureLog
from krishi_context.models.source_failure import SourceFailure

"""Failure log JSON line contract: fixed keys, UTC 'Z' timestamp, one object per line."""

EXPECTED_KEYS = {"timestamp", "source", "error_type", "message"}
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")
SOURCES = {"weather", "records", "top_crops", "market_data"}


def test_failure_log_lines_follow_contract(tmp_path: Path):
    log = SourceFailureLog(logs_dir=tmp_path)
    for source in sorted(SOURCES):
        log.append(SourceFailure.create(source, OSError(f"{source} down")))
    path = log.flush()
    assert path is not None
    assert re.fullmatch(r"context-failures-\d{8}-\d{6}\.log", path.name)
    for raw in path.read_text(encoding="utf-8").splitlines():
        record = json.loads(raw)
        assert set(record) == EXPECTED_KEYS
        assert record["source"] in SOURCES
        assert TIMESTAMP_PATTERN.match(record["timestamp"])
        assert record["error_type"] == "OSError"
