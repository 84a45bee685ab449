from __future__ import annotations

import json
from pathlib import Path

from krishi_context.logging.error_log import SourceFailureLog
from krishi_context.models.source_failure import SourceFailure


def test_flush_empty_writes_nothing(tmp_path: Path):
    log = SourceFailureLog(logs_dir=tmp_path / "logs")
    assert log.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_writes_json_lines(tmp_path: Path):
    log = SourceFailureLog(logs_dir=tmp_path / "logs")
    log.append(SourceFailure.create("weather", TimeoutError("timed out")))
    log.extend([SourceFailure.create("records", ConnectionError("refused"))])
    assert len(log) == 2
    path = log.flush()
    assert path is not None
    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("context-failures-") and path.suffix == ".log"
    lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [x["source"] for x in lines] == ["weather", "records"]
    assert lines[0]["error_type"] == "TimeoutError"
    assert lines[1]["message"] == "refused"
    assert len(log) == 0


def test_flush_appends_to_same_file(tmp_path: Path):
    log = SourceFailureLog(logs_dir=tmp_path)
    log.append(SourceFailure.create("weather", ValueError("a")))
    first = log.flush()
    log.append(SourceFailure.create("weather", ValueError("b")))
    second = log.flush()
    assert first == second
    assert len(first.read_text(encoding="utf-8").splitlines()) == 2
