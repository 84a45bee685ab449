from __future__ import annotations

from pathlib import Path

from krishi_context.cli import __main__ as cli
from krishi_context.logging.init import reset_logging

"""Exit code contract: 0 success, 1 fatal startup, 2 degraded context."""


def test_exit_code_values():
    assert (cli.EXIT_SUCCESS, cli.EXIT_FATAL, cli.EXIT_DEGRADED) == (0, 1, 2)


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    # config/krishi.yml 無し → exit 1
    reset_logging()
    code = cli.main(["context", "--no-db"])
    captured = capsys.readouterr()
    assert code == 1
    assert "ERROR config:" in captured.out


def test_exit_code_success_with_empty_data(write_config, data_dir, capsys):
    # データセット無しはエラーではない
    reset_logging()
    assert cli.main(["prompt", "q", "--no-db"]) == 0
    assert "market=unavailable failures=0" in capsys.readouterr().out


def test_exit_code_degraded(write_config, sample_datasets: Path, capsys):
    reset_logging()
    (sample_datasets / "top10_crops_kerala.xlsx").write_bytes(b"\x00")
    assert cli.main(["context", "--no-db"]) == 2
