from __future__ import annotations

import argparse
import json
import os
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..db.records import InMemoryRecordStore, PostgresRecordStore, RecordStoreError, open_connection
from ..excel.reader import WorkbookReadError, read_workbook
from ..excel.schema import detect_market_table, detect_ranking_table
from ..logging.error_log import SourceFailureLog
from ..logging.init import log_summary, setup_logging
from ..models.config_models import AppConfig
from ..models.context import Location
from ..services.context_gatherer import ContextGatherer, WeatherProvider
from ..services.datasets import DatasetError, DatasetStore
from ..services.market_stats import summarize_market
from ..services.progress import ProgressTracker
from ..services.prompt import compose_prompt
from ..services.summary import render_context_summary

"""CLI entrypoint.

Commands:
- prompt "<query>"   gather context and print the composed prompt
- context            gather context and print it as JSON
  (both accept --lat/--lon; weather needs a provider passed to main())
- inspect            print the detected table of every dataset file

Exit codes: 0 success, 1 fatal (config / data directory), 2 degraded
(at least one context source failed).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_DEGRADED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so that connection settings there take precedence."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="krishi-context", description="Agricultural advisory context builder"
    )
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    prompt_p = sub.add_parser("prompt", help="Print the composed prompt for a query")
    prompt_p.add_argument("query", help="Farmer question")
    prompt_p.add_argument("--language", choices=["en", "hi", "ml"], default=None)
    prompt_p.add_argument("--no-db", action="store_true", help="Do not connect to the record store")

    context_p = sub.add_parser("context", help="Print the gathered context as JSON")
    context_p.add_argument("--no-db", action="store_true", help="Do not connect to the record store")

    for sp in (prompt_p, context_p):
        sp.add_argument("--lat", type=float, default=None, help="Farm latitude (weather lookup)")
        sp.add_argument("--lon", type=float, default=None, help="Farm longitude (weather lookup)")

    sub.add_parser("inspect", help="Print detected tables of every dataset")
    return p.parse_args(argv)


def _inspect_datasets(store: DatasetStore) -> int:
    files = store.scan()
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS
    with ProgressTracker(len(files)) as progress:
        for f in files:
            progress.start_file(f)
            progress.write(f"FILE: {f.name}")
            try:
                sheets = read_workbook(f)
            except WorkbookReadError as e:
                progress.write(f"  read_error: {e}")
                progress.finish_file()
                continue
            is_ranking = f.stem == store.ranking_dataset
            for sname, sheet in sheets.items():
                if is_ranking:
                    table = detect_ranking_table(sheet)
                else:
                    table = detect_market_table(sheet)
                if table is None:
                    progress.write(f"  SHEET: {sname} rows={len(sheet)} no table found")
                    continue
                line = f"  SHEET: {sname} header_row={table.header_row_index} cols={table.headers} rows={table.row_count}"
                if not is_ranking:
                    s = summarize_market(table, f.stem, sname)
                    line += (
                        f" avg_price={s.avg_price:.2f}"
                        f" range={s.price_range.min}-{s.price_range.max}"
                    )
                progress.write(line)
            progress.finish_file()
    return EXIT_SUCCESS


def _gather(
    cfg: AppConfig,
    store: DatasetStore,
    no_db: bool,
    logger: Any,
    location: Location | None = None,
    weather_provider: WeatherProvider | None = None,
):
    disable_db = no_db or os.getenv("DISABLE_DB_CONNECT") == "1"
    with ExitStack() as stack:
        record_store: Any = InMemoryRecordStore()
        if disable_db:
            logger.debug("record store disabled -> empty in-memory store")
        else:
            try:
                conn = stack.enter_context(open_connection(cfg.database))
                record_store = PostgresRecordStore(conn)
            except RecordStoreError as e:
                logger.info(f"record store unavailable -> empty in-memory store: {e}")
        gatherer = ContextGatherer(record_store, store, weather_provider, logger=logger)
        return gatherer.gather(location)


def main(argv: list[str] | None = None, weather_provider: WeatherProvider | None = None) -> int:
    """Run the CLI.

    weather_provider is the hook for embedding applications; the command line
    itself ships no weather client, so --lat/--lon only take effect when one
    is passed in.
    """
    # None のときのみ sys.argv を読む (テストから main([...]) で呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.data_directory)
    if not directory.is_dir():
        logger.error(f"data directory not found: {directory}")
        return EXIT_FATAL
    store = DatasetStore(directory, ranking_dataset=cfg.ranking_dataset)

    if args.command == "inspect":
        try:
            return _inspect_datasets(store)
        except DatasetError as e:
            logger.error(f"inspect: {e}")
            return EXIT_FATAL

    location = Location(lat=args.lat, lon=args.lon)
    if weather_provider is None and location.is_complete:
        logger.info("no weather provider configured -> weather omitted")
    context = _gather(cfg, store, args.no_db, logger, location, weather_provider)

    if args.command == "prompt":
        print(compose_prompt(args.query, context, language=args.language or cfg.language, region=cfg.region))
    else:
        print(json.dumps(context.to_dict(), ensure_ascii=False, indent=2, default=str))

    if context.failures:
        failure_log = SourceFailureLog()
        failure_log.extend(context.failures)
        path = failure_log.flush()
        logger.warning(f"{len(context.failures)} context source(s) failed, see {path}")

    log_summary(render_context_summary(context)[len("SUMMARY "):])
    return EXIT_DEGRADED if context.degraded else EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
