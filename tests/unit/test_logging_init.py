from __future__ import annotations

import logging
from io import StringIO

from krishi_context.logging import init as log_init
from krishi_context.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def _capture(logger: logging.Logger) -> StringIO:
    buf = StringIO()
    logger.handlers[0].stream = buf
    return buf


def test_setup_logging_single_handler():
    reset_logging()
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent_and_updates_level():
    reset_logging()
    first = setup_logging()
    second = setup_logging(debug=True)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG
    reset_logging()


def test_labeled_prefixes():
    reset_logging()
    logger = setup_logging()
    buf = _capture(logger)
    logger.info("started")
    logger.warning("weather slow")
    logger.error("config broken")
    log_summary("records=3")
    lines = buf.getvalue().splitlines()
    assert lines == ["INFO started", "WARN weather slow", "ERROR config broken", "SUMMARY records=3"]


def test_module_loggers_share_package_handler():
    reset_logging()
    logger = setup_logging()
    buf = _capture(logger)
    logging.getLogger(f"{LOGGER_NAME}.services.datasets").warning("layout problem")
    assert buf.getvalue() == "WARN layout problem\n"


def test_get_logger_configures_on_first_use():
    reset_logging()
    assert log_init._logger is None
    logger = get_logger()
    assert logger is get_logger()
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"
