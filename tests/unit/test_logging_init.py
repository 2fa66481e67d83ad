from __future__ import annotations

import logging
from io import StringIO

import shift_ledger.logging.init as log_init
from shift_ledger.logging.init import LabeledFormatter, get_logger, log_summary, setup_logging


def _capture(logger: logging.Logger) -> StringIO:
    captured = StringIO()
    handler = logger.handlers[0]
    handler.setStream(captured)
    return captured


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == "shift_ledger"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    logger = setup_logging()
    captured = _capture(logger)

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(log_init.SUMMARY_LEVEL, "Test summary message")
    logger.debug("hidden at INFO")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_module_loggers_propagate_to_app_logger():
    logger = setup_logging()
    captured = _capture(logger)
    logging.getLogger("shift_ledger.services.submissions").warning("store slow")
    assert captured.getvalue() == "WARN store slow\n"


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_summary_level_name():
    setup_logging()
    assert logging.getLevelName(25) == "SUMMARY"


def test_log_summary_convenience_function():
    logger = setup_logging()
    captured = _capture(logger)
    log_summary("records=2 housekeepers=1 completed=5 total=8 avg_rate=0.625")
    assert captured.getvalue() == "SUMMARY records=2 housekeepers=1 completed=5 total=8 avg_rate=0.625\n"


def test_reset_logging_allows_reconfiguration():
    first = setup_logging()
    log_init.reset_logging()
    assert log_init._logger is None
    second = setup_logging()
    assert second is first  # same named logger, handlers rebuilt
    assert len(second.handlers) == 1
