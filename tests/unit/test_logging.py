"""Unit tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from devpush.config.settings import LoggingConfig
from devpush.utils.logging import setup_logging

pytestmark = pytest.mark.unit


@pytest.fixture
def reset_devpush_logger():
    yield
    logger = logging.getLogger("devpush")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_logging_console_only(reset_devpush_logger):
    logger = setup_logging(LoggingConfig(level="DEBUG"))

    assert logger.name == "devpush"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_setup_logging_defaults(reset_devpush_logger):
    logger = setup_logging()

    assert logger.level == logging.INFO
    assert logger.handlers[0].level == logging.INFO


def test_setup_logging_with_file(temp_dir, reset_devpush_logger):
    log_file = temp_dir / "logs" / "devpush.log"

    logger = setup_logging(LoggingConfig(level="INFO", file=str(log_file)))
    logging.getLogger("devpush.core.sync_engine").info("pushed")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert "devpush.core.sync_engine - INFO - pushed" in log_file.read_text()


def test_file_receives_debug_when_console_is_quiet(temp_dir, reset_devpush_logger):
    """Test a quiet console still leaves the full record stream in the log file."""
    log_file = temp_dir / "devpush.log"

    logger = setup_logging(LoggingConfig(level="ERROR", file=str(log_file)))
    logging.getLogger("devpush.core.watch_loop").debug("re-armed 3 files")
    for handler in logger.handlers:
        handler.flush()

    rich_handler = next(h for h in logger.handlers if isinstance(h, RichHandler))
    assert rich_handler.level == logging.ERROR
    assert logger.level == logging.DEBUG
    assert "DEBUG - re-armed 3 files" in log_file.read_text()


def test_setup_logging_is_idempotent(reset_devpush_logger):
    setup_logging(LoggingConfig(level="INFO"))
    logger = setup_logging(LoggingConfig(level="WARNING"))

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
