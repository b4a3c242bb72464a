"""Unit tests for core logging functionality."""

import logging
from pathlib import Path

from core import get_logger, setup_logging
from core.log import setup_test_logging


def test_setup_logging_defaults() -> None:
    """Test setup_logging with default parameters."""
    setup_logging()
    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO


def test_setup_logging_level_name() -> None:
    """Test setup_logging with a level name."""
    setup_logging(level="debug")
    assert logging.getLogger().level == logging.DEBUG


def test_http_client_loggers_are_quieted() -> None:
    setup_logging(level=logging.DEBUG)
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("openai").level == logging.WARNING


def test_file_logging(tmp_path: Path) -> None:
    """Test that file logging writes to the log directory."""
    setup_logging(enable_file_logging=True, log_dir=tmp_path, use_colors=False)
    get_logger("test_file_logging").info("written to file")

    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "written to file" in (tmp_path / "research.log").read_text()

    setup_test_logging()


def test_get_logger() -> None:
    """Test get_logger returns a logger instance."""
    logger = get_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"
