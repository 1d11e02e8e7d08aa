"""Unit tests for the logging configuration module."""

import logging
from unittest.mock import patch

import pytest
import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer

from src.utils.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    """Fixture to reset logging configuration before and after each test."""
    original_logging_config = logging.root.manager.loggerDict.copy()
    original_structlog_config = structlog.get_config()

    yield

    logging.root.manager.loggerDict = original_logging_config
    logging.root.handlers.clear()
    structlog.configure(**original_structlog_config)


def _configured_processors(log_level: str) -> list:
    with patch("structlog.configure") as mock_structlog_configure:
        configure_logging(log_level=log_level)
        mock_structlog_configure.assert_called_once()
        _, kwargs = mock_structlog_configure.call_args
        return kwargs.get("processors", [])


def test_configure_logging_info_level():
    """Test that logging is configured with JSONRenderer for INFO level."""
    processors = _configured_processors("INFO")

    assert logging.getLevelName(logging.getLogger().level) == "INFO"
    assert any(isinstance(p, JSONRenderer) for p in processors)
    assert not any(isinstance(p, ConsoleRenderer) for p in processors)


def test_configure_logging_debug_level():
    """Test that logging is configured with ConsoleRenderer for DEBUG level."""
    processors = _configured_processors("debug")

    assert logging.getLevelName(logging.getLogger().level) == "DEBUG"
    assert any(isinstance(p, ConsoleRenderer) for p in processors)
    assert not any(isinstance(p, JSONRenderer) for p in processors)


def test_context_variables_are_merged_first():
    """Request-scoped fields bound by the middlewares must reach every event."""
    processors = _configured_processors("INFO")
    assert processors[0] is structlog.contextvars.merge_contextvars


def test_get_logger_returns_logger():
    """Test that get_logger returns a valid logger instance."""
    configure_logging()
    logger = get_logger("test_logger")
    assert isinstance(logger.bind(), structlog.stdlib.BoundLogger)
