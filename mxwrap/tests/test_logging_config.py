"""
Tests for structured logging setup.
"""

import json
import logging

import pytest

from mxwrap.logging_config import CorrelationIdFilter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def emit(root, logger, message):
    handler = root.handlers[0]
    record = logger.logger.makeRecord(
        logger.logger.name, logging.WARNING, __file__, 1, message, (), None,
        extra=logger.extra,
    )
    assert handler.filter(record)
    return handler.format(record)


def test_setup_replaces_handlers(restore_root_logger):
    setup_logging(level="debug", log_format="json")
    setup_logging(level="debug", log_format="json")

    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.DEBUG


def test_json_format_carries_correlation_id(restore_root_logger):
    setup_logging(level="INFO", log_format="json")
    logger = get_logger("mxwrap.test", correlation_id="abc123")

    payload = json.loads(emit(restore_root_logger, logger, "login failed"))

    assert payload["message"] == "login failed"
    assert payload["correlation_id"] == "abc123"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "mxwrap.test"


def test_text_format(restore_root_logger):
    setup_logging(level="INFO", log_format="text")
    line = emit(restore_root_logger, get_logger("mxwrap.test"), "hello")

    assert "hello" in line
    assert "[correlation_id=N/A]" in line


def test_unknown_level_defaults_to_info(restore_root_logger):
    setup_logging(level="LOUD", log_format="text")
    assert restore_root_logger.level == logging.INFO


def test_filter_fills_missing_correlation_id():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)
    assert CorrelationIdFilter().filter(record)
    assert record.correlation_id == "N/A"
