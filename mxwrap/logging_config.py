"""
Structured logging configuration.

JSON-formatted logs carrying a correlation_id, so the pending and terminal
log lines of one wrapped API call can be joined.

Environment Variables:
    MXWRAP_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    MXWRAP_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from mxwrap.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, correlation_id="3f9a0c1d2b4e5f60")
    logger.info("login settled")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that adds correlation_id to all log records.

    Records logged through a plain logger (not get_logger) get "N/A".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Arguments override MXWRAP_LOG_LEVEL / MXWRAP_LOG_FORMAT. Existing root
    handlers are replaced, so calling this twice does not duplicate output.
    """
    log_level = (level or os.getenv("MXWRAP_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("MXWRAP_LOG_FORMAT", "json")).lower()
    resolved = LEVELS.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(CorrelationIdFilter())

    if fmt == "json":
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(correlation_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [correlation_id=%(correlation_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str, correlation_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger that stamps correlation_id on every record.

    Example:
        logger = get_logger(__name__, correlation_id="3f9a0c1d2b4e5f60")
        logger.warning("login failed")
        # {"timestamp": "...", "level": "WARNING", "message": "login failed", "correlation_id": "3f9a..."}
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"correlation_id": correlation_id or "N/A"})
