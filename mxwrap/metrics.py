"""
Prometheus metrics.

Environment Variables (read through Settings):
    MXWRAP_METRICS_ENABLED: Enable metrics server (true/false) - default: false
    MXWRAP_METRICS_PORT: HTTP port for /metrics endpoint - default: 8080

Usage:
    from mxwrap.metrics import start_metrics_server, ACTIONS_DISPATCHED

    start_metrics_server(Settings.from_env())
    ACTIONS_DISPATCHED.labels(namespace="wrapped_event").inc()

The reducer never records metrics; only the dispatching edges do.
"""

import logging
import threading

from prometheus_client import Counter, Histogram, start_http_server

from .config import Settings

logger = logging.getLogger(__name__)

ACTIONS_DISPATCHED = Counter(
    "mxwrap_actions_dispatched_total",
    "Actions dispatched through a Store",
    labelnames=["namespace"],
)

API_CALLS = Counter(
    "mxwrap_api_calls_total",
    "Wrapped API call lifecycle actions",
    labelnames=["status"],
)

SERIES_FLUSHED = Counter(
    "mxwrap_series_flushed_total",
    "Series actions flushed by the batching adapter",
)

SERIES_SIZE = Histogram(
    "mxwrap_series_size",
    "Event actions per flushed series",
    buckets=(1, 2, 5, 10, 25, 50, 100, 250, 1000),
)

_server_started = False
_server_lock = threading.Lock()


def start_metrics_server(settings: Settings) -> bool:
    """
    Start the HTTP exporter once, if enabled.

    Returns:
        True if the exporter is running after the call
    """
    global _server_started

    if not settings.metrics_enabled:
        logger.info("Metrics disabled")
        return False

    with _server_lock:
        if not _server_started:
            start_http_server(settings.metrics_port)
            _server_started = True
            logger.info("Metrics server started on port %d", settings.metrics_port)
    return True
