"""
Sync wrapping: turn a syncing client's emitted events into event actions.

- projections: emitted event -> normalized payload
- wrap: one dispatch per emission
- batching: debounced series dispatch for event storms
"""

from .batching import BatchingAdapter
from .projections import PROJECTIONS, create_event_action, create_series_action
from .wrap import EventSource, unsubscribe_all, wrap_syncing_client

__all__ = [
    "BatchingAdapter",
    "PROJECTIONS",
    "create_event_action",
    "create_series_action",
    "EventSource",
    "unsubscribe_all",
    "wrap_syncing_client",
]
