"""
mxwrap: chat client calls and sync events folded into one serializable state tree.

Async API calls become pending/success/failure actions, emitted sync events
become event actions, and a pure reducer folds both into

    {"mrw": {"wrapped_api": {...}, "wrapped_state": {"rooms": {...}, "sync": {...}}}}
"""

from .api import async_action, failure, pending, success
from .core import (
    Reducer,
    UnknownEventType,
    UnsupportedActionNamespace,
    initial_state,
    reduce,
)
from .store import Store
from .sync import BatchingAdapter, create_event_action, wrap_syncing_client

__version__ = "0.1.0"

__all__ = [
    "async_action",
    "pending",
    "success",
    "failure",
    "Reducer",
    "reduce",
    "initial_state",
    "UnknownEventType",
    "UnsupportedActionNamespace",
    "Store",
    "BatchingAdapter",
    "create_event_action",
    "wrap_syncing_client",
]
