"""
Core state-wrapping primitives.

- actions: Action records and their discriminants
- state: State tree layout and record builders
- paths: Copy-on-write get/set by key path
- reducer: Pure (action, state) -> state transition
- canonical: Deterministic serialization
- ids: Correlation id generation
"""

from .actions import (
    NAMESPACE,
    ApiAction,
    ApiStatus,
    EmittedType,
    EventAction,
    SeriesAction,
    action_from_dict,
    action_to_dict,
    action_type,
)
from .canonical import canonical_json_bytes, canonical_json_str, canonicalize, state_hash
from .errors import ActionDecodeError, PathError, UnknownEventType, UnsupportedActionNamespace
from .ids import correlation_id
from .paths import get_in, merge_in, set_in, update_in
from .reducer import Reducer, reduce
from .state import initial_state

__all__ = [
    "NAMESPACE",
    "ApiAction",
    "ApiStatus",
    "EmittedType",
    "EventAction",
    "SeriesAction",
    "action_from_dict",
    "action_to_dict",
    "action_type",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "state_hash",
    "ActionDecodeError",
    "PathError",
    "UnknownEventType",
    "UnsupportedActionNamespace",
    "correlation_id",
    "get_in",
    "set_in",
    "update_in",
    "merge_in",
    "Reducer",
    "reduce",
    "initial_state",
]
