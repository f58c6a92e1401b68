"""
Direct (unbatched) wiring of a syncing client into dispatch.

Every emission becomes one event action, dispatched from inside the
client's listener call.
"""

import logging
from typing import Any, Callable, Dict, Protocol

from ..core.actions import EmittedType
from .projections import create_event_action

logger = logging.getLogger(__name__)

Listener = Callable[..., None]
Listeners = Dict[EmittedType, Listener]


class EventSource(Protocol):
    """What we need from a syncing client: EventEmitter-style subscription."""

    def on(self, event_type: str, listener: Listener) -> Any:
        ...


def subscribe_all(source: EventSource, make_listener: Callable[[EmittedType], Listener]) -> Listeners:
    """Register make_listener(kind) for every emitted type; returns the listeners by type."""
    listeners: Listeners = {}
    for kind in EmittedType:
        listener = make_listener(kind)
        source.on(kind.value, listener)
        listeners[kind] = listener
    return listeners


def unsubscribe_all(source: Any, listeners: Listeners) -> None:
    """Remove listeners from sources that support off() or remove_listener()."""
    remove = getattr(source, "off", None) or getattr(source, "remove_listener", None)
    if remove is None:
        logger.debug("Event source has no off()/remove_listener(); listeners stay attached")
        return
    for kind, listener in listeners.items():
        remove(kind.value, listener)


def wrap_syncing_client(source: EventSource, dispatch: Callable[[Any], Any]) -> Listeners:
    """
    Dispatch an event action for every emission of source.

    Returns:
        The registered listeners, for unsubscribe_all()
    """
    def make_listener(kind: EmittedType) -> Listener:
        def listener(*native_args: Any) -> None:
            dispatch(create_event_action(kind.value, native_args))
        return listener

    return subscribe_all(source, make_listener)
