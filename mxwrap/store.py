"""
Store: owner of the latest state tree.

Action -> dispatch -> reducer -> new state -> notify subscribers

The store holds the only reference callers should treat as current. Every
state it hands out is a snapshot; nothing mutates it afterwards.

Usage:
    store = Store()
    unsubscribe = store.subscribe(lambda old, new: render(new))
    store.dispatch(async_action("login", client.login(user, pw), {"user": user}))
    adapter = BatchingAdapter(client, store.dispatch)
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from .core.actions import NAMESPACE, action_type
from .core.reducer import reduce
from .metrics import ACTIONS_DISPATCHED

logger = logging.getLogger(__name__)

State = Dict[str, Any]
Subscriber = Callable[[State, State], None]
ReduceFn = Callable[[Any, Optional[State]], State]


def _namespace_label(action: Any) -> str:
    kind = action_type(action) or ""
    parts = kind.split(".")
    if parts[0] != NAMESPACE or len(parts) < 2:
        return "foreign"
    return parts[1]


class Store:
    def __init__(self, reducer: ReduceFn = reduce, state: Optional[State] = None) -> None:
        self._reduce = reducer
        self._state = state if state is not None else reducer(None, None)
        self._subscribers: List[Subscriber] = []
        self._reducing = False

    @property
    def state(self) -> State:
        """Current state (read-only snapshot)."""
        return self._state

    def get_state(self) -> State:
        return self._state

    def dispatch(self, action: Any) -> Any:
        """
        Reduce a plain action, or run a thunk.

        Thunks (any callable) are called with this dispatch and their return
        value is passed back, so async_action thunks hand back their task.
        Subscribers run only when the state object actually changed.
        """
        if callable(action):
            return action(self.dispatch)

        if self._reducing:
            raise RuntimeError(f"Cannot dispatch {action_type(action)} while reducing")

        old_state = self._state
        try:
            self._reducing = True
            new_state = self._reduce(action, old_state)
        finally:
            self._reducing = False

        ACTIONS_DISPATCHED.labels(namespace=_namespace_label(action)).inc()
        if new_state is old_state:
            return action

        self._state = new_state
        for subscriber in list(self._subscribers):
            if self._state is not new_state:
                # A nested dispatch already notified everyone with a newer state
                break
            subscriber(old_state, new_state)
        return action

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register subscriber(old_state, new_state); returns an unsubscribe function."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe
