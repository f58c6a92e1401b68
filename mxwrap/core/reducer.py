"""
Reducer: pure state transition function.

reduce(action, state) -> state

- No side effects, no I/O
- Never mutates the state it is given
- Shares every subtree the action does not touch

Actions are routed on their discriminant: mrw.wrapped_api.* goes to the API
sub-reducer, mrw.wrapped_event(.series) to the event sub-reducer. Anything
without the mrw prefix passes through untouched so this reducer can sit
beside others in a larger store.
"""

import functools
from typing import Any, Callable, Dict, Mapping, Optional

from .actions import (
    NAMESPACE,
    WRAPPED_API,
    WRAPPED_EVENT,
    ApiStatus,
    EmittedType,
    SeriesAction,
    action_from_dict,
    action_type,
)
from .errors import UnsupportedActionNamespace
from .paths import get_in, merge_in, set_in
from .state import (
    API_PATH,
    WRAPPED_STATE_PATH,
    initial_state,
    member,
    new_room,
    redacted,
    state_event,
    timeline_event,
)

# (previous api call state, action) -> new api call state
ApiHandler = Callable[[Dict[str, Any], Any], Dict[str, Any]]
# (wrapped_state, emitted_args) -> new wrapped_state
EventHandler = Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]

RECEIPT_DEPTH = 3  # event id -> receipt type -> user id


def _check_closed(table: Mapping, enum_cls) -> None:
    missing = set(enum_cls) - set(table)
    if missing:
        raise RuntimeError(f"no handler for {sorted(m.value for m in missing)}")


# ---------------------------------------------------------------------------
# wrapped_api
# ---------------------------------------------------------------------------


def _on_pending(call: Dict[str, Any], action: Any) -> Dict[str, Any]:
    call["pending_state"] = action.pending_state
    call.pop("last_result", None)
    call.pop("last_error", None)
    return call


def _on_success(call: Dict[str, Any], action: Any) -> Dict[str, Any]:
    call["last_result"] = action.result
    call.pop("last_error", None)
    return call


def _on_failure(call: Dict[str, Any], action: Any) -> Dict[str, Any]:
    call["last_error"] = action.error
    call.pop("last_result", None)
    return call


API_HANDLERS: Dict[ApiStatus, ApiHandler] = {
    ApiStatus.PENDING: _on_pending,
    ApiStatus.SUCCESS: _on_success,
    ApiStatus.FAILURE: _on_failure,
}
_check_closed(API_HANDLERS, ApiStatus)


# ---------------------------------------------------------------------------
# wrapped_event
# ---------------------------------------------------------------------------


def _ensure_room(wrapped: Dict[str, Any], room_id: str) -> Dict[str, Any]:
    if room_id in wrapped.get("rooms", {}):
        return wrapped
    return set_in(wrapped, ("rooms", room_id), new_room())


def _on_sync(wrapped, args):
    return set_in(wrapped, ("sync", "state"), args.get("state"))


def _on_room(wrapped, args):
    return _ensure_room(wrapped, args["room_id"])


def _on_room_name(wrapped, args):
    room_id = args["room_id"]
    wrapped = _ensure_room(wrapped, room_id)
    return set_in(wrapped, ("rooms", room_id, "name"), args.get("name"))


def _on_room_timeline(wrapped, args):
    room_id = args["room_id"]
    wrapped = _ensure_room(wrapped, room_id)
    timeline = wrapped["rooms"][room_id].get("timeline") or []
    return set_in(
        wrapped,
        ("rooms", room_id, "timeline"),
        list(timeline) + [timeline_event(args)],
    )


def _on_room_receipt(wrapped, args):
    content = args.get("content")
    if not content:
        return wrapped
    room_id = args["room_id"]
    wrapped = _ensure_room(wrapped, room_id)
    return merge_in(wrapped, ("rooms", room_id, "receipts"), content, RECEIPT_DEPTH)


def _redact_state_map(state_map: Dict[str, Any], event_id: Any, because: Any):
    """Returns (new_state_map, hit). Only event types containing a hit are copied."""
    out = state_map
    hit = False
    for ev_type, by_key in state_map.items():
        if not any(ev.get("id") == event_id for ev in by_key.values()):
            continue
        if not hit:
            out = dict(state_map)
            hit = True
        out[ev_type] = {
            key: redacted(ev, because) if ev.get("id") == event_id else ev
            for key, ev in by_key.items()
        }
    return out, hit


def _on_room_redaction(wrapped, args):
    room = wrapped.get("rooms", {}).get(args.get("room_id"))
    if room is None:
        return wrapped
    event_id = args.get("redacted_event_id")
    if event_id is None:
        return wrapped
    because = args.get("redacted_because")

    timeline = room.get("timeline") or []
    timeline_hit = any(ev.get("id") == event_id for ev in timeline)
    state_map, state_hit = _redact_state_map(room.get("state") or {}, event_id, because)
    if not (timeline_hit or state_hit):
        return wrapped

    updated = dict(room)
    if timeline_hit:
        updated["timeline"] = [
            redacted(ev, because) if ev.get("id") == event_id else ev for ev in timeline
        ]
    if state_hit:
        updated["state"] = state_map
    return set_in(wrapped, ("rooms", args["room_id"]), updated)


def _on_room_state_events(wrapped, args):
    room_id = args["room_id"]
    wrapped = _ensure_room(wrapped, room_id)
    return set_in(
        wrapped,
        ("rooms", room_id, "state", args.get("type"), args.get("state_key")),
        state_event(args),
    )


def _on_member_membership(wrapped, args):
    room_id = args["room_id"]
    wrapped = _ensure_room(wrapped, room_id)
    return set_in(wrapped, ("rooms", room_id, "members", args["user_id"]), member(args))


def _on_member_name(wrapped, args):
    room_id = args["room_id"]
    wrapped = _ensure_room(wrapped, room_id)
    return set_in(
        wrapped,
        ("rooms", room_id, "members", args["user_id"], "name"),
        args.get("name"),
    )


EVENT_HANDLERS: Dict[EmittedType, EventHandler] = {
    EmittedType.SYNC: _on_sync,
    EmittedType.ROOM: _on_room,
    EmittedType.ROOM_NAME: _on_room_name,
    EmittedType.ROOM_TIMELINE: _on_room_timeline,
    EmittedType.ROOM_RECEIPT: _on_room_receipt,
    EmittedType.ROOM_REDACTION: _on_room_redaction,
    EmittedType.ROOM_STATE_EVENTS: _on_room_state_events,
    EmittedType.ROOM_MEMBER_MEMBERSHIP: _on_member_membership,
    EmittedType.ROOM_MEMBER_NAME: _on_member_name,
}
_check_closed(EVENT_HANDLERS, EmittedType)


class Reducer:
    """
    The mrw reducer.

    Usage:
        reducer = Reducer()
        state = reducer.reduce(None, None)
        state = reducer.reduce(action, state)

    With reject_stale_results=True each api call state remembers the
    correlation id of the newest pending action, and success/failure actions
    carrying any other id are ignored.
    """

    def __init__(self, reject_stale_results: bool = False) -> None:
        self.reject_stale_results = reject_stale_results

    @classmethod
    def from_settings(cls, settings) -> "Reducer":
        return cls(reject_stale_results=settings.reject_stale_results)

    def __call__(self, action: Any, state: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.reduce(action, state)

    def reduce(self, action: Any, state: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Apply one action.

        Args:
            action: Action object or mapping; None yields the initial state
            state: Previous state tree (None is treated as the initial state)

        Returns:
            The next state tree; the same object when nothing changed

        Raises:
            UnsupportedActionNamespace: For mrw actions outside wrapped_api/wrapped_event
        """
        if action is None:
            return initial_state()

        kind = action_type(action)
        if kind is None or not (kind == NAMESPACE or kind.startswith(NAMESPACE + ".")):
            return state

        if state is None:
            state = initial_state()
        if isinstance(action, Mapping):
            action = action_from_dict(action)

        path = kind.split(".")[1:]
        namespace = path[0] if path else ""

        if namespace == WRAPPED_API:
            status = path[1] if len(path) > 1 else ""
            sub_path, reduce_fn = API_PATH, functools.partial(self._reduce_api, status=status)
        elif namespace == WRAPPED_EVENT:
            sub_path, reduce_fn = WRAPPED_STATE_PATH, self._reduce_event
        else:
            raise UnsupportedActionNamespace(f"Unsupported {NAMESPACE} type {namespace!r}")

        old_sub = get_in(state, sub_path)
        new_sub = reduce_fn(action, old_sub)
        if new_sub is old_sub:
            return state
        return set_in(state, sub_path, new_sub)

    def _reduce_api(self, action: Any, api_state: Dict[str, Any], status: str) -> Dict[str, Any]:
        try:
            handler = API_HANDLERS[ApiStatus(status)]
        except ValueError:
            raise UnsupportedActionNamespace(
                f"Unsupported {NAMESPACE}.{WRAPPED_API} status {status!r}"
            ) from None

        prev = api_state.get(action.method) or {}
        if (
            self.reject_stale_results
            and status != ApiStatus.PENDING
            and prev.get("id") != action.id
        ):
            return api_state

        call = dict(prev)
        call["status"] = status
        call["loading"] = status == ApiStatus.PENDING
        if self.reject_stale_results and status == ApiStatus.PENDING:
            call["id"] = action.id
        return set_in(api_state, (action.method,), handler(call, action))

    def _reduce_event(self, action: Any, wrapped: Dict[str, Any]) -> Dict[str, Any]:
        if isinstance(action, SeriesAction):
            return functools.reduce(
                lambda acc, inner: self._reduce_event(inner, acc), action.actions, wrapped
            )
        handler = EVENT_HANDLERS.get(getattr(action, "emitted_type", None))
        if handler is None:
            return wrapped
        return handler(wrapped, getattr(action, "emitted_args", None) or {})


_default_reducer = Reducer()


def reduce(action: Any, state: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Module-level reducer with default options."""
    return _default_reducer.reduce(action, state)
