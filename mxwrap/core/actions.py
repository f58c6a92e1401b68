"""
Action model.

Actions are immutable records describing one state transition request.
The discriminant (`type`) is a dotted string under the reserved `mrw` prefix:

- mrw.wrapped_api.pending / .success / .failure
- mrw.wrapped_event
- mrw.wrapped_event.series
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ActionDecodeError

NAMESPACE = "mrw"
WRAPPED_API = "wrapped_api"
WRAPPED_EVENT = "wrapped_event"
WRAPPED_STATE = "wrapped_state"

EVENT_ACTION_TYPE = f"{NAMESPACE}.{WRAPPED_EVENT}"
SERIES_ACTION_TYPE = f"{EVENT_ACTION_TYPE}.series"


class ApiStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class EmittedType(str, Enum):
    """Event types emitted by the syncing client that we know how to wrap."""
    SYNC = "sync"
    ROOM = "Room"
    ROOM_NAME = "Room.name"
    ROOM_TIMELINE = "Room.timeline"
    ROOM_RECEIPT = "Room.receipt"
    ROOM_REDACTION = "Room.redaction"
    ROOM_STATE_EVENTS = "RoomState.events"
    ROOM_MEMBER_MEMBERSHIP = "RoomMember.membership"
    ROOM_MEMBER_NAME = "RoomMember.name"


def api_action_type(status: ApiStatus) -> str:
    return f"{NAMESPACE}.{WRAPPED_API}.{ApiStatus(status).value}"


@dataclass(frozen=True)
class ApiAction:
    """
    One step of an async API call's lifecycle.

    Fields:
        type: mrw.wrapped_api.<status>
        method: Name of the wrapped_api bucket the call reports into
        id: Correlation token shared by the pending/terminal pair
        pending_state: Arguments/context recorded at call time (pending only)
        result: Resolved value (success only)
        error: Captured error (failure only)
    """
    type: str
    method: str
    id: str
    pending_state: Any = None
    result: Any = None
    error: Any = None

    @property
    def status(self) -> str:
        return self.type.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class EventAction:
    """
    A normalized emitted event.

    Fields:
        emitted_type: Client event name (see EmittedType)
        emitted_args: Projected payload
    """
    emitted_type: str
    emitted_args: Dict[str, Any] = field(default_factory=dict)
    type: str = EVENT_ACTION_TYPE


@dataclass(frozen=True)
class SeriesAction:
    """Ordered bundle of event actions, reduced as a left fold."""
    actions: Tuple[EventAction, ...] = ()
    type: str = SERIES_ACTION_TYPE


def action_type(action: Any) -> Optional[str]:
    """Discriminant of an action object or mapping, None when it has none."""
    if isinstance(action, Mapping):
        value = action.get("type")
    else:
        value = getattr(action, "type", None)
    return value if isinstance(value, str) else None


def action_to_dict(action: Any) -> Dict[str, Any]:
    if isinstance(action, ApiAction):
        d: Dict[str, Any] = {"type": action.type, "method": action.method, "id": action.id}
        if action.status == ApiStatus.PENDING:
            d["pending_state"] = action.pending_state
        elif action.status == ApiStatus.SUCCESS:
            d["result"] = action.result
        else:
            d["error"] = action.error
        return d
    if isinstance(action, SeriesAction):
        return {"type": action.type, "actions": [action_to_dict(a) for a in action.actions]}
    if isinstance(action, EventAction):
        return {
            "type": action.type,
            "emitted_type": action.emitted_type,
            "emitted_args": dict(action.emitted_args),
        }
    if isinstance(action, Mapping):
        return dict(action)
    raise ActionDecodeError(f"cannot serialize {type(action).__name__}")


def action_from_dict(d: Mapping[str, Any]) -> Any:
    """
    Rebuild an action from its serialized form.

    Mappings without the mrw prefix come back unchanged (foreign actions).

    Raises:
        ActionDecodeError: If an mrw action is missing required fields
    """
    if not isinstance(d, Mapping):
        raise ActionDecodeError(f"expected a mapping, got {type(d).__name__}")
    kind = action_type(d)
    if kind is None or not kind.startswith(f"{NAMESPACE}."):
        return dict(d)
    try:
        if kind == SERIES_ACTION_TYPE:
            return SeriesAction(actions=tuple(action_from_dict(a) for a in d["actions"]))
        if kind == EVENT_ACTION_TYPE:
            return EventAction(
                emitted_type=d["emitted_type"],
                emitted_args=dict(d.get("emitted_args") or {}),
            )
        if kind.startswith(f"{NAMESPACE}.{WRAPPED_API}."):
            return ApiAction(
                type=kind,
                method=d["method"],
                id=d.get("id", ""),
                pending_state=d.get("pending_state"),
                result=d.get("result"),
                error=d.get("error"),
            )
    except (KeyError, TypeError) as ex:
        raise ActionDecodeError(f"malformed {kind} action: {ex}") from ex
    # Unknown mrw namespaces are passed through for the reducer to reject.
    return dict(d)
