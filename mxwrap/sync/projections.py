"""
Projections from the syncing client's emitted events to action payloads.

Each emitted event type maps to a pure function over the native objects the
client passes to its listeners. Native objects are read by attribute:

- events: room_id, event_id, type, content, prev_content, origin_server_ts,
  sender, state_key, unsigned (mapping), redacts
- rooms: room_id, name
- members: user_id, name, membership, avatar_url

The table is closed over EmittedType; create_event_action() refuses
anything else.
"""

from typing import Any, Callable, Dict, Iterable, Sequence

from ..core.actions import EmittedType, EventAction, SeriesAction
from ..core.errors import UnknownEventType

Projection = Callable[..., Dict[str, Any]]


def _unsigned(event: Any) -> Dict[str, Any]:
    return getattr(event, "unsigned", None) or {}


def _sync(state: Any, *_: Any) -> Dict[str, Any]:
    return {"state": state}


def _room(room: Any, *_: Any) -> Dict[str, Any]:
    return {"room_id": room.room_id}


def _room_name(room: Any, *_: Any) -> Dict[str, Any]:
    return {"room_id": room.room_id, "name": room.name}


def _room_timeline(event: Any, *_: Any) -> Dict[str, Any]:
    return {
        "room_id": event.room_id,
        "id": event.event_id,
        "type": event.type,
        "content": event.content,
        "prev_content": getattr(event, "prev_content", None),
        "ts": event.origin_server_ts,
        "sender": event.sender,
        "redacted_because": _unsigned(event).get("redacted_because"),
    }


def _room_receipt(event: Any, *_: Any) -> Dict[str, Any]:
    return {"room_id": event.room_id, "content": event.content}


def _room_redaction(event: Any, *_: Any) -> Dict[str, Any]:
    return {
        "redacted_because": {
            "sender": event.sender,
            "content": event.content,
            "ts": event.origin_server_ts,
        },
        "redacted_event_id": event.redacts,
        "room_id": event.room_id,
    }


def _room_state_events(event: Any, *_: Any) -> Dict[str, Any]:
    return {
        "room_id": event.room_id,
        "id": event.event_id,
        "type": event.type,
        "content": event.content,
        "ts": event.origin_server_ts,
        "sender": event.sender,
        "state_key": event.state_key,
        "redacted_because": _unsigned(event).get("redacted_because"),
    }


def _member_membership(event: Any, member: Any, *_: Any) -> Dict[str, Any]:
    return {
        "room_id": event.room_id,
        "user_id": member.user_id,
        "name": member.name,
        "membership": member.membership,
        "avatar_url": getattr(member, "avatar_url", None),
    }


def _member_name(event: Any, member: Any, *_: Any) -> Dict[str, Any]:
    return {
        "room_id": event.room_id,
        "user_id": member.user_id,
        "name": member.name,
    }


PROJECTIONS: Dict[EmittedType, Projection] = {
    EmittedType.SYNC: _sync,
    EmittedType.ROOM: _room,
    EmittedType.ROOM_NAME: _room_name,
    EmittedType.ROOM_TIMELINE: _room_timeline,
    EmittedType.ROOM_RECEIPT: _room_receipt,
    EmittedType.ROOM_REDACTION: _room_redaction,
    EmittedType.ROOM_STATE_EVENTS: _room_state_events,
    EmittedType.ROOM_MEMBER_MEMBERSHIP: _member_membership,
    EmittedType.ROOM_MEMBER_NAME: _member_name,
}

if set(PROJECTIONS) != set(EmittedType):
    raise RuntimeError("projection table out of sync with EmittedType")


def create_event_action(emitted_type: str, native_args: Sequence[Any]) -> EventAction:
    """
    Project one emission into an event action.

    Args:
        emitted_type: Event name the client emitted
        native_args: Positional arguments the client passed to listeners

    Raises:
        UnknownEventType: If emitted_type has no projection
    """
    try:
        kind = EmittedType(emitted_type)
    except ValueError:
        raise UnknownEventType(f"No projection for emitted type: {emitted_type!r}") from None
    return EventAction(emitted_type=kind.value, emitted_args=PROJECTIONS[kind](*native_args))


def create_series_action(actions: Iterable[EventAction]) -> SeriesAction:
    return SeriesAction(actions=tuple(actions))
