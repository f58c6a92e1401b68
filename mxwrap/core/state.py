"""
State tree layout.

The tree is plain nested dicts and lists so it serializes as JSON:

    {"mrw": {"wrapped_api": {method: api_call_state},
             "wrapped_state": {"rooms": {room_id: room_state},
                               "sync": {"state": ...}}}}

It is immutable by convention. The reducer never mutates a tree it was
given; it returns a new root that shares every untouched subtree.
"""

from typing import Any, Dict

from .actions import NAMESPACE, WRAPPED_API, WRAPPED_STATE

API_PATH = (NAMESPACE, WRAPPED_API)
WRAPPED_STATE_PATH = (NAMESPACE, WRAPPED_STATE)


def initial_state() -> Dict[str, Any]:
    """The canonical state before any action has been reduced."""
    return {
        NAMESPACE: {
            WRAPPED_API: {},
            WRAPPED_STATE: {"rooms": {}, "sync": {}},
        }
    }


def new_room() -> Dict[str, Any]:
    """Defaults for a room seen for the first time."""
    return {
        "name": None,
        "members": {},
        "timeline": [],
        "state": {},
        "receipts": {},
    }


def timeline_event(args: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": args.get("id"),
        "type": args.get("type"),
        "content": args.get("content"),
        "prev_content": args.get("prev_content"),
        "ts": args.get("ts"),
        "sender": args.get("sender"),
        "redacted_because": args.get("redacted_because"),
    }


def state_event(args: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": args.get("id"),
        "type": args.get("type"),
        "content": args.get("content"),
        "sender": args.get("sender"),
        "ts": args.get("ts"),
        "redacted_because": args.get("redacted_because"),
    }


def member(args: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "membership": args.get("membership"),
        "name": args.get("name"),
        "avatar_url": args.get("avatar_url"),
    }


def redacted(event: Dict[str, Any], because: Any) -> Dict[str, Any]:
    """Copy of event with its content stripped and the redaction recorded."""
    out = dict(event)
    out["content"] = {}
    out["prev_content"] = {}
    out["redacted_because"] = because
    return out
