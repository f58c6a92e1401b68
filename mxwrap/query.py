"""
Read-only selectors over the state tree.
"""

from typing import Any, Dict, List, Optional

from .core.paths import get_in
from .core.state import API_PATH, WRAPPED_STATE_PATH


def _wrapped_state(state: Dict[str, Any]) -> Dict[str, Any]:
    return get_in(state, WRAPPED_STATE_PATH)


def get_api_state(state: Dict[str, Any], method: str) -> Optional[Dict[str, Any]]:
    """APICallState for method, or None if it was never called."""
    return get_in(state, API_PATH).get(method)


def is_loading(state: Dict[str, Any], method: str) -> bool:
    call = get_api_state(state, method)
    return bool(call and call.get("loading"))


def get_sync_state(state: Dict[str, Any]) -> Any:
    return _wrapped_state(state).get("sync", {}).get("state")


def list_rooms(state: Dict[str, Any]) -> List[str]:
    return sorted(_wrapped_state(state).get("rooms", {}).keys())


def get_room(state: Dict[str, Any], room_id: str) -> Optional[Dict[str, Any]]:
    return _wrapped_state(state).get("rooms", {}).get(room_id)


def get_members(
    state: Dict[str, Any], room_id: str, membership: Optional[str] = None
) -> Dict[str, Dict[str, Any]]:
    """
    Members of a room, optionally only those with the given membership
    (e.g. "join").
    """
    room = get_room(state, room_id) or {}
    members = room.get("members", {})
    if membership is None:
        return dict(members)
    return {uid: m for uid, m in members.items() if m.get("membership") == membership}


def get_timeline(state: Dict[str, Any], room_id: str, last_n: Optional[int] = None) -> List[Dict[str, Any]]:
    room = get_room(state, room_id) or {}
    timeline = list(room.get("timeline", []))
    if last_n is not None:
        return timeline[-last_n:] if last_n > 0 else []
    return timeline


def get_state_event(
    state: Dict[str, Any], room_id: str, event_type: str, state_key: str = ""
) -> Optional[Dict[str, Any]]:
    room = get_room(state, room_id) or {}
    return room.get("state", {}).get(event_type, {}).get(state_key)
