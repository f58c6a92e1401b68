"""
Canonical serialization of state trees and actions.

Used wherever a state has to be compared, hashed or printed: two trees that
hold the same data always render to the same bytes, whatever the dict
insertion order.
"""

import hashlib
import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert a nested dict/list structure to canonical form.

    Rules:
    - dict keys sorted (as strings, so mixed key types still order)
    - tuples converted to lists
    - dataclass-like actions are left to the caller (serialize them first)
    """
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """Deterministic UTF-8 JSON: sorted keys, no whitespace, unicode kept."""
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    return canonical_json_bytes(obj).decode("utf-8")


def state_hash(state: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form of a state tree."""
    return hashlib.sha256(canonical_json_bytes(state)).hexdigest()
