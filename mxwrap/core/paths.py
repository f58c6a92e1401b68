"""
Path accessor: get/set by key path over nested mappings.

All writers are copy-on-write. Only the mappings along the path are copied;
every sibling subtree is shared with the input, so unrelated parts of the
state keep their identity across updates.
"""

from typing import Any, Callable, Hashable, Mapping, Optional, Sequence

from .errors import PathError

Path = Sequence[Hashable]


def get_in(root: Any, path: Path) -> Any:
    """
    Read the value at path.

    Raises:
        PathError: If any key along the path is absent (no implicit creation)
    """
    value = root
    for depth, key in enumerate(path):
        if not isinstance(value, Mapping) or key not in value:
            raise PathError(f"missing key {key!r} at {list(path[:depth + 1])!r}")
        value = value[key]
    return value


def set_in(root: Optional[Mapping], path: Path, value: Any) -> Any:
    """
    Return a new structure with value placed at path.

    Intermediate mappings are created when absent. The input is not modified.
    """
    if not path:
        return value
    key = path[0]
    node = dict(root) if root is not None else {}
    node[key] = set_in(node.get(key), path[1:], value)
    return node


def update_in(
    root: Optional[Mapping],
    path: Path,
    fn: Callable[[Any], Any],
    default: Any = None,
) -> Any:
    """set_in of fn(current), where current falls back to default when absent."""
    try:
        current = get_in(root, path)
    except PathError:
        current = default
    return set_in(root, path, fn(current))


def merge_in(root: Optional[Mapping], path: Path, payload: Mapping, depth: int) -> Any:
    """
    Deep-merge payload into the mapping at path, descending depth levels.

    Below depth, payload values replace existing ones.
    """
    def merge(existing: Any, incoming: Mapping, level: int) -> Any:
        merged = dict(existing) if isinstance(existing, Mapping) else {}
        for key, val in incoming.items():
            if level > 1 and isinstance(val, Mapping):
                merged[key] = merge(merged.get(key), val, level - 1)
            else:
                merged[key] = val
        return merged

    return update_in(root, path, lambda cur: merge(cur, payload, depth))
