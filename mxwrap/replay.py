"""
Replay: rebuild state by folding a sequence of actions.

replay([a1, a2, a3]) == reduce(a3, reduce(a2, reduce(a1, reduce(None))))
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional

from .core.actions import action_from_dict
from .core.errors import ActionDecodeError
from .core.reducer import reduce


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying actions
        applied: Number of actions applied
    """
    state: Dict[str, Any]
    applied: int


def replay(
    actions: Iterable[Any],
    reducer=reduce,
    until: Optional[int] = None,
) -> ReplayResult:
    """
    Fold actions from the initial state.

    Args:
        actions: Actions (objects or mappings) in dispatch order
        reducer: Reduce function to apply
        until: Stop after the action at this zero-based index (inclusive)
    """
    state = reducer(None, None)
    count = 0
    for index, action in enumerate(actions):
        if until is not None and index > until:
            break
        state = reducer(action, state)
        count += 1
    return ReplayResult(state=state, applied=count)


def read_action_log(path: str) -> Iterator[Any]:
    """
    Yield actions from a JSON-lines file, one serialized action per line.

    Raises:
        ActionDecodeError: On a line that is not valid JSON
    """
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except ValueError as ex:
                raise ActionDecodeError(f"{path}:{lineno}: {ex}") from ex
            yield action_from_dict(data)
