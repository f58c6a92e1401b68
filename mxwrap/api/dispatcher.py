"""
Async action dispatcher.

Turns one awaitable client call into a thunk that reports its lifecycle:

    thunk = async_action("login", client.login(user, password), {"user": user})
    task = thunk(store.dispatch)   # pending dispatched here, synchronously
    await task                     # success or failure dispatched exactly once

Errors raised by the call end up in the failure action (and from there in
last_error); they are never re-raised to the caller. There is no retry and
no cancellation: a cancelled call propagates CancelledError and dispatches
no terminal action.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

from ..core.ids import correlation_id
from ..logging_config import get_logger
from ..metrics import API_CALLS
from .actions import failure, pending, success

Dispatch = Callable[[Any], Any]
Thunk = Callable[[Dispatch], "asyncio.Task[None]"]


def describe_error(error: BaseException) -> Dict[str, Any]:
    """Serializable summary of an exception for the failure action."""
    return {"type": type(error).__name__, "message": str(error)}


def async_action(
    method: str,
    awaitable: Awaitable[Any],
    pending_state: Optional[Any] = None,
) -> Thunk:
    """
    Create a thunk dispatching pending -> (success | failure) for awaitable.

    Args:
        method: wrapped_api bucket the call reports into
        awaitable: The in-flight client call
        pending_state: Context recorded on the pending action

    Returns:
        thunk(dispatch) -> asyncio.Task; must be called from a running loop
    """
    cid = correlation_id()
    log = get_logger(__name__, correlation_id=cid)

    async def settle(dispatch: Dispatch) -> None:
        try:
            result = await awaitable
        except Exception as ex:
            log.warning("%s failed: %s", method, ex)
            API_CALLS.labels(status="failure").inc()
            dispatch(failure(method, describe_error(ex), cid))
            return
        log.debug("%s succeeded", method)
        API_CALLS.labels(status="success").inc()
        dispatch(success(method, result, cid))

    def thunk(dispatch: Dispatch) -> "asyncio.Task[None]":
        loop = asyncio.get_running_loop()
        log.debug("%s pending", method)
        API_CALLS.labels(status="pending").inc()
        dispatch(pending(method, pending_state, cid))
        return loop.create_task(settle(dispatch))

    return thunk
