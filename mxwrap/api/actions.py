"""
Builders for the three wrapped_api lifecycle actions.
"""

from typing import Any

from ..core.actions import ApiAction, ApiStatus, api_action_type


def pending(method: str, pending_state: Any, id: str) -> ApiAction:
    return ApiAction(
        type=api_action_type(ApiStatus.PENDING),
        method=method,
        id=id,
        pending_state=pending_state,
    )


def success(method: str, result: Any, id: str) -> ApiAction:
    return ApiAction(
        type=api_action_type(ApiStatus.SUCCESS),
        method=method,
        id=id,
        result=result,
    )


def failure(method: str, error: Any, id: str) -> ApiAction:
    return ApiAction(
        type=api_action_type(ApiStatus.FAILURE),
        method=method,
        id=id,
        error=error,
    )
