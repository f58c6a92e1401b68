"""
Wrapped API calls: lifecycle action builders and the async dispatcher.
"""

from .actions import failure, pending, success
from .dispatcher import async_action, describe_error

__all__ = [
    "pending",
    "success",
    "failure",
    "async_action",
    "describe_error",
]
