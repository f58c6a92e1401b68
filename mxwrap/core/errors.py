"""
Exception types for the state-wrapping layer.
"""


class UnsupportedActionNamespace(Exception):
    """Raised when an mrw action routes to neither wrapped_api nor wrapped_event."""
    pass


class UnknownEventType(Exception):
    """Raised when no projection is registered for an emitted event type."""
    pass


class PathError(LookupError):
    """Raised when a path lookup traverses a missing key."""
    pass


class ActionDecodeError(Exception):
    """Raised when a serialized action cannot be turned back into an action."""
    pass
