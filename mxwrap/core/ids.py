"""
Correlation identifiers for async API calls.
"""

import secrets


def correlation_id() -> str:
    """
    Random hex token tagging one pending/terminal action pair.

    Collisions only matter when stale-result rejection is enabled, and then
    only between two in-flight calls to the same method.
    """
    return secrets.token_hex(8)
