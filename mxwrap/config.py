"""
Runtime settings.

Environment Variables:
    MXWRAP_DEBOUNCE_MS: Batching adapter flush interval in ms - default: 100
    MXWRAP_REJECT_STALE_RESULTS: Ignore terminal api actions superseded by a
        newer pending call (true/false) - default: false
    MXWRAP_METRICS_ENABLED: Start the Prometheus exporter (true/false) - default: false
    MXWRAP_METRICS_PORT: Exporter HTTP port - default: 8080

Usage:
    settings = Settings.from_env()
    reducer = Reducer.from_settings(settings)
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

DEFAULT_DEBOUNCE_MS = 100
DEFAULT_METRICS_PORT = 8080
MAX_PORT = 65535

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(
    env: Mapping[str, str],
    key: str,
    default: int,
    minimum: int = 0,
    maximum: Optional[int] = None,
) -> int:
    val = env.get(key)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        return default
    if parsed < minimum or (maximum is not None and parsed > maximum):
        return default
    return parsed


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    val = env.get(key)
    if val is None or not val.strip():
        return default
    return val.strip().lower() in _TRUTHY


class Settings(BaseModel):
    debounce_ms: int = Field(default=DEFAULT_DEBOUNCE_MS, ge=0)
    reject_stale_results: bool = False
    metrics_enabled: bool = False
    metrics_port: int = Field(default=DEFAULT_METRICS_PORT, ge=1, le=MAX_PORT)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Malformed or out-of-range integers fall back to their defaults.
        """
        env = os.environ if env is None else env
        return cls(
            debounce_ms=_env_int(env, "MXWRAP_DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS),
            reject_stale_results=_env_bool(env, "MXWRAP_REJECT_STALE_RESULTS", False),
            metrics_enabled=_env_bool(env, "MXWRAP_METRICS_ENABLED", False),
            metrics_port=_env_int(
                env, "MXWRAP_METRICS_PORT", DEFAULT_METRICS_PORT, minimum=1, maximum=MAX_PORT
            ),
        )
