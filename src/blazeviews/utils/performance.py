"""
Slow-query threshold resolution.
"""

from __future__ import annotations

import os

from ..errors import AdapterConfigurationError

SLOW_QUERY_ENV_VAR = "BLAZEVIEWS_SLOW_QUERY_MS"


def resolve_slow_query_ms(*, default: int, override: int | None = None) -> int:
    """
    Pick the slow-query threshold: explicit override, then environment, then default.
    """

    if override is not None:
        return int(override)
    raw = os.getenv(SLOW_QUERY_ENV_VAR)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise AdapterConfigurationError(
            f"Invalid integer value for '{SLOW_QUERY_ENV_VAR}': {raw!r}"
        ) from exc
    if value < 0:
        raise AdapterConfigurationError(f"'{SLOW_QUERY_ENV_VAR}' must be non-negative.")
    return value
