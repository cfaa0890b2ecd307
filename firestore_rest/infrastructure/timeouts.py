from __future__ import annotations

from .config import env_str

DEFAULT_HTTP_TIMEOUT = 15.0


def http_timeout_seconds() -> float:
    """Per-request timeout from FIRESTORE_HTTP_TIMEOUT; invalid or non-positive values fall back to 15s."""
    try:
        value = float(env_str("FIRESTORE_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT)))
    except ValueError:
        return DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else DEFAULT_HTTP_TIMEOUT
