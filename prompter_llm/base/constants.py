"""Base shared constants for the LLM call path.

Central location to avoid scattering magic strings and default numbers.

Security
--------
Only generic sentinel strings and numeric defaults live here; no credentials.
"""
from __future__ import annotations

# Generation defaults applied at call construction.
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TOP_P = 1.0

# Transport retry defaults: retries after the first request, fixed pause.
DEFAULT_RETRY_MAX_ATTEMPTS = 3
DEFAULT_RETRY_PAUSE_MS = 1000

# Default HTTP timeout (seconds) handed to httpx.
DEFAULT_HTTP_TIMEOUT = 60.0

JSON_CONTENT_TYPE = "application/json"


__all__ = [
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TOP_P",
    "DEFAULT_RETRY_MAX_ATTEMPTS",
    "DEFAULT_RETRY_PAUSE_MS",
    "DEFAULT_HTTP_TIMEOUT",
    "JSON_CONTENT_TYPE",
]
