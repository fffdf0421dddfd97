"""
Error classification helpers mapping HTTP statuses and exceptions to
normalized ErrorCode values.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError


TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def is_transient_status(status_code: int) -> bool:
    """Return True when ``status_code`` may succeed if the request is repeated."""
    return status_code in TRANSIENT_STATUS_CODES


def classify_status(status_code: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode`.

    Unlisted 4xx statuses map to ``VALIDATION`` and unlisted 5xx statuses to
    ``SERVER_ERROR``; anything else is ``UNKNOWN``.
    """
    if status_code in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status_code]
    if 400 <= status_code < 500:
        return ErrorCode.VALIDATION
    if 500 <= status_code < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (builtin, asyncio and httpx).
        3. Other httpx transport failures.
        4. HTTP status mapping.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.RequestError):
        return ErrorCode.TRANSIENT
    if isinstance(exc, Exception):
        status = _extract_status(exc)
        if status is not None:
            return classify_status(status)
    return ErrorCode.UNKNOWN


__all__ = [
    "TRANSIENT_STATUS_CODES",
    "classify_exception",
    "classify_status",
    "is_transient_status",
]
