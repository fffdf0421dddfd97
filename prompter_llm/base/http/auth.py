"""Authentication placement per provider auth style.

``build_auth`` returns the final request URL and headers for one call:

- ``bearer-header``: ``Authorization: Bearer <key>``
- ``api-key-header``: ``<profile.api_key_header>: <key>``
- ``query-param``: no auth header; ``?<profile.query_param>=<key>`` is merged
  into the URL.

Every request carries ``Content-Type: application/json`` plus the profile's
static headers (e.g., ``anthropic-version``).
"""

from __future__ import annotations

from typing import Dict, Tuple

import httpx

from ..constants import JSON_CONTENT_TYPE
from ..errors import UnsupportedProviderError
from ..models import AuthStyle, ProviderProfile


def build_auth(profile: ProviderProfile, api_key: str, endpoint: str) -> Tuple[str, Dict[str, str]]:
    """Return ``(url, headers)`` carrying ``api_key`` the way ``profile`` expects."""
    headers: Dict[str, str] = {"Content-Type": JSON_CONTENT_TYPE}
    headers.update(profile.static_headers)
    url = endpoint
    style = profile.auth_style
    if style == AuthStyle.BEARER_HEADER:
        headers["Authorization"] = f"Bearer {api_key}"
    elif style == AuthStyle.API_KEY_HEADER:
        headers[profile.api_key_header or "x-api-key"] = api_key
    elif style == AuthStyle.QUERY_PARAM:
        url = str(httpx.URL(endpoint).copy_merge_params({profile.query_param or "key": api_key}))
    else:
        raise UnsupportedProviderError(f"Unsupported auth style: {style}", provider=profile.id)
    return url, headers


def redact_url(url: str) -> str:
    """Return ``url`` without its query string, for logging."""
    u = httpx.URL(url)
    return f"{u.scheme}://{u.netloc.decode('ascii')}{u.path}"


__all__ = ["build_auth", "redact_url"]
