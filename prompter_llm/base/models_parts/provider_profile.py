"""
Static per-provider profile.

A `ProviderProfile` records where a provider lives, how it authenticates and
which request/response shape it speaks. Profiles are built once from the
registry table and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple


class AuthStyle(str, Enum):
    """How the API key travels with a request."""

    BEARER_HEADER = "bearer-header"
    API_KEY_HEADER = "api-key-header"
    QUERY_PARAM = "query-param"


class RequestShape(str, Enum):
    """Request/response body family spoken by a provider."""

    OPENAI_CHAT = "openai-chat"
    ANTHROPIC_MESSAGES = "anthropic-messages"
    QWEN_DASHSCOPE = "qwen-dashscope"
    GEMINI_GENERATE = "gemini-generate"


@dataclass(frozen=True)
class ProviderProfile:
    """Provider endpoint, auth and shape description.

    Attributes:
        id: Canonical provider identifier (e.g., ``"openai"``).
        default_endpoint: Full POST URL; may contain a ``{model}`` placeholder.
            ``None`` when the caller must always supply an endpoint.
        default_model: Model used when the caller does not name one.
        auth_style: Where the API key is placed.
        request_shape: Body family used by the formatter and extractor.
        api_key_header: Header name for ``api-key-header`` auth.
        query_param: Query parameter name for ``query-param`` auth.
        static_headers: Fixed headers the provider requires on every call.
        models: Ordered model identifiers offered for selection.
    """

    id: str
    default_endpoint: Optional[str]
    default_model: Optional[str]
    auth_style: AuthStyle
    request_shape: RequestShape
    api_key_header: Optional[str] = None
    query_param: Optional[str] = None
    static_headers: Mapping[str, str] = field(default_factory=dict)
    models: Tuple[str, ...] = ()

    def endpoint_for(self, model: str, override: Optional[str] = None) -> Optional[str]:
        """Return the POST URL for ``model``, preferring ``override``."""
        endpoint = override or self.default_endpoint
        if endpoint is None:
            return None
        return endpoint.replace("{model}", model)


__all__ = ["AuthStyle", "RequestShape", "ProviderProfile"]
