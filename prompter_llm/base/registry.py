"""Provider registry.

Purpose
-------
Map a provider identifier to its static :class:`ProviderProfile`: endpoint,
default model, auth style, request shape and the model menu shown to users.

Design notes
------------
- The table is built once at import time and never mutated.
- Lookups are case-insensitive and strip surrounding whitespace.
- Unknown identifiers raise :class:`UnsupportedProviderError`; there is no
  fallback to another provider and no network activity.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_ENDPOINT,
    ANTHROPIC_DEFAULT_MODEL,
    ANTHROPIC_MODELS,
    DEEPSEEK_DEFAULT_ENDPOINT,
    DEEPSEEK_DEFAULT_MODEL,
    DEEPSEEK_MODELS,
    GEMINI_DEFAULT_ENDPOINT,
    GEMINI_DEFAULT_MODEL,
    GEMINI_MODELS,
    MISTRAL_DEFAULT_ENDPOINT,
    MISTRAL_DEFAULT_MODEL,
    MISTRAL_MODELS,
    OPENAI_DEFAULT_ENDPOINT,
    OPENAI_DEFAULT_MODEL,
    OPENAI_MODELS,
    QWEN_DEFAULT_ENDPOINT,
    QWEN_DEFAULT_MODEL,
    QWEN_MODELS,
)
from .errors import UnsupportedProviderError
from .models import AuthStyle, ProviderProfile, RequestShape


def _openai_compatible(provider_id: str, endpoint: str | None, model: str | None, models: Tuple[str, ...]) -> ProviderProfile:
    return ProviderProfile(
        id=provider_id,
        default_endpoint=endpoint,
        default_model=model,
        auth_style=AuthStyle.BEARER_HEADER,
        request_shape=RequestShape.OPENAI_CHAT,
        models=models,
    )


_PROFILES: Mapping[str, ProviderProfile] = MappingProxyType(
    {
        "openai": _openai_compatible("openai", OPENAI_DEFAULT_ENDPOINT, OPENAI_DEFAULT_MODEL, OPENAI_MODELS),
        "deepseek": _openai_compatible("deepseek", DEEPSEEK_DEFAULT_ENDPOINT, DEEPSEEK_DEFAULT_MODEL, DEEPSEEK_MODELS),
        "qwen": ProviderProfile(
            id="qwen",
            default_endpoint=QWEN_DEFAULT_ENDPOINT,
            default_model=QWEN_DEFAULT_MODEL,
            auth_style=AuthStyle.BEARER_HEADER,
            request_shape=RequestShape.QWEN_DASHSCOPE,
            models=QWEN_MODELS,
        ),
        "anthropic": ProviderProfile(
            id="anthropic",
            default_endpoint=ANTHROPIC_DEFAULT_ENDPOINT,
            default_model=ANTHROPIC_DEFAULT_MODEL,
            auth_style=AuthStyle.API_KEY_HEADER,
            request_shape=RequestShape.ANTHROPIC_MESSAGES,
            api_key_header="x-api-key",
            static_headers=MappingProxyType({"anthropic-version": ANTHROPIC_API_VERSION}),
            models=ANTHROPIC_MODELS,
        ),
        "gemini": ProviderProfile(
            id="gemini",
            default_endpoint=GEMINI_DEFAULT_ENDPOINT,
            default_model=GEMINI_DEFAULT_MODEL,
            auth_style=AuthStyle.QUERY_PARAM,
            request_shape=RequestShape.GEMINI_GENERATE,
            query_param="key",
            models=GEMINI_MODELS,
        ),
        "mistral": _openai_compatible("mistral", MISTRAL_DEFAULT_ENDPOINT, MISTRAL_DEFAULT_MODEL, MISTRAL_MODELS),
        # Any OpenAI-compatible gateway; endpoint and model come from settings.
        "custom": _openai_compatible("custom", None, None, ()),
    }
)


def lookup(provider_id: str) -> ProviderProfile:
    """Return the profile registered for ``provider_id``.

    Raises
    ------
    UnsupportedProviderError
        If the identifier is not one of the statically known providers.
    """
    name = (provider_id or "").lower().strip()
    profile = _PROFILES.get(name)
    if profile is None:
        raise UnsupportedProviderError(f"Unsupported provider: {provider_id}", provider=str(provider_id))
    return profile


def list_models(provider_id: str) -> Tuple[str, ...]:
    """Return the ordered model identifiers offered for ``provider_id``."""
    return lookup(provider_id).models


def supported() -> Tuple[str, ...]:
    """Return the canonical provider identifiers in table order."""
    return tuple(_PROFILES.keys())


__all__ = ["lookup", "list_models", "supported"]
