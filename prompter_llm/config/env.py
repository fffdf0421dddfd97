"""prompter_llm.config.env
========================

Provider credential and endpoint environment variables.

- ``ENV_MAP`` maps a provider id to its canonical API-key variable.
- ``ENV_ALIASES`` lists accepted names in priority order (canonical first)
  for providers that are commonly configured under a vendor name, e.g.
  ``GOOGLE_API_KEY`` for Gemini or ``DASHSCOPE_API_KEY`` for Qwen.
- Endpoint overrides always use ``<PROVIDER>_ENDPOINT``.

Helpers return ``None`` when nothing usable is set and never raise; callers
decide whether a missing credential is an error.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "qwen": "QWEN_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "custom": "CUSTOM_API_KEY",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "qwen": ("QWEN_API_KEY", "DASHSCOPE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder rather than a real value.

    Matches ``placeholder``, ``changeme``, ``your-`` and ``example`` anywhere,
    or a leading ``test_``, case-insensitively.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("your-")
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API-key variable for ``provider``, if known."""
    return ENV_MAP.get((provider or "").lower().strip())


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield accepted API-key variable names for ``provider``, canonical first."""
    p = (provider or "").lower().strip()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, variable)`` for the first usable API key, else ``(None, None)``.

    Empty and placeholder values are skipped.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


def get_endpoint_env_name(provider: str) -> str:
    return f"{(provider or '').upper().strip()}_ENDPOINT"


def resolve_provider_endpoint(provider: str) -> Optional[str]:
    """Return the ``<PROVIDER>_ENDPOINT`` override, if set to a non-empty value."""
    val = os.environ.get(get_endpoint_env_name(provider))
    return val.strip() if val and val.strip() else None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
    "get_endpoint_env_name",
    "resolve_provider_endpoint",
]
