"""Layered settings for the prompter LLM layer.

Merge order (later wins)
------------------------
1. Built-in defaults (``LLMSettings`` field defaults, ``config.defaults``)
2. Optional JSON or YAML file named by ``PROMPTER_CONFIG_FILE``
3. ``.env`` file (``DOTENV_FILE``, default ``.env``), promoted into the
   process environment for variables that are unset or hold placeholders
4. Environment variables
5. Explicit overrides passed to :func:`load_settings`

Environment Variable Conventions
--------------------------------
``PROMPTER_PROVIDER``, ``PROMPTER_MODEL``, ``PROMPTER_TEMPERATURE``,
``PROMPTER_MAX_TOKENS``, ``PROMPTER_TOP_P``, ``PROMPTER_TIMEOUT``,
``PROMPTER_RETRY_MAX_ATTEMPTS``, ``PROMPTER_RETRY_PAUSE_MS``,
``PROMPTER_LOG_LEVEL``, ``PROMPTER_LOG_FILE``, plus
``<PROVIDER>_API_KEY`` (see :mod:`prompter_llm.config.env` for aliases) and
``<PROVIDER>_ENDPOINT``.

Config File
-----------
Top-level keys match :class:`LLMSettings` fields. Per-provider credentials
may also be given as sections::

    provider: anthropic
    temperature: 0.2
    providers:
      anthropic:
        api_key: sk-ant-...
      custom:
        endpoint: https://gateway.internal/v1/chat/completions

Public API
----------
* ``load_settings(overrides=None) -> LLMSettings``
* ``validate_provider_config(settings) -> dict``
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..base.constants import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_MAX_TOKENS,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_RETRY_PAUSE_MS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
)
from ..base.errors import ConfigurationError
from ..base.logging import configure_logger
from ..base.models import GenerationParameters
from .defaults import PROMPTER_DEFAULT_PROVIDER
from .env import ENV_MAP, is_placeholder, resolve_provider_endpoint, resolve_provider_key

# Settings field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "provider": "PROMPTER_PROVIDER",
    "model": "PROMPTER_MODEL",
    "temperature": "PROMPTER_TEMPERATURE",
    "max_tokens": "PROMPTER_MAX_TOKENS",
    "top_p": "PROMPTER_TOP_P",
    "timeout": "PROMPTER_TIMEOUT",
    "retry_max_attempts": "PROMPTER_RETRY_MAX_ATTEMPTS",
    "retry_pause_ms": "PROMPTER_RETRY_PAUSE_MS",
    "log_level": "PROMPTER_LOG_LEVEL",
    "log_file": "PROMPTER_LOG_FILE",
}

_MAPPING_FIELDS = ("api_keys", "endpoints")

_DOTENV_LOADED = False


class LLMSettings(BaseModel):
    """Resolved, validated settings for one prompter session.

    Attributes:
        provider: Active provider id (lower-cased).
        model: Active model; ``None`` selects the provider's default model.
        api_keys: Provider id -> API key.
        endpoints: Provider id -> endpoint override.
        temperature: Sampling temperature in ``[0, 2]``.
        max_tokens: Positive completion token limit.
        top_p: Nucleus sampling value in ``[0, 1]``.
        timeout: Seconds handed to the HTTP client; ``None`` disables it.
        retry_max_attempts: Retries after the first request on transient statuses.
        retry_pause_ms: Fixed pause between retries.
        log_level: Level name for the ``prompter`` logger.
        log_file: Path of an extra rotating JSON log file.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    provider: str = PROMPTER_DEFAULT_PROVIDER
    model: Optional[str] = None
    api_keys: Dict[str, str] = Field(default_factory=dict)
    endpoints: Dict[str, str] = Field(default_factory=dict)
    temperature: float = Field(DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, gt=0)
    top_p: float = Field(DEFAULT_TOP_P, ge=0.0, le=1.0)
    timeout: Optional[float] = Field(DEFAULT_HTTP_TIMEOUT, gt=0)
    retry_max_attempts: int = Field(DEFAULT_RETRY_MAX_ATTEMPTS, ge=0)
    retry_pause_ms: int = Field(DEFAULT_RETRY_PAUSE_MS, ge=0)
    log_level: Optional[str] = None
    log_file: Optional[str] = None

    @field_validator("provider")
    @classmethod
    def _normalize_provider(cls, v: str) -> str:
        v = (v or "").lower().strip()
        if not v:
            raise ValueError("provider must be non-empty")
        return v

    @field_validator("model")
    @classmethod
    def _blank_model_is_default(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() or None if isinstance(v, str) else v

    @field_validator("api_keys", "endpoints", mode="before")
    @classmethod
    def _normalize_keys(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return {str(k).lower().strip(): val for k, val in v.items() if val}
        return v

    def api_key_for(self, provider: str) -> Optional[str]:
        return self.api_keys.get((provider or "").lower().strip())

    def endpoint_for(self, provider: str) -> Optional[str]:
        return self.endpoints.get((provider or "").lower().strip())

    def generation_parameters(self) -> GenerationParameters:
        return GenerationParameters.resolve(self.temperature, self.max_tokens, self.top_p)


def _load_dotenv_once() -> None:
    """Promote ``KEY=VALUE`` lines from the dotenv file into ``os.environ``.

    Existing variables win unless they hold a placeholder. Blank lines,
    comments and lines without ``=`` are skipped.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                if k.startswith("export "):
                    k = k[len("export "):].strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_file_settings() -> Dict[str, Any]:
    """Read the optional settings file; JSON is tried before YAML."""
    path = os.getenv("PROMPTER_CONFIG_FILE")
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Could not parse settings file {p}: {exc}",
                provider="config",
            ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {p} must contain a mapping", provider="config")

    out = {k: v for k, v in data.items() if k != "providers"}
    sections = data.get("providers")
    if isinstance(sections, Mapping):
        api_keys = dict(out.get("api_keys") or {})
        endpoints = dict(out.get("endpoints") or {})
        for name, section in sections.items():
            if not isinstance(section, Mapping):
                continue
            if section.get("api_key"):
                api_keys[name] = section["api_key"]
            if section.get("endpoint"):
                endpoints[name] = section["endpoint"]
        out["api_keys"] = api_keys
        out["endpoints"] = endpoints
    return out


def _load_env_settings() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, var in ENV_FIELD_MAP.items():
        val = os.getenv(var)
        if val is not None and val.strip():
            out[field] = val.strip()
    api_keys: Dict[str, str] = {}
    endpoints: Dict[str, str] = {}
    for provider in ENV_MAP:
        key, _ = resolve_provider_key(provider)
        if key:
            api_keys[provider] = key
        endpoint = resolve_provider_endpoint(provider)
        if endpoint:
            endpoints[provider] = endpoint
    if api_keys:
        out["api_keys"] = api_keys
    if endpoints:
        out["endpoints"] = endpoints
    return out


def _merge(base: Dict[str, Any], layer: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay ``layer`` on ``base``; provider mappings merge key by key."""
    for k, v in layer.items():
        if v is None:
            continue
        if k in _MAPPING_FIELDS and isinstance(v, Mapping):
            merged = dict(base.get(k) or {})
            merged.update({str(name).lower().strip(): val for name, val in v.items()})
            base[k] = merged
        else:
            base[k] = v
    return base


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> LLMSettings:
    """Return merged settings and apply their log level and log file.

    Raises:
        ConfigurationError: The settings file is unreadable or a merged value
            fails validation (e.g., ``temperature`` outside ``[0, 2]``).
    """
    _load_dotenv_once()
    data: Dict[str, Any] = {}
    _merge(data, _load_file_settings())
    _merge(data, _load_env_settings())
    if overrides:
        _merge(data, overrides)
    try:
        settings = LLMSettings(**data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid settings: {problems}", provider=str(data.get("provider", "config"))) from exc
    if settings.log_level or settings.log_file:
        configure_logger(level=settings.log_level, file_path=settings.log_file)
    return settings


def validate_provider_config(settings: LLMSettings) -> Dict[str, Any]:
    """Report whether the active provider can be called with ``settings``.

    Returns a mapping with ``provider``, ``model``, ``has_api_key``,
    ``endpoint`` (key-free), ``ok`` and a list of ``problems``.
    """
    # Local import: the registry itself imports config.defaults.
    from ..base.errors import UnsupportedProviderError
    from ..base.registry import lookup

    problems: List[str] = []
    model = settings.model
    endpoint: Optional[str] = None
    try:
        profile = lookup(settings.provider)
    except UnsupportedProviderError as e:
        problems.append(e.message)
    else:
        model = model or profile.default_model
        if not model:
            problems.append(f"No model configured for provider '{profile.id}'")
        else:
            endpoint = profile.endpoint_for(model, settings.endpoint_for(profile.id))
        if not endpoint:
            problems.append(f"No endpoint configured for provider '{profile.id}'")
    has_key = bool(settings.api_key_for(settings.provider))
    if not has_key:
        problems.append(f"{settings.provider} API key is not configured")
    return {
        "provider": settings.provider,
        "model": model,
        "has_api_key": has_key,
        "endpoint": endpoint,
        "ok": not problems,
        "problems": problems,
    }


__all__ = [
    "LLMSettings",
    "ENV_FIELD_MAP",
    "load_settings",
    "validate_provider_config",
]
