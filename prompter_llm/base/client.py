"""Provider-agnostic completion client.

``LLMClient`` binds one provider profile, one model, resolved generation
parameters and a transport. ``complete`` runs the
format -> send -> extract pipeline and emits ``chat.start`` / ``chat.end`` /
``chat.error`` events.

The profile is looked up once, at construction, so an unknown provider fails
before any request is built. Missing API keys and endpoints also fail at
construction with :class:`ConfigurationError`.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Optional, Sequence

import httpx

from .errors import ConfigurationError, ProviderError
from .formatting import format_request
from .http import HttpTransport, build_auth, redact_url
from .logging import LogContext, get_logger, normalized_log_event
from .models import CompletionResult, GenerationParameters, Message, ProviderProfile
from .registry import lookup
from .resilience.retry import RetryConfig
from .extraction import extract

if TYPE_CHECKING:  # pragma: no cover
    from ..config import LLMSettings


class LLMClient:
    """Send chat messages to one provider/model and normalize the reply."""

    def __init__(
        self,
        provider_id: str,
        model: Optional[str] = None,
        *,
        api_key: Optional[str],
        endpoint: Optional[str] = None,
        params: Optional[GenerationParameters] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._profile = lookup(provider_id)
        pid = self._profile.id
        resolved_model = model or self._profile.default_model
        if not resolved_model:
            raise ConfigurationError(f"No model configured for provider '{pid}'", provider=pid)
        self._model: str = resolved_model
        self._params = params or GenerationParameters()

        url = self._profile.endpoint_for(self._model, endpoint)
        if not url:
            raise ConfigurationError(
                f"No endpoint configured for provider '{pid}'",
                provider=pid,
                model=self._model,
            )
        if not api_key:
            raise ConfigurationError(
                f"{pid} API key is not configured",
                provider=pid,
                model=self._model,
            )
        try:
            self._url, self._headers = build_auth(self._profile, api_key, url)
            self._endpoint_for_logs = redact_url(url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(
                f"Invalid endpoint for provider '{pid}': {e}",
                provider=pid,
                model=self._model,
            ) from e
        self._transport = transport or HttpTransport()
        self._logger = get_logger("prompter.client")

    @classmethod
    def from_config(
        cls,
        settings: "LLMSettings",
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "LLMClient":
        """Build a client for the settings' active provider."""
        transport = HttpTransport(
            client=http_client,
            timeout=settings.timeout,
            retry_config=RetryConfig(
                max_attempts=settings.retry_max_attempts,
                pause_ms=settings.retry_pause_ms,
            ),
        )
        return cls(
            settings.provider,
            settings.model,
            api_key=settings.api_key_for(settings.provider),
            endpoint=settings.endpoint_for(settings.provider),
            params=settings.generation_parameters(),
            transport=transport,
        )

    @property
    def profile(self) -> ProviderProfile:
        return self._profile

    @property
    def provider_id(self) -> str:
        return self._profile.id

    @property
    def model(self) -> str:
        return self._model

    @property
    def params(self) -> GenerationParameters:
        return self._params

    async def complete(self, messages: Sequence[Message]) -> CompletionResult:
        """Send ``messages`` and return the extracted completion.

        Raises:
            HttpError: Terminal HTTP failure (after transient retries).
            TransportError: Network-level failure.
            MalformedResponseError: Response lacked the expected text field.
        """
        ctx = LogContext(
            provider=self._profile.id,
            model=self._model,
            request_shape=self._profile.request_shape.value,
            extra={"endpoint": self._endpoint_for_logs},
        )
        body = format_request(self._profile, self._model, messages, self._params)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            emitted=False,
            tokens=None,
            message_count=len(messages),
            **self._params.to_dict(),
        )
        t0 = time.perf_counter()
        try:
            raw = await self._transport.send(
                self._url,
                body,
                self._headers,
                provider=self._profile.id,
                model=self._model,
            )
            result = extract(self._profile, raw, self._model)
        except ProviderError as e:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                error_code=e.code.value,
                emitted=False,
                tokens=None,
                latency_ms=round((time.perf_counter() - t0) * 1000.0, 3),
                error=e.message,
            )
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=result.usage,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 3),
            response_chars=len(result.content),
        )
        return result


__all__ = ["LLMClient"]
