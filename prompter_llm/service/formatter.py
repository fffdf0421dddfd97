"""Schema-free chat completion with display-format detection.

``ChatResponseFormatter`` sends a prompt as one user message and wraps the
text in a :class:`ChatResponse` whose ``format`` is detected heuristically.
Provider failures are captured in the response (``success=False``) rather
than raised, so batch callers get one result per request.

``FormatterRegistry`` keeps formatters by provider id and fans batches out
concurrently with ``asyncio.gather``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.client import LLMClient
from ..base.errors import ProviderError
from ..base.http import HttpTransport
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import GenerationParameters, Message, TokenUsage
from ..structured.content_format import ContentFormat, detect_format


@dataclass(frozen=True)
class ChatResponse:
    """Raw completion plus display format and call details."""

    format: ContentFormat
    content: str
    success: bool
    error: Optional[str] = None
    usage: Optional[TokenUsage] = None
    model: Optional[str] = None
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"format": self.format, "content": self.content, "success": self.success}
        if self.error is not None:
            data["error"] = self.error
        if self.usage is not None:
            data["usage"] = self.usage.to_dict()
        if self.model is not None:
            data["model"] = self.model
        if self.provider is not None:
            data["provider"] = self.provider
        return data


class ChatResponseFormatter:
    """Schema-free completion for one client, tagged with a display format.

    Provider failures come back as ``ChatResponse(success=False)`` after a
    ``format.error`` event; nothing is raised.
    """

    def __init__(self, client: LLMClient) -> None:
        self._client = client
        self._logger = get_logger("prompter.formatter")

    @property
    def client(self) -> LLMClient:
        return self._client

    async def complete(self, prompt: str) -> ChatResponse:
        return await self.format_response(prompt)

    async def format_response(self, prompt: str, raw_response: Optional[str] = None) -> ChatResponse:
        """Complete ``prompt``, or classify ``raw_response`` without a call when given."""
        client = self._client
        if raw_response is not None:
            return ChatResponse(
                format=detect_format(raw_response),
                content=raw_response,
                success=True,
                model=client.model,
                provider=client.provider_id,
            )
        try:
            completion = await client.complete([Message.user(prompt)])
        except ProviderError as e:
            normalized_log_event(
                self._logger,
                "format.error",
                LogContext(provider=client.provider_id, model=client.model),
                phase="finalize",
                error_code=e.code.value,
                emitted=False,
                tokens=None,
            )
            return ChatResponse(format="plaintext", content="", success=False, error=str(e))
        return ChatResponse(
            format=detect_format(completion.content),
            content=completion.content,
            success=True,
            usage=completion.usage,
            model=completion.model_used,
            provider=completion.provider_used,
        )


class FormatterRegistry:
    """Provider id -> :class:`ChatResponseFormatter`."""

    def __init__(self) -> None:
        self._formatters: Dict[str, ChatResponseFormatter] = {}

    def register(self, provider_id: str, formatter: ChatResponseFormatter) -> None:
        self._formatters[provider_id] = formatter

    def register_provider(
        self,
        provider_id: str,
        *,
        api_key: str,
        name: Optional[str] = None,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
        params: Optional[GenerationParameters] = None,
        transport: Optional[HttpTransport] = None,
    ) -> ChatResponseFormatter:
        """Build and register a formatter for ``provider_id``.

        ``name`` registers it under another key, so several gateways can share
        one profile (e.g. ``name="acme"`` for an org endpoint on ``custom``).

        Raises:
            UnsupportedProviderError: Unknown provider id.
            ConfigurationError: Missing key, model or endpoint.
        """
        client = LLMClient(
            provider_id,
            model,
            api_key=api_key,
            endpoint=endpoint,
            params=params,
            transport=transport,
        )
        formatter = ChatResponseFormatter(client)
        self.register(name or provider_id, formatter)
        return formatter

    def get(self, provider_id: str) -> Optional[ChatResponseFormatter]:
        return self._formatters.get(provider_id)

    async def format_with_provider(
        self, provider_id: str, prompt: str, raw_response: Optional[str] = None
    ) -> ChatResponse:
        formatter = self._formatters.get(provider_id)
        if formatter is None:
            return ChatResponse(
                format="plaintext",
                content=raw_response or "",
                success=False,
                error=f"Provider {provider_id} not registered",
            )
        return await formatter.format_response(prompt, raw_response)

    async def batch_format(self, requests: Sequence[Mapping[str, Any]]) -> List[ChatResponse]:
        """Format ``{provider_id, prompt, raw_response?}`` requests concurrently, in order."""
        return list(
            await asyncio.gather(
                *(
                    self.format_with_provider(req["provider_id"], req["prompt"], req.get("raw_response"))
                    for req in requests
                )
            )
        )

    def registered(self) -> List[str]:
        return list(self._formatters)

    def unregister(self, provider_id: str) -> bool:
        return self._formatters.pop(provider_id, None) is not None

    def clear(self) -> None:
        self._formatters.clear()


def setup_common_providers(
    registry: FormatterRegistry,
    api_keys: Mapping[str, Optional[str]],
    *,
    transport: Optional[HttpTransport] = None,
) -> List[str]:
    """Register formatters for each of deepseek, qwen and openai that has a key.

    Returns the provider ids that were registered.
    """
    added: List[str] = []
    for provider_id in ("deepseek", "qwen", "openai"):
        key = api_keys.get(provider_id)
        if key:
            registry.register_provider(provider_id, api_key=key, transport=transport)
            added.append(provider_id)
    return added


__all__ = [
    "ChatResponse",
    "ChatResponseFormatter",
    "FormatterRegistry",
    "setup_common_providers",
]
