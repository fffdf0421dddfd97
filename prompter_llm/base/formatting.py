"""Provider request body formatting.

Pure, side-effect-free translation of a provider-agnostic message list and
resolved :class:`GenerationParameters` into the JSON body each request shape
expects. No I/O is performed here; auth placement is the transport's job.

Shapes
------
- ``openai-chat`` (OpenAI, Deepseek, Mistral, custom gateways)::

      {model, messages, temperature, max_tokens, top_p}

- ``anthropic-messages``::

      {model, messages, max_tokens, temperature, top_p}

- ``qwen-dashscope``::

      {model, input: {messages}, parameters: {temperature, max_tokens, top_p}}

- ``gemini-generate``: roles remapped (``assistant`` -> ``model``), each
  message wrapped as ``{role, parts: [{text}]}``, parameters moved under
  ``generationConfig`` as ``temperature``, ``topP`` and ``maxOutputTokens``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from .errors import UnsupportedProviderError
from .models import GenerationParameters, Message, ProviderProfile, RequestShape

_GEMINI_ROLE_OUT = {"assistant": "model"}
_GEMINI_ROLE_IN = {"model": "assistant"}


def _plain_messages(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    return [m.to_dict() for m in messages]


def _openai_chat(model: str, messages: Sequence[Message], params: GenerationParameters) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": _plain_messages(messages),
        "temperature": params.temperature,
        "max_tokens": params.max_tokens,
        "top_p": params.top_p,
    }


def _anthropic_messages(model: str, messages: Sequence[Message], params: GenerationParameters) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": _plain_messages(messages),
        "max_tokens": params.max_tokens,
        "temperature": params.temperature,
        "top_p": params.top_p,
    }


def _qwen_dashscope(model: str, messages: Sequence[Message], params: GenerationParameters) -> Dict[str, Any]:
    return {
        "model": model,
        "input": {"messages": _plain_messages(messages)},
        "parameters": {
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
            "top_p": params.top_p,
        },
    }


def gemini_contents(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    """Map messages to Gemini ``contents`` entries, renaming ``assistant`` to ``model``."""
    return [
        {
            "role": _GEMINI_ROLE_OUT.get(m.role, m.role),
            "parts": [{"text": m.content}],
        }
        for m in messages
    ]


def messages_from_gemini_contents(contents: Sequence[Mapping[str, Any]]) -> List[Message]:
    """Inverse of :func:`gemini_contents`.

    Multi-part entries are joined without a separator, matching how the
    extractor reads the first part only when a single part is present.
    """
    out: List[Message] = []
    for entry in contents:
        role = _GEMINI_ROLE_IN.get(entry.get("role", "user"), entry.get("role", "user"))
        text = "".join(str(p.get("text", "")) for p in entry.get("parts", []))
        out.append(Message(role=role, content=text))  # type: ignore[arg-type]
    return out


def _gemini_generate(model: str, messages: Sequence[Message], params: GenerationParameters) -> Dict[str, Any]:
    # The model travels in the endpoint path, not the body.
    _ = model
    return {
        "contents": gemini_contents(messages),
        "generationConfig": {
            "temperature": params.temperature,
            "topP": params.top_p,
            "maxOutputTokens": params.max_tokens,
        },
    }


_FORMATTERS = {
    RequestShape.OPENAI_CHAT: _openai_chat,
    RequestShape.ANTHROPIC_MESSAGES: _anthropic_messages,
    RequestShape.QWEN_DASHSCOPE: _qwen_dashscope,
    RequestShape.GEMINI_GENERATE: _gemini_generate,
}


def format_request(
    profile: ProviderProfile,
    model: str,
    messages: Sequence[Message],
    params: GenerationParameters,
) -> Dict[str, Any]:
    """Build the JSON-serializable request body for ``profile``.

    Raises
    ------
    UnsupportedProviderError
        If the profile's request shape has no formatter.
    """
    formatter = _FORMATTERS.get(profile.request_shape)
    if formatter is None:
        raise UnsupportedProviderError(
            f"Unsupported request shape: {profile.request_shape}",
            provider=profile.id,
            model=model,
        )
    return formatter(model, messages, params)


__all__ = ["format_request", "gemini_contents", "messages_from_gemini_contents"]
