"""Response extraction per request shape.

Reads the completion text and, when present, token usage out of a decoded
provider response body.

Text paths
----------
``openai-chat``         ``choices[0].message.content``
``anthropic-messages``  ``content[0].text``
``qwen-dashscope``      ``output.text``
``gemini-generate``     ``candidates[0].content.parts[0].text``

Usage mapping
-------------
``openai-chat``         ``usage.prompt_tokens / completion_tokens / total_tokens``
``anthropic-messages``  ``usage.input_tokens / output_tokens``
``qwen-dashscope``      ``usage.input_tokens / output_tokens / total_tokens``
``gemini-generate``     ``usageMetadata.promptTokenCount / candidatesTokenCount / totalTokenCount``

Usage is best-effort: unreported fields stay ``None`` and no total is derived.
A missing text path or a non-string value raises ``MalformedResponseError``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .errors import MalformedResponseError
from .models import CompletionResult, ProviderProfile, RequestShape, TokenUsage

PathStep = Union[str, int]

_TEXT_PATHS: Mapping[RequestShape, Tuple[PathStep, ...]] = {
    RequestShape.OPENAI_CHAT: ("choices", 0, "message", "content"),
    RequestShape.ANTHROPIC_MESSAGES: ("content", 0, "text"),
    RequestShape.QWEN_DASHSCOPE: ("output", "text"),
    RequestShape.GEMINI_GENERATE: ("candidates", 0, "content", "parts", 0, "text"),
}

# (usage container key, prompt key, completion key, total key)
_USAGE_KEYS: Mapping[RequestShape, Tuple[str, str, str, Optional[str]]] = {
    RequestShape.OPENAI_CHAT: ("usage", "prompt_tokens", "completion_tokens", "total_tokens"),
    RequestShape.ANTHROPIC_MESSAGES: ("usage", "input_tokens", "output_tokens", None),
    RequestShape.QWEN_DASHSCOPE: ("usage", "input_tokens", "output_tokens", "total_tokens"),
    RequestShape.GEMINI_GENERATE: ("usageMetadata", "promptTokenCount", "candidatesTokenCount", "totalTokenCount"),
}

_MISSING = object()


def _walk(body: Any, path: Sequence[PathStep]) -> Any:
    """Follow ``path`` through nested mappings and lists; ``_MISSING`` on any miss."""
    node = body
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return _MISSING
            node = node[step]
        else:
            if not isinstance(node, Mapping) or step not in node:
                return _MISSING
            node = node[step]
    return node


def _render_path(path: Sequence[PathStep]) -> str:
    out = ""
    for step in path:
        out += f"[{step}]" if isinstance(step, int) else (f".{step}" if out else step)
    return out


def _coerce_int(value: Any) -> Optional[int]:
    # bool is an int subclass and never a token count
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    return None


def extract_usage(request_shape: RequestShape, body: Any) -> Optional[TokenUsage]:
    """Return reported token usage, or ``None`` when the body carries none."""
    keys = _USAGE_KEYS.get(request_shape)
    if keys is None or not isinstance(body, Mapping):
        return None
    container_key, prompt_key, completion_key, total_key = keys
    container = body.get(container_key)
    if not isinstance(container, Mapping):
        return None
    usage = TokenUsage(
        prompt_tokens=_coerce_int(container.get(prompt_key)),
        completion_tokens=_coerce_int(container.get(completion_key)),
        total_tokens=_coerce_int(container.get(total_key)) if total_key else None,
    )
    return None if usage.is_empty() else usage


def extract(profile: ProviderProfile, body: Any, model: str) -> CompletionResult:
    """Normalize a decoded provider response into a :class:`CompletionResult`.

    Args:
        profile: Profile whose ``request_shape`` selects the field paths.
        body: Decoded JSON response body.
        model: Model the request was issued for; reported as ``model_used``.

    Raises:
        MalformedResponseError: The text path is absent or not a string.
    """
    path = _TEXT_PATHS.get(profile.request_shape)
    if path is None:
        raise MalformedResponseError(
            f"No extraction path for request shape {profile.request_shape}",
            provider=profile.id,
            model=model,
        )
    text = _walk(body, path)
    if text is _MISSING:
        raise MalformedResponseError(
            f"Invalid response format from {profile.id}: missing {_render_path(path)}",
            provider=profile.id,
            model=model,
        )
    if not isinstance(text, str):
        raise MalformedResponseError(
            f"Invalid response format from {profile.id}: {_render_path(path)} is {type(text).__name__}, expected string",
            provider=profile.id,
            model=model,
        )
    return CompletionResult(
        content=text,
        model_used=model,
        provider_used=profile.id,
        usage=extract_usage(profile.request_shape, body),
    )


__all__ = ["extract", "extract_usage"]
