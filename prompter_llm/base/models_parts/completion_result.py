"""
Normalized completion returned by the response extractor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TokenUsage:
    """Token accounting reported by a provider.

    Fields the provider did not report stay ``None``; nothing is derived or
    zero-filled.
    """

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def is_empty(self) -> bool:
        return self.prompt_tokens is None and self.completion_tokens is None and self.total_tokens is None

    def to_dict(self) -> Dict[str, int]:
        """Return only the reported fields."""
        data = {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class CompletionResult:
    """Provider-agnostic completion.

    Attributes:
        content: Completion text; always a string on success.
        model_used: Model the request was issued for.
        provider_used: Provider identifier.
        usage: Token usage when the provider reported any.
    """

    content: str
    model_used: str
    provider_used: str
    usage: Optional[TokenUsage] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "content": self.content,
            "model_used": self.model_used,
            "provider_used": self.provider_used,
        }
        if self.usage is not None:
            data["usage"] = self.usage.to_dict()
        return data


__all__ = ["TokenUsage", "CompletionResult"]
