"""
Structured translation results and the per-call wrapper.

`StructuredTranslationResult` is a tagged union: `TranslationSuccess` carries
the validated data, `TranslationFailure` carries the reason the model output
did not fit the requested shape. `WrappedChatResponse` attaches call timing,
usage and the resolved generation parameters to either outcome.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Generic, Literal, Optional, TypeVar, Union

from .completion_result import TokenUsage

T = TypeVar("T")


@dataclass(frozen=True)
class TranslationSuccess(Generic[T]):
    data: T
    success: Literal[True] = True

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, "data": self.data}


@dataclass(frozen=True)
class TranslationFailure:
    message: str
    success: Literal[False] = False

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


StructuredTranslationResult = Union[TranslationSuccess[T], TranslationFailure]


@dataclass(frozen=True)
class WrappedChatResponse(Generic[T]):
    """A translation outcome plus the metadata of the call that produced it.

    Attributes:
        data: Success or failure result of the translation.
        provider_used: Provider identifier.
        model_used: Model identifier.
        start_time: UTC timestamp taken before formatting.
        end_time: UTC timestamp taken after validation.
        duration_ms: Wall-clock duration in milliseconds.
        temperature: Resolved sampling temperature.
        max_tokens: Resolved completion token limit.
        top_p: Resolved nucleus sampling value.
        usage: Token usage of the final round trip, when reported.
    """

    data: StructuredTranslationResult[T]
    provider_used: str
    model_used: str
    start_time: datetime
    end_time: datetime
    duration_ms: float
    temperature: float
    max_tokens: int
    top_p: float
    usage: Optional[TokenUsage] = None

    @property
    def success(self) -> bool:
        return self.data.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.data.to_dict(),
            "provider_used": self.provider_used,
            "model_used": self.model_used,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_ms": self.duration_ms,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "usage": self.usage.to_dict() if self.usage is not None else None,
        }


__all__ = [
    "TranslationSuccess",
    "TranslationFailure",
    "StructuredTranslationResult",
    "WrappedChatResponse",
]
