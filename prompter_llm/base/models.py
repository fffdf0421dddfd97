"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``prompter_llm.base.models_parts``.
"""

from .models_parts.message import Message, Role
from .models_parts.generation_params import GenerationParameters
from .models_parts.provider_profile import AuthStyle, ProviderProfile, RequestShape
from .models_parts.completion_result import CompletionResult, TokenUsage
from .models_parts.translation_result import (
    StructuredTranslationResult,
    TranslationFailure,
    TranslationSuccess,
    WrappedChatResponse,
)

__all__ = [
    "Message",
    "Role",
    "GenerationParameters",
    "AuthStyle",
    "ProviderProfile",
    "RequestShape",
    "CompletionResult",
    "TokenUsage",
    "StructuredTranslationResult",
    "TranslationFailure",
    "TranslationSuccess",
    "WrappedChatResponse",
]
