"""prompter_llm package

LLM request/response normalization and schema-constrained completion for the
Prompter notebook.

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`ProviderError`, :class:`ErrorCode` and subclasses
    - Client: :class:`LLMClient`
    - Structured output: :class:`JsonTranslator`, :class:`ShapeDescriptor`,
      :class:`FieldSpec`, ``PROMPT_CELL_SHAPE``
    - Settings: :func:`load_settings`, :class:`LLMSettings`
    - Entry point: :func:`execute_cell_prompt`
"""

from .base.errors import (
    ConfigurationError,
    ErrorCode,
    HttpError,
    MalformedResponseError,
    ProviderError,
    TransientHttpError,
    TranslationValidationError,
    TransportError,
    UnsupportedProviderError,
)
from .base.client import LLMClient
from .base.models import (
    CompletionResult,
    GenerationParameters,
    Message,
    TokenUsage,
    TranslationFailure,
    TranslationSuccess,
    WrappedChatResponse,
)
from .config import LLMSettings, load_settings
from .structured import PROMPT_CELL_SHAPE, FieldSpec, JsonTranslator, ShapeDescriptor
from .service import execute_cell_prompt

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "UnsupportedProviderError",
    "ConfigurationError",
    "HttpError",
    "TransientHttpError",
    "TransportError",
    "MalformedResponseError",
    "TranslationValidationError",
    "LLMClient",
    "CompletionResult",
    "GenerationParameters",
    "Message",
    "TokenUsage",
    "TranslationSuccess",
    "TranslationFailure",
    "WrappedChatResponse",
    "LLMSettings",
    "load_settings",
    "FieldSpec",
    "ShapeDescriptor",
    "JsonTranslator",
    "PROMPT_CELL_SHAPE",
    "execute_cell_prompt",
]
