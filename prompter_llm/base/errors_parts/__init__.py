"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `prompter_llm.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    ConfigurationError,
    HttpError,
    MalformedResponseError,
    ProviderError,
    TransientHttpError,
    TranslationValidationError,
    TransportError,
    UnsupportedProviderError,
)
from .classification import (
    TRANSIENT_STATUS_CODES,
    classify_exception,
    classify_status,
    is_transient_status,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "UnsupportedProviderError",
    "ConfigurationError",
    "HttpError",
    "TransientHttpError",
    "TransportError",
    "MalformedResponseError",
    "TranslationValidationError",
    "TRANSIENT_STATUS_CODES",
    "classify_exception",
    "classify_status",
    "is_transient_status",
]
