"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``prompter_llm.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    ConfigurationError,
    HttpError,
    MalformedResponseError,
    ProviderError,
    TransientHttpError,
    TranslationValidationError,
    TransportError,
    UnsupportedProviderError,
)
from .errors_parts.classification import (
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
