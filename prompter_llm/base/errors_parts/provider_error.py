"""
Structured provider error exception types.

`ProviderError` wraps every failure raised below the translator boundary with a
normalized `ErrorCode`. The subclasses name the failure categories callers
branch on: unknown providers, HTTP status failures (transient or terminal),
network-level failures, malformed 2xx bodies, configuration gaps and schema
mismatches.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging and display.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Whether the transport retry loop may repeat the request.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


class UnsupportedProviderError(ProviderError):
    """Unknown provider id or request shape. Never retried."""

    def __init__(self, message: str, *, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED,
            message=message,
            provider=provider,
            model=model,
        )


class ConfigurationError(ProviderError):
    """A call could not be constructed (missing endpoint or API key)."""

    def __init__(self, message: str, *, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=message,
            provider=provider,
            model=model,
        )


class HttpError(ProviderError):
    """Terminal non-2xx HTTP response carrying the status and raw body."""

    def __init__(
        self,
        *,
        status_code: int,
        body: str,
        provider: str,
        model: Optional[str] = None,
        retryable: bool = False,
    ) -> None:
        # Local import keeps classification free of a cycle on this module.
        from .classification import classify_status

        super().__init__(
            code=classify_status(status_code),
            message=f"{provider} API error: {status_code} - {body}",
            provider=provider,
            model=model,
            retryable=retryable,
        )
        self.status_code = status_code
        self.body = body


class TransientHttpError(HttpError):
    """HTTP status in the retryable set (429, 500, 502, 503, 504)."""

    def __init__(
        self,
        *,
        status_code: int,
        body: str,
        provider: str,
        model: Optional[str] = None,
    ) -> None:
        super().__init__(
            status_code=status_code,
            body=body,
            provider=provider,
            model=model,
            retryable=True,
        )


class TransportError(ProviderError):
    """Network-level failure (DNS, refused connection, timeout). Never retried.

    The code is classified from ``raw`` when given, otherwise from ``timed_out``.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        timed_out: bool = False,
        raw: Optional[Exception] = None,
    ) -> None:
        from .classification import classify_exception

        if raw is not None:
            code = classify_exception(raw)
        else:
            code = ErrorCode.TIMEOUT if timed_out else ErrorCode.TRANSIENT
        super().__init__(
            code=code,
            message=f"Error calling {provider} API: {message}",
            provider=provider,
            model=model,
            raw=raw,
        )


class MalformedResponseError(ProviderError):
    """A 2xx response is missing the expected field path or is not JSON."""

    def __init__(self, message: str, *, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=message,
            provider=provider,
            model=model,
        )


class TranslationValidationError(ProviderError):
    """Model text failed JSON parsing or shape validation.

    Raised inside the translator only; ``JsonTranslator.translate`` converts it
    into a ``TranslationFailure`` result.
    """

    def __init__(self, message: str, *, provider: str = "translator", model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=message,
            provider=provider,
            model=model,
        )


__all__ = [
    "ProviderError",
    "UnsupportedProviderError",
    "ConfigurationError",
    "HttpError",
    "TransientHttpError",
    "TransportError",
    "MalformedResponseError",
    "TranslationValidationError",
]
