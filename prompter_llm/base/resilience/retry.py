"""Bounded fixed-pause retry for transient HTTP failures.

- Retries only errors accepted by ``config.is_retryable``; by default those
  flagged ``retryable``, which among the built-in errors is only
  :class:`TransientHttpError`.
- ``max_attempts`` counts retries after the initial call, so a request is
  issued at most ``max_attempts + 1`` times.
- The pause between attempts is constant; there is no backoff and no jitter.
- When retries are exhausted the last transient error is escalated to a
  terminal :class:`HttpError` carrying the same status and body.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, TypeVar

from ..constants import DEFAULT_RETRY_MAX_ATTEMPTS, DEFAULT_RETRY_PAUSE_MS
from ..errors import HttpError, ProviderError, TransientHttpError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


def _is_retryable(error: ProviderError) -> bool:
    return error.retryable


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    pause_ms: int = DEFAULT_RETRY_PAUSE_MS
    is_retryable: Callable[[ProviderError], bool] = _is_retryable
    attempt_logger: AttemptLogger | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("RetryConfig.max_attempts must be >= 0")
        if self.pause_ms < 0:
            raise ValueError("RetryConfig.pause_ms must be >= 0")

    @property
    def pause_seconds(self) -> float:
        return self.pause_ms / 1000.0


DEFAULT_RETRY_CONFIG = RetryConfig()


def _escalate(error: ProviderError) -> ProviderError:
    if isinstance(error, TransientHttpError):
        return HttpError(
            status_code=error.status_code,
            body=error.body,
            provider=error.provider,
            model=error.model,
        )
    return error


async def retry_async(
    factory: Callable[[], Awaitable[T]],
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
) -> T:
    """Await ``factory()`` with bounded fixed-pause retries.

    Parameters
    ----------
    factory:
        Zero-argument callable returning a fresh awaitable per attempt.
    config:
        Retry policy.
    sleep:
        Awaitable sleep used between attempts; defaults to ``asyncio.sleep``.

    Raises
    ------
    ProviderError
        Non-retryable errors immediately; a terminal :class:`HttpError` once
        retries are exhausted.
    """
    do_sleep = sleep or asyncio.sleep
    attempt = 0
    while True:
        try:
            result = await factory()
        except ProviderError as e:
            retryable = config.is_retryable(e)
            will_retry = retryable and attempt < config.max_attempts
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    delay=config.pause_seconds if will_retry else None,
                    error=e,
                )
            if not will_retry:
                terminal = _escalate(e) if retryable else e
                if terminal is not e:
                    raise terminal from e
                raise
            await do_sleep(config.pause_seconds)
            attempt += 1
            continue
        if config.attempt_logger:
            config.attempt_logger(
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=None,
                error=None,
            )
        return result


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry_async",
]
