"""Async HTTP transport with transient-status retry.

Purpose:
    POST a JSON request body to a provider endpoint and return the decoded
    JSON response body, classifying every failure into the error taxonomy.

External dependencies:
    - ``httpx`` (``AsyncClient``) for HTTP.

Retry semantics:
    - Statuses 429, 500, 502, 503 and 504 are retried up to
      ``RetryConfig.max_attempts`` times with a fixed pause; exhaustion
      raises a terminal ``HttpError``.
    - Any other non-2xx status raises ``HttpError`` on the first attempt.
    - ``httpx.RequestError`` (DNS, refused connection, timeouts) raises
      ``TransportError`` and is never retried.

Lifecycle:
    - An injected ``httpx.AsyncClient`` is reused and never closed here.
    - Without one, each ``send`` opens and closes its own client configured
      with the transport timeout. No pool is shared across calls.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx

from ..constants import DEFAULT_HTTP_TIMEOUT
from ..errors import (
    HttpError,
    MalformedResponseError,
    ProviderError,
    TransientHttpError,
    TransportError,
    is_transient_status,
)
from ..logging import LogContext, get_logger, normalized_log_event
from ..resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry_async
from .auth import redact_url

_BODY_PREVIEW_CHARS = 200


class HttpTransport:
    """Send provider requests over HTTP with bounded transient retries."""

    def __init__(
        self,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = DEFAULT_HTTP_TIMEOUT,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        """Create a transport.

        Args:
            client: Optional externally owned ``httpx.AsyncClient``.
            timeout: Seconds handed to ``httpx`` when this transport creates
                its own client. ``None`` disables the httpx timeout.
            retry_config: Retry policy for transient statuses.
            sleep: Awaitable sleep used between retries (tests inject a fake).
        """
        self._client = client
        self._timeout = timeout
        self._retry = retry_config
        self._sleep = sleep
        self._logger = get_logger("prompter.transport")

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry

    async def send(
        self,
        endpoint: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
        *,
        provider: str = "-",
        model: Optional[str] = None,
    ) -> Any:
        """POST ``body`` to ``endpoint`` and return the decoded JSON response.

        Raises:
            HttpError: Non-transient non-2xx status, or transient retries exhausted.
            TransportError: Network-level failure.
            MalformedResponseError: 2xx response whose body is not JSON.
        """
        ctx = LogContext(provider=provider, model=model, extra={"endpoint": redact_url(endpoint)})
        config = self._retry
        if config.attempt_logger is None:
            config = replace(config, attempt_logger=self._attempt_logger(ctx))

        if self._client is not None:
            client = self._client
            return await retry_async(
                lambda: self._post_once(client, endpoint, body, headers, provider, model),
                config,
                sleep=self._sleep,
            )
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await retry_async(
                lambda: self._post_once(client, endpoint, body, headers, provider, model),
                config,
                sleep=self._sleep,
            )

    async def _post_once(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
        provider: str,
        model: Optional[str],
    ) -> Any:
        try:
            response = await client.post(endpoint, json=dict(body), headers=dict(headers))
        except httpx.RequestError as exc:
            raise TransportError(
                str(exc) or type(exc).__name__,
                provider=provider,
                model=model,
                raw=exc,
            ) from exc

        status = response.status_code
        if response.is_success:
            try:
                return response.json()
            except ValueError as exc:
                raise MalformedResponseError(
                    f"{provider} returned a non-JSON body: {response.text[:_BODY_PREVIEW_CHARS]}",
                    provider=provider,
                    model=model,
                ) from exc
        if is_transient_status(status):
            raise TransientHttpError(status_code=status, body=response.text, provider=provider, model=model)
        raise HttpError(status_code=status, body=response.text, provider=provider, model=model)

    def _attempt_logger(self, ctx: LogContext):
        logger = self._logger

        def _log(*, attempt: int, max_attempts: int, delay, error: ProviderError | None) -> None:
            normalized_log_event(
                logger,
                "retry.attempt",
                ctx,
                phase="send",
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error_code=(error.code.value if error else None),
                status_code=getattr(error, "status_code", None),
                will_retry=bool(error and delay is not None),
                tokens=None,
                emitted=None,
            )

        return _log


__all__ = ["HttpTransport"]
