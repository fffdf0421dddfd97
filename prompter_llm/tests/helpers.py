"""Test helpers: recording fake sleep and httpx.MockTransport-backed clients.

All HTTP goes through ``httpx.MockTransport``; retry pauses go through a
recording fake sleep so no test waits on the clock.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx

from prompter_llm.base.client import LLMClient
from prompter_llm.base.http import HttpTransport
from prompter_llm.base.models import GenerationParameters
from prompter_llm.base.resilience.retry import RetryConfig

Handler = Callable[[httpx.Request], httpx.Response]


class FakeSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class Recorder:
    """Wrap a handler and keep every request it served."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content.decode("utf-8")) for r in self.requests]


def openai_body(content: Any, usage: Optional[Dict[str, int]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    if usage is not None:
        body["usage"] = usage
    return body


def sequence_handler(responses: List[httpx.Response]) -> Handler:
    """Serve ``responses`` in order; the last one repeats."""
    queue = list(responses)

    def _handler(request: httpx.Request) -> httpx.Response:
        return queue.pop(0) if len(queue) > 1 else queue[0]

    return _handler


def make_transport(
    handler: Handler,
    *,
    max_attempts: int = 3,
    pause_ms: int = 1000,
    sleep: Optional[FakeSleep] = None,
) -> HttpTransport:
    return HttpTransport(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        retry_config=RetryConfig(max_attempts=max_attempts, pause_ms=pause_ms),
        sleep=sleep or FakeSleep(),
    )


def make_client(
    handler: Handler,
    provider: str = "openai",
    model: Optional[str] = None,
    *,
    api_key: str = "sk-test-key",
    endpoint: Optional[str] = None,
    params: Optional[GenerationParameters] = None,
    sleep: Optional[FakeSleep] = None,
    max_attempts: int = 3,
) -> LLMClient:
    return LLMClient(
        provider,
        model,
        api_key=api_key,
        endpoint=endpoint,
        params=params,
        transport=make_transport(handler, sleep=sleep, max_attempts=max_attempts),
    )


