from __future__ import annotations

import asyncio

import pytest

from prompter_llm.base.errors import ErrorCode, HttpError, ProviderError, TransientHttpError, TransportError
from prompter_llm.base.resilience.retry import RetryConfig, retry_async
from prompter_llm.tests.helpers import FakeSleep


class Flaky:
    def __init__(self, failures):
        self.failures = list(failures)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return "ok"


def _transient(status=503):
    return TransientHttpError(status_code=status, body="busy", provider="openai", model="gpt-4o")


def test_succeeds_after_transient_failures():
    sleep = FakeSleep()
    factory = Flaky([_transient(), _transient()])
    result = asyncio.run(retry_async(factory, RetryConfig(max_attempts=3, pause_ms=250), sleep=sleep))
    assert result == "ok"
    assert factory.calls == 3
    assert sleep.calls == [0.25, 0.25]


def test_exhaustion_escalates_to_terminal_http_error():
    sleep = FakeSleep()
    factory = Flaky([_transient(502) for _ in range(10)])
    with pytest.raises(HttpError) as info:
        asyncio.run(retry_async(factory, RetryConfig(max_attempts=2, pause_ms=10), sleep=sleep))
    assert not isinstance(info.value, TransientHttpError)
    assert info.value.status_code == 502
    assert info.value.body == "busy"
    assert isinstance(info.value.__cause__, TransientHttpError)
    assert factory.calls == 3
    assert len(sleep.calls) == 2


def test_non_retryable_error_propagates_immediately():
    sleep = FakeSleep()
    boom = TransportError("refused", provider="openai")
    factory = Flaky([boom])
    with pytest.raises(TransportError) as info:
        asyncio.run(retry_async(factory, RetryConfig(max_attempts=5, pause_ms=10), sleep=sleep))
    assert info.value is boom
    assert factory.calls == 1
    assert sleep.calls == []


def test_errors_flagged_retryable_are_retried_by_default():
    sleep = FakeSleep()
    flagged = ProviderError(code=ErrorCode.RATE_LIMIT, message="slow down", provider="openai", retryable=True)
    factory = Flaky([flagged])
    asyncio.run(retry_async(factory, RetryConfig(max_attempts=2, pause_ms=10), sleep=sleep))
    assert factory.calls == 2
    assert sleep.calls == [0.01]


def test_zero_attempts_means_single_call():
    factory = Flaky([_transient()])
    with pytest.raises(HttpError):
        asyncio.run(retry_async(factory, RetryConfig(max_attempts=0, pause_ms=10), sleep=FakeSleep()))
    assert factory.calls == 1


def test_attempt_logger_sees_every_attempt():
    seen = []

    def log(**kw):
        seen.append((kw["attempt"], kw["delay"], kw["error"] is not None))

    factory = Flaky([_transient()])
    cfg = RetryConfig(max_attempts=3, pause_ms=100, attempt_logger=log)
    asyncio.run(retry_async(factory, cfg, sleep=FakeSleep()))
    assert seen == [(0, 0.1, True), (1, None, False)]


@pytest.mark.parametrize("kwargs", [{"max_attempts": -1}, {"pause_ms": -5}])
def test_config_rejects_negative_values(kwargs):
    with pytest.raises(ValueError):
        RetryConfig(**kwargs)
