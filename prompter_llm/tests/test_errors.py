from __future__ import annotations

import httpx
import pytest

from prompter_llm.base.errors import (
    ConfigurationError,
    ErrorCode,
    HttpError,
    MalformedResponseError,
    TransientHttpError,
    TransportError,
    UnsupportedProviderError,
    classify_exception,
    classify_status,
    is_transient_status,
)


@pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
def test_transient_statuses(status):
    assert is_transient_status(status)


@pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422, 501])
def test_non_transient_statuses(status):
    assert not is_transient_status(status)


def test_classify_status_mapping():
    assert classify_status(401) is ErrorCode.AUTH
    assert classify_status(404) is ErrorCode.NOT_FOUND
    assert classify_status(429) is ErrorCode.RATE_LIMIT
    assert classify_status(418) is ErrorCode.VALIDATION
    assert classify_status(507) is ErrorCode.SERVER_ERROR
    assert classify_status(302) is ErrorCode.UNKNOWN


def test_classify_exception():
    req = httpx.Request("POST", "https://x.invalid")
    assert classify_exception(httpx.ReadTimeout("slow", request=req)) is ErrorCode.TIMEOUT
    assert classify_exception(httpx.ConnectError("refused", request=req)) is ErrorCode.TRANSIENT
    assert classify_exception(ValueError("x")) is ErrorCode.UNKNOWN
    err = UnsupportedProviderError("Unsupported provider: x", provider="x")
    assert classify_exception(err) is ErrorCode.UNSUPPORTED


def test_http_error_carries_status_and_body():
    err = HttpError(status_code=404, body='{"error":"no model"}', provider="openai", model="gpt-4o")
    assert err.status_code == 404
    assert err.body == '{"error":"no model"}'
    assert err.code is ErrorCode.NOT_FOUND
    assert not err.retryable
    assert str(err) == 'openai:gpt-4o not_found: openai API error: 404 - {"error":"no model"}'


def test_transient_http_error_is_retryable_http_error():
    err = TransientHttpError(status_code=503, body="busy", provider="qwen")
    assert isinstance(err, HttpError)
    assert err.retryable


def test_transport_error_codes():
    assert TransportError("boom", provider="openai").code is ErrorCode.TRANSIENT
    assert TransportError("slow", provider="openai", timed_out=True).code is ErrorCode.TIMEOUT


def test_transport_error_code_follows_raw_exception():
    req = httpx.Request("POST", "https://example.invalid")
    slow = TransportError("slow", provider="openai", raw=httpx.ReadTimeout("slow", request=req))
    refused = TransportError("refused", provider="openai", raw=httpx.ConnectError("refused", request=req))
    assert slow.code is ErrorCode.TIMEOUT
    assert refused.code is ErrorCode.TRANSIENT
    assert not slow.retryable


def test_validation_category_errors():
    assert MalformedResponseError("bad", provider="openai").code is ErrorCode.VALIDATION
    assert ConfigurationError("no key", provider="openai").code is ErrorCode.VALIDATION
