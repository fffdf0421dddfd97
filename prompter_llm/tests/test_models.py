from __future__ import annotations

from datetime import datetime, timezone

import pytest

from prompter_llm.base.models import (
    CompletionResult,
    GenerationParameters,
    Message,
    TokenUsage,
    TranslationFailure,
    TranslationSuccess,
    WrappedChatResponse,
)


def test_resolve_keeps_zero_and_fills_none():
    params = GenerationParameters.resolve(temperature=0.0, max_tokens=None, top_p=0)
    assert params == GenerationParameters(temperature=0.0, max_tokens=1000, top_p=0.0)


def test_generation_parameters_are_frozen():
    with pytest.raises(Exception):
        GenerationParameters().temperature = 1.0  # type: ignore[misc]


def test_message_helpers():
    assert Message.user("x") == Message(role="user", content="x")
    assert Message.system("s").to_dict() == {"role": "system", "content": "s"}


def test_token_usage_omits_unreported_fields():
    assert TokenUsage().is_empty()
    assert TokenUsage(prompt_tokens=0).to_dict() == {"prompt_tokens": 0}


def test_completion_result_to_dict():
    result = CompletionResult("hi", "gpt-4o", "openai", TokenUsage(total_tokens=3))
    assert result.to_dict() == {
        "content": "hi",
        "model_used": "gpt-4o",
        "provider_used": "openai",
        "usage": {"total_tokens": 3},
    }


def test_wrapped_response_reflects_result_kind():
    now = datetime.now(timezone.utc)
    common = dict(
        provider_used="openai",
        model_used="gpt-4o",
        start_time=now,
        end_time=now,
        duration_ms=0.0,
        temperature=0.7,
        max_tokens=1000,
        top_p=1.0,
    )
    ok = WrappedChatResponse(data=TranslationSuccess({"a": 1}), **common)
    bad = WrappedChatResponse(data=TranslationFailure("nope"), **common)
    assert ok.success and not bad.success
    assert bad.to_dict()["data"] == {"success": False, "message": "nope"}
    assert ok.to_dict()["usage"] is None
