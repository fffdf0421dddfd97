from __future__ import annotations

import pytest

from prompter_llm.base.errors import MalformedResponseError
from prompter_llm.base.extraction import extract, extract_usage
from prompter_llm.base.models import RequestShape, TokenUsage
from prompter_llm.base.registry import lookup

WELL_FORMED = {
    "openai": {
        "choices": [{"message": {"role": "assistant", "content": "hi"}}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
    },
    "anthropic": {
        "content": [{"type": "text", "text": "hi"}],
        "usage": {"input_tokens": 3, "output_tokens": 1},
    },
    "qwen": {
        "output": {"text": "hi", "finish_reason": "stop"},
        "usage": {"input_tokens": 3, "output_tokens": 1, "total_tokens": 4},
    },
    "gemini": {
        "candidates": [{"content": {"role": "model", "parts": [{"text": "hi"}]}}],
        "usageMetadata": {"promptTokenCount": 3, "candidatesTokenCount": 1, "totalTokenCount": 4},
    },
}


@pytest.mark.parametrize("provider_id", sorted(WELL_FORMED))
def test_extracts_text_for_each_shape(provider_id):
    result = extract(lookup(provider_id), WELL_FORMED[provider_id], "m-1")
    assert result.content == "hi"
    assert result.model_used == "m-1"
    assert result.provider_used == provider_id
    assert result.usage is not None
    assert result.usage.prompt_tokens == 3
    assert result.usage.completion_tokens == 1


def test_anthropic_total_is_not_derived():
    result = extract(lookup("anthropic"), WELL_FORMED["anthropic"], "claude")
    assert result.usage == TokenUsage(prompt_tokens=3, completion_tokens=1, total_tokens=None)


def test_missing_usage_stays_absent():
    result = extract(lookup("openai"), {"choices": [{"message": {"content": "x"}}]}, "gpt-4o")
    assert result.usage is None
    assert "usage" not in result.to_dict()


def test_partial_usage_is_not_zero_filled():
    usage = extract_usage(RequestShape.OPENAI_CHAT, {"usage": {"completion_tokens": 7}})
    assert usage == TokenUsage(completion_tokens=7)
    assert usage.to_dict() == {"completion_tokens": 7}


def test_empty_string_content_is_still_content():
    result = extract(lookup("openai"), {"choices": [{"message": {"content": ""}}]}, "gpt-4o")
    assert result.content == ""


@pytest.mark.parametrize(
    "provider_id, body",
    [
        ("openai", {"choices": []}),
        ("openai", {"choices": [{"message": {"content": None}}]}),
        ("openai", {"error": {"message": "bad"}}),
        ("anthropic", {"content": []}),
        ("anthropic", {"content": [{"type": "text", "text": 5}]}),
        ("qwen", {"output": {}}),
        ("gemini", {"candidates": [{"content": {"parts": []}}]}),
        ("gemini", []),
    ],
)
def test_missing_path_raises_malformed(provider_id, body):
    with pytest.raises(MalformedResponseError) as info:
        extract(lookup(provider_id), body, "m")
    assert provider_id in info.value.message


def test_malformed_message_names_the_path():
    with pytest.raises(MalformedResponseError) as info:
        extract(lookup("gemini"), {"candidates": []}, "gemini-pro")
    assert "candidates[0].content.parts[0].text" in info.value.message
