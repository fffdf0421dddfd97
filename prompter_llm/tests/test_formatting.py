from __future__ import annotations

from dataclasses import replace

import pytest

from prompter_llm.base.errors import UnsupportedProviderError
from prompter_llm.base.formatting import format_request, gemini_contents, messages_from_gemini_contents
from prompter_llm.base.models import GenerationParameters, Message
from prompter_llm.base.registry import lookup

MESSAGES = [
    Message.system("be brief"),
    Message.user("hi"),
    Message.assistant("hello"),
    Message.user("again"),
]
PARAMS = GenerationParameters(temperature=0.2, max_tokens=64, top_p=0.9)
PLAIN = [
    {"role": "system", "content": "be brief"},
    {"role": "user", "content": "hi"},
    {"role": "assistant", "content": "hello"},
    {"role": "user", "content": "again"},
]


@pytest.mark.parametrize("provider_id", ["openai", "deepseek", "mistral", "custom"])
def test_openai_chat_golden(provider_id):
    body = format_request(lookup(provider_id), "m-1", MESSAGES, PARAMS)
    assert body == {
        "model": "m-1",
        "messages": PLAIN,
        "temperature": 0.2,
        "max_tokens": 64,
        "top_p": 0.9,
    }


def test_anthropic_messages_golden():
    body = format_request(lookup("anthropic"), "claude-3-haiku-20240307", MESSAGES, PARAMS)
    assert body == {
        "model": "claude-3-haiku-20240307",
        "messages": PLAIN,
        "max_tokens": 64,
        "temperature": 0.2,
        "top_p": 0.9,
    }


def test_qwen_dashscope_golden():
    body = format_request(lookup("qwen"), "qwen-turbo", MESSAGES, PARAMS)
    assert body == {
        "model": "qwen-turbo",
        "input": {"messages": PLAIN},
        "parameters": {"temperature": 0.2, "max_tokens": 64, "top_p": 0.9},
    }


def test_gemini_generate_golden():
    body = format_request(lookup("gemini"), "gemini-pro", MESSAGES, PARAMS)
    assert body == {
        "contents": [
            {"role": "system", "parts": [{"text": "be brief"}]},
            {"role": "user", "parts": [{"text": "hi"}]},
            {"role": "model", "parts": [{"text": "hello"}]},
            {"role": "user", "parts": [{"text": "again"}]},
        ],
        "generationConfig": {"temperature": 0.2, "topP": 0.9, "maxOutputTokens": 64},
    }
    assert "model" not in body


def test_gemini_round_trip_keeps_order_and_text():
    assert messages_from_gemini_contents(gemini_contents(MESSAGES)) == MESSAGES


def test_zero_temperature_is_sent_verbatim():
    params = GenerationParameters.resolve(temperature=0, max_tokens=None, top_p=None)
    body = format_request(lookup("openai"), "gpt-4o", [Message.user("x")], params)
    assert body["temperature"] == 0.0
    assert body["max_tokens"] == 1000
    assert body["top_p"] == 1.0


def test_unknown_shape_raises():
    profile = replace(lookup("openai"), request_shape="legacy-completions")  # type: ignore[arg-type]
    with pytest.raises(UnsupportedProviderError):
        format_request(profile, "m", [Message.user("x")], PARAMS)


def test_formatting_does_not_mutate_messages():
    msgs = list(MESSAGES)
    format_request(lookup("gemini"), "gemini-pro", msgs, PARAMS)
    assert msgs == MESSAGES
