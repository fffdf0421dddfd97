from __future__ import annotations

import asyncio

import httpx
import pytest

from prompter_llm.base.errors import ConfigurationError, UnsupportedProviderError
from prompter_llm.config import LLMSettings
from prompter_llm.service.executor import execute_cell_prompt, execute_enhance_cell
from prompter_llm.tests.helpers import Recorder, make_client, openai_body


def _mock_http(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_execute_cell_prompt_with_settings():
    rec = Recorder(lambda r: httpx.Response(200, json=openai_body('{"format":"plaintext","tags":["x"],"response":"hi"}')))
    settings = LLMSettings(provider="deepseek", api_keys={"deepseek": "ds"}, temperature=0.5, max_tokens=300)
    wrapped = asyncio.run(execute_cell_prompt("hello", settings=settings, http_client=_mock_http(rec)))
    assert wrapped.success
    assert wrapped.data.data == {"format": "plaintext", "tags": ["x"], "response": "hi"}
    assert wrapped.provider_used == "deepseek"
    assert wrapped.model_used == "deepseek-chat"
    assert wrapped.temperature == 0.5
    assert wrapped.max_tokens == 300
    assert str(rec.requests[0].url) == "https://api.deepseek.com/v1/chat/completions"


def test_execute_cell_prompt_loads_settings_from_env(monkeypatch):
    monkeypatch.setenv("PROMPTER_PROVIDER", "mistral")
    monkeypatch.setenv("MISTRAL_API_KEY", "mk")
    rec = Recorder(lambda r: httpx.Response(200, json=openai_body('{"format":"markdown","response":"ok"}')))
    wrapped = asyncio.run(execute_cell_prompt("hello", http_client=_mock_http(rec)))
    assert wrapped.provider_used == "mistral"
    assert rec.requests[0].headers["authorization"] == "Bearer mk"


def test_explicit_client_wins():
    client = make_client(lambda r: httpx.Response(200, json=openai_body('{"format":"plaintext","response":"c"}')))
    wrapped = asyncio.run(execute_cell_prompt("hello", client=client))
    assert wrapped.data.data["response"] == "c"


def test_unknown_provider_raises():
    with pytest.raises(UnsupportedProviderError):
        asyncio.run(execute_cell_prompt("x", settings=LLMSettings(provider="nope", api_keys={"nope": "k"})))


def test_missing_key_raises_configuration_error():
    with pytest.raises(ConfigurationError) as info:
        asyncio.run(execute_cell_prompt("x", settings=LLMSettings(provider="openai")))
    assert "API key" in str(info.value)


def test_enhance_cell_uses_single_response_shape():
    rec = Recorder(lambda r: httpx.Response(200, json=openai_body('{"response":"print(2)","format":"x"}')))
    client = make_client(rec)
    wrapped = asyncio.run(execute_enhance_cell("print(1)", "python", "code", client=client))
    assert wrapped.data.data == {"response": "print(2)"}
    sent = rec.bodies[0]["messages"][0]["content"]
    assert "EnhanceCellChatResponse" in sent
    assert "python code" in sent
