from __future__ import annotations

from prompter_llm.config.env import (
    ENV_ALIASES,
    ENV_MAP,
    get_endpoint_env_name,
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_endpoint,
    resolve_provider_key,
)


def test_env_map_covers_every_provider():
    for p in ["openai", "deepseek", "qwen", "anthropic", "gemini", "mistral", "custom"]:
        assert p in ENV_MAP


def test_get_env_var_name_and_aliases():
    assert get_env_var_name("OpenAI") == "OPENAI_API_KEY"
    assert get_env_var_name("unknown") is None
    assert ENV_ALIASES["gemini"][0] == "GEMINI_API_KEY"
    assert list(get_env_var_candidates("qwen")) == ["QWEN_API_KEY", "DASHSCOPE_API_KEY"]


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")
    assert is_placeholder("ChangeMe123")
    assert is_placeholder("example-key")
    assert is_placeholder("test_token")
    assert is_placeholder("your-api-key")
    assert not is_placeholder("sk-real-value")
    assert not is_placeholder(None)


def test_resolve_provider_key_prefers_canonical(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "canon")
    monkeypatch.setenv("GOOGLE_API_KEY", "alias")
    assert resolve_provider_key("gemini") == ("canon", "GEMINI_API_KEY")


def test_resolve_provider_key_falls_back_past_placeholder(monkeypatch):
    monkeypatch.setenv("QWEN_API_KEY", "placeholder")
    monkeypatch.setenv("DASHSCOPE_API_KEY", "dash")
    assert resolve_provider_key("qwen") == ("dash", "DASHSCOPE_API_KEY")
    assert resolve_provider_key("anthropic") == (None, None)


def test_endpoint_env(monkeypatch):
    assert get_endpoint_env_name("custom") == "CUSTOM_ENDPOINT"
    monkeypatch.setenv("CUSTOM_ENDPOINT", "  https://gw.local/v1  ")
    assert resolve_provider_endpoint("custom") == "https://gw.local/v1"
    monkeypatch.setenv("CUSTOM_ENDPOINT", "   ")
    assert resolve_provider_endpoint("custom") is None
