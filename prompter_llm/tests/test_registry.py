from __future__ import annotations

import pytest

from prompter_llm.base.errors import ErrorCode, UnsupportedProviderError
from prompter_llm.base.models import AuthStyle, RequestShape
from prompter_llm.base.registry import list_models, lookup, supported


def test_supported_lists_all_providers_in_order():
    assert supported() == ("openai", "deepseek", "qwen", "anthropic", "gemini", "mistral", "custom")


@pytest.mark.parametrize(
    "provider_id, shape, auth",
    [
        ("openai", RequestShape.OPENAI_CHAT, AuthStyle.BEARER_HEADER),
        ("deepseek", RequestShape.OPENAI_CHAT, AuthStyle.BEARER_HEADER),
        ("mistral", RequestShape.OPENAI_CHAT, AuthStyle.BEARER_HEADER),
        ("qwen", RequestShape.QWEN_DASHSCOPE, AuthStyle.BEARER_HEADER),
        ("anthropic", RequestShape.ANTHROPIC_MESSAGES, AuthStyle.API_KEY_HEADER),
        ("gemini", RequestShape.GEMINI_GENERATE, AuthStyle.QUERY_PARAM),
        ("custom", RequestShape.OPENAI_CHAT, AuthStyle.BEARER_HEADER),
    ],
)
def test_profiles_declare_shape_and_auth(provider_id, shape, auth):
    profile = lookup(provider_id)
    assert profile.id == provider_id
    assert profile.request_shape is shape
    assert profile.auth_style is auth


def test_lookup_is_case_insensitive_and_strips():
    assert lookup("  OpenAI ").id == "openai"


def test_unknown_provider_raises_without_network():
    with pytest.raises(UnsupportedProviderError) as info:
        lookup("unknown-provider")
    assert info.value.code is ErrorCode.UNSUPPORTED
    assert "unknown-provider" in str(info.value)


def test_anthropic_profile_carries_version_header():
    profile = lookup("anthropic")
    assert profile.api_key_header == "x-api-key"
    assert profile.static_headers["anthropic-version"] == "2023-06-01"


def test_gemini_endpoint_substitutes_model():
    profile = lookup("gemini")
    assert profile.endpoint_for("gemini-pro") == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
    )


def test_custom_has_no_endpoint_until_overridden():
    profile = lookup("custom")
    assert profile.endpoint_for("m") is None
    assert profile.endpoint_for("m", "https://gw.local/v1/chat/completions") == "https://gw.local/v1/chat/completions"


def test_list_models_returns_static_menu():
    assert list_models("openai")[0] == "gpt-4o"
    assert "deepseek-coder" in list_models("deepseek")
    assert list_models("custom") == ()
    with pytest.raises(UnsupportedProviderError):
        list_models("nope")
