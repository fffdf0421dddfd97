"""prompter_llm.config.defaults
============================

Central place for small, stable default values used across the package:
provider endpoints, default models, model menus and the default selection
used when user settings are silent.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Active selection ----
# Provider chosen when settings name none; the model then defaults per provider.
PROMPTER_DEFAULT_PROVIDER = "openai"


# ---- Provider-specific defaults ----
OPENAI_DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
OPENAI_DEFAULT_MODEL = "gpt-3.5-turbo"
OPENAI_MODELS = ("gpt-4o", "gpt-4o-mini", "gpt-4", "gpt-3.5-turbo")

DEEPSEEK_DEFAULT_ENDPOINT = "https://api.deepseek.com/v1/chat/completions"
DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_MODELS = ("deepseek-chat", "deepseek-coder")

MISTRAL_DEFAULT_ENDPOINT = "https://api.mistral.ai/v1/chat/completions"
MISTRAL_DEFAULT_MODEL = "mistral-large-latest"
MISTRAL_MODELS = ("mistral-large-latest", "mistral-medium-latest", "mistral-small-latest")

# DashScope native text-generation endpoint (nested input/parameters body).
QWEN_DEFAULT_ENDPOINT = "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"
QWEN_DEFAULT_MODEL = "qwen-turbo"
QWEN_MODELS = ("qwen-turbo", "qwen-plus", "qwen-max")

ANTHROPIC_DEFAULT_ENDPOINT = "https://api.anthropic.com/v1/messages"
ANTHROPIC_DEFAULT_MODEL = "claude-3-haiku-20240307"
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_MODELS = ("claude-3-opus-20240229", "claude-3-sonnet-20240229", "claude-3-haiku-20240307")

# ``{model}`` is substituted with the requested model at call time.
GEMINI_DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
GEMINI_DEFAULT_MODEL = "gemini-pro"
GEMINI_MODELS = ("gemini-pro", "gemini-pro-vision")


__all__ = [
    "PROMPTER_DEFAULT_PROVIDER",
    "OPENAI_DEFAULT_ENDPOINT",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_MODELS",
    "DEEPSEEK_DEFAULT_ENDPOINT",
    "DEEPSEEK_DEFAULT_MODEL",
    "DEEPSEEK_MODELS",
    "MISTRAL_DEFAULT_ENDPOINT",
    "MISTRAL_DEFAULT_MODEL",
    "MISTRAL_MODELS",
    "QWEN_DEFAULT_ENDPOINT",
    "QWEN_DEFAULT_MODEL",
    "QWEN_MODELS",
    "ANTHROPIC_DEFAULT_ENDPOINT",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_MODELS",
    "GEMINI_DEFAULT_ENDPOINT",
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_MODELS",
]
