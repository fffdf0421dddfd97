"""Fixtures shared by the prompter_llm test suite."""

from __future__ import annotations

from typing import Iterator

import pytest

from prompter_llm import config as settings_module
from prompter_llm.config.env import ENV_ALIASES, ENV_MAP
from prompter_llm.tests.helpers import FakeSleep

_SETTINGS_VARS = (
    "PROMPTER_PROVIDER",
    "PROMPTER_MODEL",
    "PROMPTER_TEMPERATURE",
    "PROMPTER_MAX_TOKENS",
    "PROMPTER_TOP_P",
    "PROMPTER_TIMEOUT",
    "PROMPTER_RETRY_MAX_ATTEMPTS",
    "PROMPTER_RETRY_PAUSE_MS",
    "PROMPTER_CONFIG_FILE",
    "PROMPTER_LOG_LEVEL",
    "PROMPTER_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear settings and credential variables and point dotenv at an empty path."""
    for name in _SETTINGS_VARS:
        monkeypatch.delenv(name, raising=False)
    for provider, var in ENV_MAP.items():
        monkeypatch.delenv(var, raising=False)
        monkeypatch.delenv(f"{provider.upper()}_ENDPOINT", raising=False)
        for alias in ENV_ALIASES.get(provider, ()):
            monkeypatch.delenv(alias, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setattr(settings_module, "_DOTENV_LOADED", False)
    yield


@pytest.fixture()
def fake_sleep() -> FakeSleep:
    return FakeSleep()
