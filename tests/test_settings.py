from __future__ import annotations

import pytest
from pydantic import ValidationError

from agents.errors import ConfigurationError
from config.settings import Settings


def test_defaults_match_documented_values(monkeypatch):
    for name in (
        "PORT",
        "ACTION_URL",
        "VOXRAY_URL",
        "LLM_MODEL",
        "LLM_MAX_TOKENS",
        "LLM_TEMPERATURE",
        "SYSTEM_PROMPT",
        "SERIALIZE_TURNS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None, openai_api_key="sk-test")

    assert settings.port == 8080
    assert settings.action_url == "https://app.alodev.org/action-webhook"
    assert settings.stream_url == "wss://voxray.alodev.org/websocket"
    assert settings.llm_model == "gpt-4"
    assert settings.llm_max_tokens == 150
    assert settings.llm_temperature == 0.8
    assert settings.serialize_turns is False
    assert "Alex" in settings.system_prompt


def test_values_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("VOXRAY_URL", "relay.example.com/websocket")
    monkeypatch.setenv("SERIALIZE_TURNS", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.openai_api_key == "sk-env"
    assert settings.port == 9090
    assert settings.stream_url == "wss://relay.example.com/websocket"
    assert settings.serialize_turns is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("configured", "expected"),
    [
        ("wss://relay.example.com/websocket", "wss://relay.example.com/websocket"),
        ("ws://localhost:8080/websocket", "ws://localhost:8080/websocket"),
        ("https://relay.example.com/websocket", "wss://relay.example.com/websocket"),
        ("http://localhost:8080/websocket", "ws://localhost:8080/websocket"),
        ("relay.example.com/websocket", "wss://relay.example.com/websocket"),
    ],
)
def test_stream_url_normalization(configured, expected):
    settings = Settings(_env_file=None, openai_api_key="sk-test", voxray_url=configured)
    assert settings.stream_url == expected


@pytest.mark.parametrize("key", [None, "", "   "])
def test_missing_credential_raises_configuration_error(key):
    settings = Settings(_env_file=None, openai_api_key=key)
    with pytest.raises(ConfigurationError):
        settings.require_credentials()


def test_settings_are_immutable():
    settings = Settings(_env_file=None, openai_api_key="sk-test")
    with pytest.raises(ValidationError):
        settings.port = 1


def test_only_gateway_settings_are_declared():
    assert "environment" not in Settings.model_fields


def test_load_prompt_rejects_unknown_file():
    from prompts.loader import load_prompt

    with pytest.raises(RuntimeError):
        load_prompt("missing_prompt.txt")
