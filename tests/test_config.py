"""Tests for config/config_loader.py."""

from pathlib import Path

import pytest
import yaml

from config.config_loader import AppConfig, ModelConfig, PromptsConfig, RosterEntry, load_config


@pytest.fixture
def minimal_settings(tmp_path: Path) -> Path:
    """Write a minimal valid settings.yaml to a temp path."""
    settings = {
        "server": {"host": "127.0.0.1", "port": 8080, "cors_origins": ["http://localhost:3000"]},
        "defaults": {
            "rounds": 3,
            "max_rounds": 5,
            "include_history": True,
            "roster": [
                {"name": "GPT-4", "stance": "pro"},
                {"name": "Skeptic", "stance": "con", "provider": "gemini"},
            ],
        },
        "models": {
            "claude": {
                "sdk": "anthropic",
                "model": "claude-3-5-sonnet-latest",
                "api_key_env": "TEST_CLAUDE_KEY",
                "timeout_sec": 60,
                "max_tokens": 1024,
            }
        },
        "aliases": {"Claude": "claude"},
        "prompts": {
            "turn": "You are {name}, arguing {stance} on {topic}.",
            "turn_with_history": "You are {name}, arguing {stance} on {topic}.\n{history}",
        },
    }
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump(settings), encoding="utf-8")
    return path


def test_load_config_returns_app_config(minimal_settings):
    config = load_config(minimal_settings)
    assert isinstance(config, AppConfig)


def test_load_config_server(minimal_settings, monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    config = load_config(minimal_settings)
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 8080
    assert config.server.cors_origins == ["http://localhost:3000"]


def test_port_env_overrides_settings(minimal_settings, monkeypatch):
    monkeypatch.setenv("PORT", "9123")
    config = load_config(minimal_settings)
    assert config.server.port == 9123


def test_load_config_defaults(minimal_settings):
    config = load_config(minimal_settings)
    assert config.defaults.rounds == 3
    assert config.defaults.max_rounds == 5
    assert config.defaults.include_history is True


def test_load_config_roster(minimal_settings):
    config = load_config(minimal_settings)
    assert config.defaults.roster == [
        RosterEntry("GPT-4", "pro", None),
        RosterEntry("Skeptic", "con", "gemini"),
    ]


def test_load_config_models(minimal_settings):
    config = load_config(minimal_settings)
    assert "claude" in config.models
    assert isinstance(config.models["claude"], ModelConfig)
    assert config.models["claude"].model == "claude-3-5-sonnet-latest"
    assert config.models["claude"].base_url is None


def test_load_config_prompts(minimal_settings):
    config = load_config(minimal_settings)
    assert isinstance(config.prompts, PromptsConfig)
    assert "{stance}" in config.prompts.turn
    assert "{history}" in config.prompts.turn_with_history


def test_load_config_aliases(minimal_settings):
    config = load_config(minimal_settings)
    assert config.aliases == {"Claude": "claude"}


def test_load_config_available_providers_with_key(minimal_settings, monkeypatch):
    monkeypatch.setenv("TEST_CLAUDE_KEY", "sk-test-key")
    config = load_config(minimal_settings)
    assert "claude" in config.available_providers


def test_load_config_no_available_providers_without_key(minimal_settings, monkeypatch):
    monkeypatch.delenv("TEST_CLAUDE_KEY", raising=False)
    config = load_config(minimal_settings)
    assert "claude" not in config.available_providers


def test_blank_key_counts_as_missing(minimal_settings, monkeypatch):
    monkeypatch.setenv("TEST_CLAUDE_KEY", "   ")
    config = load_config(minimal_settings)
    assert config.available_providers == set()


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config(Path("/nonexistent/settings.yaml"))


def test_config_is_frozen(minimal_settings):
    config = load_config(minimal_settings)
    with pytest.raises(AttributeError):
        config.defaults.rounds = 7  # type: ignore[misc]


def test_bundled_settings_load(monkeypatch):
    """The shipped settings.yaml parses and carries the documented defaults."""
    monkeypatch.delenv("PORT", raising=False)
    config = load_config()
    assert config.defaults.rounds == 3
    assert config.server.port == 5000
    assert set(config.models) == {"openai", "claude", "gemini"}
    assert config.aliases["GPT-4"] == "openai"
    assert [r.name for r in config.defaults.roster] == ["GPT-4", "Gemini"]
    assert "Respond to the previous point or start your argument." in config.prompts.turn
