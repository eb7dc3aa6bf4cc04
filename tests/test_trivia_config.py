"""Tests for config.py - settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from trivia_bot.config import (
    STATE_FILENAME,
    STATE_PATH_ENV,
    TriviaSettings,
    load_settings,
    resolve_state_path,
    settings_from_table,
)
from trivia_bot.errors import ConfigError


@pytest.fixture(autouse=True)
def _clear_state_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(STATE_PATH_ENV, raising=False)


def test_resolve_state_path_next_to_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config" / "bot.toml"
    result = resolve_state_path(config_path)
    assert result == tmp_path / "config" / STATE_FILENAME


def test_defaults() -> None:
    settings = TriviaSettings()
    assert settings.trigger == "trivia"
    assert settings.command_word == "/trivia"
    assert settings.state_path is None


def test_load_settings_missing_table_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "bot.toml"
    config_path.write_text("[other]\nkey = 1\n")

    settings = load_settings(config_path)

    assert settings.trigger == "trivia"
    assert settings.key_prefix == "quiz_"
    assert settings.state_path == tmp_path / STATE_FILENAME


def test_load_settings_reads_table(tmp_path: Path) -> None:
    config_path = tmp_path / "bot.toml"
    config_path.write_text(
        "[trivia]\n"
        'trigger = "/quiz"\n'
        'key_prefix = ""\n'
        f'state_path = "{tmp_path / "data" / "quiz.json"}"\n'
        'bot_username = "quizbot"\n'
    )

    settings = load_settings(config_path)

    assert settings.trigger == "quiz"
    assert settings.key_prefix == ""
    assert settings.state_path == tmp_path / "data" / "quiz.json"
    assert settings.bot_username == "quizbot"


def test_env_overrides_state_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(STATE_PATH_ENV, str(tmp_path / "env.json"))

    settings = settings_from_table({"state_path": "/ignored.json"})

    assert settings.state_path == tmp_path / "env.json"


def test_invalid_trigger() -> None:
    with pytest.raises(ConfigError):
        settings_from_table({"trigger": "two words"})
    with pytest.raises(ConfigError):
        settings_from_table({"trigger": "/"})


def test_non_string_option() -> None:
    with pytest.raises(ConfigError, match="key_prefix"):
        settings_from_table({"key_prefix": 3})


def test_invalid_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "bot.toml"
    config_path.write_text("[trivia\n")

    with pytest.raises(ConfigError, match="invalid TOML"):
        load_settings(config_path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="cannot read"):
        load_settings(tmp_path / "nope.toml")
