"""Settings for the trivia bot, read from the `[trivia]` table of a TOML file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .log import get_logger

logger = get_logger("trivia_bot.config")

STATE_FILENAME = "trivia_state.json"
DEFAULT_TRIGGER = "trivia"
DEFAULT_KEY_PREFIX = "quiz_"
STATE_PATH_ENV = "TRIVIA_STATE_PATH"


@dataclass(frozen=True, slots=True)
class TriviaSettings:
    trigger: str = DEFAULT_TRIGGER
    key_prefix: str = DEFAULT_KEY_PREFIX
    state_path: Path | None = None
    bot_username: str = "triviabot"
    bot_display_name: str = "Trivia Bot"
    bot_description: str = "A bot account created by the Trivia Plugin."

    @property
    def command_word(self) -> str:
        return f"/{self.trigger}"


def _expand_path(s: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _env(name: str) -> str:
    return (os.environ.get(name) or "").strip()


def resolve_state_path(config_path: Path) -> Path:
    """Get the path for the state file, adjacent to config."""
    return config_path.with_name(STATE_FILENAME)


def _load_toml(path: Path) -> dict[str, Any]:
    import tomllib

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    return data


def _str_option(table: dict[str, Any], key: str, default: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"trivia.{key} must be a string")
    return value


def settings_from_table(
    table: dict[str, Any], *, config_path: Path | None = None
) -> TriviaSettings:
    if not isinstance(table, dict):
        raise ConfigError("trivia must be a table/dict")

    trigger = _str_option(table, "trigger", DEFAULT_TRIGGER).strip().lstrip("/")
    if not trigger or any(ch.isspace() for ch in trigger):
        raise ConfigError("trivia.trigger must be a single non-empty word")
    key_prefix = _str_option(table, "key_prefix", DEFAULT_KEY_PREFIX)

    state_path: Path | None = None
    raw_state_path = _env(STATE_PATH_ENV) or _str_option(table, "state_path", "")
    if raw_state_path.strip():
        state_path = _expand_path(raw_state_path.strip())
    elif config_path is not None:
        state_path = resolve_state_path(config_path)

    defaults = TriviaSettings()
    return TriviaSettings(
        trigger=trigger,
        key_prefix=key_prefix,
        state_path=state_path,
        bot_username=_str_option(table, "bot_username", defaults.bot_username),
        bot_display_name=_str_option(
            table, "bot_display_name", defaults.bot_display_name
        ),
        bot_description=_str_option(
            table, "bot_description", defaults.bot_description
        ),
    )


def load_settings(config_path: Path | str) -> TriviaSettings:
    """Load settings from ``config_path``; a missing `[trivia]` table means defaults."""
    path = _expand_path(str(config_path))
    data = _load_toml(path)
    settings = settings_from_table(data.get("trivia", {}), config_path=path)
    logger.info(
        "trivia.config.loaded",
        path=str(path),
        trigger=settings.trigger,
        state_path=str(settings.state_path),
    )
    return settings
