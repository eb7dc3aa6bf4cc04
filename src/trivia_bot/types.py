"""Plain data types shared between the trivia bot and its host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CHANNEL_TYPE_OPEN = "O"
CHANNEL_TYPE_PRIVATE = "P"
CHANNEL_TYPE_DIRECT = "D"
CHANNEL_TYPE_GROUP = "G"


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Where a command line came from, as reported by the host."""

    channel_id: str
    user_id: str
    team_id: str | None = None


@dataclass(frozen=True, slots=True)
class ParsedInvocation:
    raw_line: str
    command_word: str
    action: str
    parameters: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ChannelInfo:
    channel_id: str
    type: str
    name: str


@dataclass(frozen=True, slots=True)
class RenderedMessage:
    text: str
    sender_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class BotAccount:
    username: str
    display_name: str
    description: str
