"""Configuration for the trivia command bridge."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..config import TriviaSettings
from ..host import ChannelDirectory, Transport
from ..scoped_store import ScopedStore
from .commands.registry import COMMANDS, CommandDef


@dataclass(frozen=True, slots=True)
class TriviaBridgeConfig:
    """Everything a command invocation needs, passed explicitly.

    ``bot_user_id`` is the account responses are posted as.
    """

    settings: TriviaSettings
    transport: Transport
    channels: ChannelDirectory
    store: ScopedStore
    bot_user_id: str
    commands: Mapping[str, CommandDef] = field(default_factory=lambda: COMMANDS)
