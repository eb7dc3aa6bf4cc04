"""Slash command schema announced to the host at activation."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from .registry import COMMANDS, CommandDef

_ARG_RE = re.compile(r"<[^>]+>")


@dataclass(frozen=True, slots=True)
class AutocompleteItem:
    trigger: str
    hint: str
    help_text: str


@dataclass(frozen=True, slots=True)
class CommandSchema:
    trigger: str
    display_name: str
    description: str
    auto_complete_hint: str
    auto_complete_desc: str
    items: tuple[AutocompleteItem, ...]


def _usage_hint(usage: str) -> str:
    return " ".join(_ARG_RE.findall(usage))


def build_command_schema(
    trigger: str,
    *,
    display_name: str = "Trivia Bot",
    commands: Mapping[str, CommandDef] = COMMANDS,
) -> CommandSchema:
    items = tuple(
        AutocompleteItem(
            trigger=command.name,
            hint=_usage_hint(command.usage),
            help_text=command.description,
        )
        for command in commands.values()
    )
    return CommandSchema(
        trigger=trigger,
        display_name=display_name,
        description="Trivia Bot lets you create and host a Trivia Quiz.",
        auto_complete_hint="[command]",
        auto_complete_desc=f"Available commands: {', '.join(commands)}",
        items=items,
    )
