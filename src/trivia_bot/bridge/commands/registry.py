"""Command registry, argument validation and help text."""

from __future__ import annotations

import dataclasses
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

from . import handlers

if TYPE_CHECKING:
    from ..config import TriviaBridgeConfig
    from .handlers import CommandCall

ActionHandler = Callable[["TriviaBridgeConfig", "CommandCall"], Awaitable[None]]

HELP_HEADER = "###### Trivia Plugin - Slash Command Help"
# `|` delimits the code span and is rendered as a backtick.
HELP_LINE = "* |{usage}| - {description}"


@dataclass(frozen=True, slots=True)
class ArityRule:
    kind: Literal["exact", "min"]
    count: int

    def accepts(self, n: int) -> bool:
        if self.kind == "exact":
            return n == self.count
        return n >= self.count


@dataclass(frozen=True, slots=True)
class CommandDef:
    """Definition of a trivia action."""

    name: str
    usage: str
    description: str
    handler: ActionHandler
    rule: ArityRule | None = None
    rejection: str = ""


def _exact(count: int) -> ArityRule:
    return ArityRule("exact", count)


def _at_least(count: int) -> ArityRule:
    return ArityRule("min", count)


COMMANDS: Mapping[str, CommandDef] = MappingProxyType(
    {
        "create": CommandDef(
            "create",
            "create <scope-name> <item-name>",
            "Creates a Trivia Quiz for a specific channel.",
            handlers.handle_create,
            _exact(2),
            "Please specify a channel and quiz name (one word, dashes allowed).",
        ),
        "list_quizzes": CommandDef(
            "list_quizzes",
            "list_quizzes",
            "Lists the quizzes that you have created",
            handlers.handle_list_quizzes,
            _exact(0),
            "List command does not accept any extra parameters",
        ),
        "list_questions": CommandDef(
            "list_questions",
            "list_questions <item-name>",
            "Lists the questions and answers for a specific quiz",
            handlers.handle_list_questions,
            _exact(1),
            "You need to provide the quiz name (one word, dashes allowed)",
        ),
        "add_question": CommandDef(
            "add_question",
            "add_question <item-name> <question * answer>",
            "Adds a question and its answer to a specific quiz",
            handlers.handle_add_question,
            _at_least(2),
            "You need to provide the quiz name, the question and the answer. "
            "Split the question and the answer with a *",
        ),
        "delete_quiz": CommandDef(
            "delete_quiz",
            "delete_quiz <item-name|all>",
            "Deletes a specific quiz or all quizzes if you type *all* as quiz name",
            handlers.handle_delete_quiz,
        ),
        "delete_question": CommandDef(
            "delete_question",
            "delete_question <item-name> <question * answer>",
            "Deletes a specific question",
            handlers.handle_delete_question,
            _at_least(2),
            "You need to provide the quiz name and the question",
        ),
        "start": CommandDef(
            "start",
            "start <item-name>",
            "Starts a specific quiz",
            handlers.handle_start,
            _exact(1),
            "This function requires the quiz name",
        ),
    }
)


def with_handlers(
    overrides: Mapping[str, ActionHandler],
    commands: Mapping[str, CommandDef] = COMMANDS,
) -> Mapping[str, CommandDef]:
    """Return a copy of ``commands`` with some handlers swapped out."""
    unknown = set(overrides) - set(commands)
    if unknown:
        raise KeyError(f"unknown actions: {', '.join(sorted(unknown))}")
    return MappingProxyType(
        {
            name: dataclasses.replace(command, handler=overrides[name])
            if name in overrides
            else command
            for name, command in commands.items()
        }
    )


def validate_command(
    action: str,
    parameters: tuple[str, ...] | list[str],
    commands: Mapping[str, CommandDef] = COMMANDS,
) -> str | None:
    """Return a rejection message, or None when the arguments are acceptable."""
    command = commands.get(action)
    if command is None or command.rule is None:
        return None
    if command.rule.accepts(len(parameters)):
        return None
    return command.rejection


def render_help(trigger: str, commands: Mapping[str, CommandDef] = COMMANDS) -> str:
    template = HELP_LINE.replace("|", "`")
    lines = [
        template.format(
            usage=f"/{trigger} {command.usage}", description=command.description
        )
        for command in commands.values()
    ]
    return f"{HELP_HEADER}\n" + "\n".join(lines)
