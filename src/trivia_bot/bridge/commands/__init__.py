"""Command handling for the trivia bot.

This module provides command parsing, validation and dispatch.
"""

from __future__ import annotations

from .dispatch import dispatch_command
from .handlers import CommandCall
from .parse import (
    QuestionAnswer,
    QuestionParseResult,
    parse_invocation,
    parse_question_answer,
    tokenize,
)
from .registry import (
    COMMANDS,
    ArityRule,
    CommandDef,
    render_help,
    validate_command,
    with_handlers,
)
from .schema import CommandSchema, build_command_schema

__all__ = [
    "COMMANDS",
    "ArityRule",
    "CommandCall",
    "CommandDef",
    "CommandSchema",
    "QuestionAnswer",
    "QuestionParseResult",
    "build_command_schema",
    "dispatch_command",
    "parse_invocation",
    "parse_question_answer",
    "render_help",
    "tokenize",
    "validate_command",
    "with_handlers",
]
