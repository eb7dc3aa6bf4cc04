"""Route a trivia command line to its handler."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...errors import UnknownActionError
from ...log import get_logger
from ...types import InvocationContext
from .handlers import CommandCall, _reply
from .parse import parse_invocation
from .registry import render_help, validate_command

if TYPE_CHECKING:
    from ..config import TriviaBridgeConfig

logger = get_logger("trivia_bot.bridge.commands.dispatch")


async def dispatch_command(
    cfg: TriviaBridgeConfig,
    raw_line: str,
    context: InvocationContext,
) -> list[str]:
    """Handle one command line and return the texts posted back.

    Lines addressed to another command produce no response. Never raises:
    every failure ends as a response to the invoking user.
    """
    invocation = parse_invocation(raw_line)
    if invocation is None or invocation.command_word != cfg.settings.command_word:
        return []

    call = CommandCall(context=context, invocation=invocation)
    action = invocation.action

    rejection = validate_command(action, invocation.parameters, cfg.commands)
    if rejection is not None:
        logger.debug("trivia.dispatch.rejected", action=action, reason=rejection)
        await _reply(cfg, call, rejection)
        return call.responses

    if action == "":
        await _reply(cfg, call, render_help(cfg.settings.trigger, cfg.commands))
        return call.responses

    command = cfg.commands.get(action)
    if command is None:
        error = UnknownActionError(action)
        logger.debug("trivia.dispatch.unknown_action", action=action)
        await _reply(cfg, call, str(error))
        return call.responses

    logger.debug(
        "trivia.dispatch.handle",
        action=action,
        channel_id=context.channel_id,
        user_id=context.user_id,
    )
    try:
        await command.handler(cfg, call)
    except Exception as exc:
        logger.exception("trivia.dispatch.handler_failed", action=action)
        await _reply(
            cfg, call, f"error occurred while processing `{action}`: `{exc}`"
        )
    return call.responses
