"""Handlers for the trivia actions.

A quiz is the text blob stored for the channel it was created in: the
entry's scope name is the quiz name and its value holds one
``question * answer`` pair per line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ...errors import (
    HostError,
    NotFoundError,
    ParseError,
    ScopeUnsupportedError,
    StoreFailure,
    ValidationError,
)
from ...log import get_logger
from ...scoped_store import StoredEntry, matches_scope_name
from ...types import (
    CHANNEL_TYPE_DIRECT,
    ChannelInfo,
    InvocationContext,
    ParsedInvocation,
    RenderedMessage,
)
from .parse import (
    QuestionAnswer,
    free_text,
    parse_question_answer,
    parse_question_lines,
)

if TYPE_CHECKING:
    from ..config import TriviaBridgeConfig

logger = get_logger("trivia_bot.bridge.commands.handlers")

NOT_SET_TEXT = "quiz has not been set yet for this channel"
NO_QUIZZES_TEXT = "There are no quizzes defined"
DELETE_ALL_TOKEN = "all"


@dataclass(slots=True)
class CommandCall:
    """One command invocation and the responses posted for it so far."""

    context: InvocationContext
    invocation: ParsedInvocation
    responses: list[str] = field(default_factory=list)

    @property
    def parameters(self) -> tuple[str, ...]:
        return self.invocation.parameters


async def _reply(cfg: TriviaBridgeConfig, call: CommandCall, text: str) -> None:
    call.responses.append(text)
    try:
        await cfg.transport.send_ephemeral(
            user_id=call.context.user_id,
            channel_id=call.context.channel_id,
            message=RenderedMessage(text=text, sender_id=cfg.bot_user_id),
        )
    except HostError as exc:
        logger.warning(
            "trivia.reply.failed",
            channel_id=call.context.channel_id,
            user_id=call.context.user_id,
            error=str(exc),
        )


def _store_failure_text(exc: StoreFailure) -> str:
    return (
        f"error occurred while accessing the quiz store "
        f"({exc.operation} `{exc.scope_id}`): `{exc.cause}`"
    )


def _format_questions(questions: list[QuestionAnswer]) -> str:
    return "\n".join(f" * {qa.question} - {qa.answer}" for qa in questions)


def _append_question(value: str, pair: QuestionAnswer) -> str:
    lines = value.splitlines()
    lines.append(pair.as_line())
    return "\n".join(lines)


def _remove_question(value: str, pair: QuestionAnswer) -> str | None:
    """Drop the first line holding ``pair``; None when there is none.

    Lines that are not a valid pair are kept as they are.
    """
    lines = value.splitlines()
    for index, line in enumerate(lines):
        if parse_question_answer(line).entry == pair:
            del lines[index]
            return "\n".join(lines)
    return None


async def _resolve_quiz_channel(
    cfg: TriviaBridgeConfig, channel_id: str
) -> ChannelInfo:
    channel = await cfg.channels.get_channel(channel_id)
    if channel.type == CHANNEL_TYPE_DIRECT:
        raise ScopeUnsupportedError(channel_id, channel.type)
    return channel


async def _read_quiz(
    cfg: TriviaBridgeConfig, channel_id: str, quiz_name: str
) -> StoredEntry:
    entry = await cfg.store.get(channel_id)
    if entry is None:
        raise NotFoundError(channel_id)
    if not matches_scope_name(entry, quiz_name):
        raise ValidationError(f"quiz `{quiz_name}` is not hosted in this channel")
    return entry


def _parse_pair(call: CommandCall) -> QuestionAnswer:
    # /trivia <action> <quiz> <question * answer>
    parsed = parse_question_answer(free_text(call.invocation.raw_line, 3))
    if parsed.error is not None or parsed.entry is None:
        raise ParseError(f"error:\n{parsed.error}")
    return parsed.entry


async def handle_create(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    scope_name, quiz_name = call.parameters[0], call.parameters[1]
    channel_id = call.context.channel_id
    try:
        channel = await _resolve_quiz_channel(cfg, channel_id)
    except HostError as exc:
        await _reply(
            cfg,
            call,
            f"error occurred while checking the type of the channel `{channel_id}`: `{exc}`",
        )
        return
    except ScopeUnsupportedError:
        await _reply(cfg, call, "quizzes are not supported for direct channels")
        return
    if channel.name != scope_name:
        await _reply(
            cfg,
            call,
            f"run `create` from inside `{scope_name}`; this channel is `{channel.name}`",
        )
        return

    try:
        existing = await cfg.store.get(channel_id)
        if existing is not None:
            await _reply(
                cfg,
                call,
                f"this channel already hosts quiz `{existing.name}`. delete it first.",
            )
            return
        await cfg.store.set(channel_id, "", name=quiz_name)
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return

    logger.info("trivia.quiz.created", channel_id=channel_id, quiz=quiz_name)
    await _reply(cfg, call, f"created quiz `{quiz_name}` for `{scope_name}`")


async def handle_list_quizzes(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    try:
        names = await cfg.store.list_names()
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return

    if not names:
        await _reply(cfg, call, NO_QUIZZES_TEXT)
        return

    lines = ["Quizzes that are defined:"]
    lines.extend(f" * {name}" for name in names)
    await _reply(cfg, call, "\n".join(lines))


async def handle_list_questions(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    quiz_name = call.parameters[0]
    try:
        matches = await cfg.store.preview(quiz_name)
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return

    if not matches:
        await _reply(cfg, call, f"quiz `{quiz_name}` has not been found")
        return

    for entry in matches:
        questions = parse_question_lines(entry.value)
        if not questions:
            await _reply(cfg, call, f"quiz `{quiz_name}` has no questions yet")
            continue
        await _reply(
            cfg, call, f"quiz `{quiz_name}`:\n{_format_questions(questions)}"
        )


async def handle_add_question(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    quiz_name = call.parameters[0]
    channel_id = call.context.channel_id
    try:
        pair = _parse_pair(call)
        entry = await _read_quiz(cfg, channel_id, quiz_name)
        if pair in parse_question_lines(entry.value):
            await _reply(cfg, call, f"quiz `{quiz_name}` already has that question")
            return
        value = _append_question(entry.value, pair)
        await cfg.store.set(channel_id, value, name=entry.name)
    except NotFoundError:
        await _reply(cfg, call, NOT_SET_TEXT)
        return
    except ValidationError as exc:
        await _reply(cfg, call, str(exc))
        return
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return

    await _reply(
        cfg,
        call,
        f"added to quiz `{quiz_name}`:\n{_format_questions([pair])}",
    )


async def handle_delete_question(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    quiz_name = call.parameters[0]
    channel_id = call.context.channel_id
    try:
        pair = _parse_pair(call)
        entry = await _read_quiz(cfg, channel_id, quiz_name)
        value = _remove_question(entry.value, pair)
        if value is None:
            await _reply(
                cfg, call, f"question has not been found in quiz `{quiz_name}`"
            )
            return
        await cfg.store.set(channel_id, value, name=entry.name)
    except NotFoundError:
        await _reply(cfg, call, NOT_SET_TEXT)
        return
    except ValidationError as exc:
        await _reply(cfg, call, str(exc))
        return
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return

    await _reply(cfg, call, f"question has been deleted from quiz `{quiz_name}`")


async def _delete_all_quizzes(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    try:
        entries = await cfg.store.scan_all()
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return
    if not entries:
        await _reply(cfg, call, NO_QUIZZES_TEXT)
        return

    deleted = 0
    for entry in entries:
        try:
            await cfg.store.delete(cfg.store.scope_id_for(entry))
        except StoreFailure as exc:
            logger.warning(
                "trivia.quiz.delete_all_interrupted",
                deleted=deleted,
                total=len(entries),
            )
            await _reply(
                cfg,
                call,
                f"{_store_failure_text(exc)}\n"
                f"{deleted} of {len(entries)} quizzes were deleted before the error",
            )
            return
        deleted += 1

    logger.info("trivia.quiz.deleted_all", count=deleted)
    await _reply(cfg, call, f"{deleted} quizzes have been deleted")


async def handle_delete_quiz(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    if not call.parameters:
        await _reply(
            cfg,
            call,
            f"usage: `/{cfg.settings.trigger} delete_quiz <item-name|all>`",
        )
        return
    quiz_name = call.parameters[0]
    if quiz_name == DELETE_ALL_TOKEN:
        await _delete_all_quizzes(cfg, call)
        return

    channel_id = call.context.channel_id
    try:
        await _read_quiz(cfg, channel_id, quiz_name)
        await cfg.store.delete(channel_id)
    except NotFoundError:
        await _reply(cfg, call, NOT_SET_TEXT)
        return
    except ValidationError as exc:
        await _reply(cfg, call, str(exc))
        return
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return

    logger.info("trivia.quiz.deleted", channel_id=channel_id, quiz=quiz_name)
    await _reply(cfg, call, f"quiz `{quiz_name}` has been deleted")


async def handle_start(cfg: TriviaBridgeConfig, call: CommandCall) -> None:
    quiz_name = call.parameters[0]
    try:
        entry = await _read_quiz(cfg, call.context.channel_id, quiz_name)
    except NotFoundError:
        await _reply(cfg, call, NOT_SET_TEXT)
        return
    except ValidationError as exc:
        await _reply(cfg, call, str(exc))
        return
    except StoreFailure as exc:
        await _reply(cfg, call, _store_failure_text(exc))
        return

    questions = parse_question_lines(entry.value)
    if not questions:
        await _reply(cfg, call, f"quiz `{quiz_name}` has no questions yet")
        return
    lines = [f"Starting quiz `{quiz_name}` with {len(questions)} questions:"]
    lines.extend(f"{i}. {qa.question}" for i, qa in enumerate(questions, start=1))
    await _reply(cfg, call, "\n".join(lines))
