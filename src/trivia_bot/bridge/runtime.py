"""Bot activation: bot account, command registration, bridge config."""

from __future__ import annotations

from collections.abc import Mapping

from ..config import TriviaSettings
from ..errors import ActivationError, HostError
from ..host import PluginHost
from ..log import get_logger
from ..scoped_store import JsonKVStore, KVBackend, MemoryKVStore, ScopedStore
from ..types import BotAccount
from .commands.registry import COMMANDS, CommandDef
from .commands.schema import build_command_schema
from .config import TriviaBridgeConfig

logger = get_logger("trivia_bot.bridge.runtime")


def build_store(
    settings: TriviaSettings, backend: KVBackend | None = None
) -> ScopedStore:
    """File-backed store when a state path is configured, in-memory otherwise."""
    if backend is None:
        if settings.state_path is not None:
            backend = JsonKVStore(settings.state_path)
        else:
            logger.warning("trivia.store.memory_only")
            backend = MemoryKVStore()
    return ScopedStore(backend, key_prefix=settings.key_prefix)


async def activate(
    host: PluginHost,
    settings: TriviaSettings,
    *,
    store: ScopedStore | None = None,
    commands: Mapping[str, CommandDef] = COMMANDS,
) -> TriviaBridgeConfig:
    """Ensure the bot account exists and register the slash command."""
    bot = BotAccount(
        username=settings.bot_username,
        display_name=settings.bot_display_name,
        description=settings.bot_description,
    )
    try:
        bot_user_id = await host.ensure_bot(bot)
    except HostError as exc:
        raise ActivationError("failed to ensure bot user") from exc

    schema = build_command_schema(
        settings.trigger, display_name=settings.bot_display_name, commands=commands
    )
    try:
        await host.register_command(schema)
    except HostError as exc:
        raise ActivationError("failed to register command") from exc

    logger.info(
        "trivia.activated",
        bot_user_id=bot_user_id,
        trigger=settings.trigger,
    )
    return TriviaBridgeConfig(
        settings=settings,
        transport=host,
        channels=host,
        store=store if store is not None else build_store(settings),
        bot_user_id=bot_user_id,
        commands=commands,
    )
