"""Interfaces the trivia bot expects from its hosting chat platform."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .types import BotAccount, ChannelInfo, RenderedMessage

if TYPE_CHECKING:
    from .bridge.commands.schema import CommandSchema


class Transport(Protocol):
    async def send_ephemeral(
        self,
        *,
        user_id: str,
        channel_id: str,
        message: RenderedMessage,
    ) -> None:
        """Deliver ``message`` so only ``user_id`` sees it."""
        ...


class ChannelDirectory(Protocol):
    async def get_channel(self, channel_id: str) -> ChannelInfo:
        """Return channel metadata; raise ``HostError`` on failure."""
        ...


class BotAccounts(Protocol):
    async def ensure_bot(self, bot: BotAccount) -> str:
        """Create the bot account if needed and return its user id."""
        ...


class CommandRegistrar(Protocol):
    async def register_command(self, schema: CommandSchema) -> None: ...


class PluginHost(Transport, ChannelDirectory, BotAccounts, CommandRegistrar, Protocol):
    """Everything activation needs from the host in one object."""
