"""Trivia quiz bot: slash command processing over a per-channel text store."""

from __future__ import annotations

from loguru import logger

__version__ = "0.1.0"

logger.disable("trivia_bot")
