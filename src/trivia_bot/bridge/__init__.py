"""Trivia command bridge between a chat host and the scoped store."""

from __future__ import annotations

from .config import TriviaBridgeConfig
from .runtime import activate, build_store

__all__ = ["TriviaBridgeConfig", "activate", "build_store"]
