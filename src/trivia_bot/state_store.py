"""Versioned JSON state file shared by the file-backed stores."""

from __future__ import annotations

import dataclasses
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

import anyio

from .log import get_logger

logger = get_logger("trivia_bot.state_store")

T = TypeVar("T")


class JsonStateStore(Generic[T]):
    """Keep a dataclass state in memory and mirror it to a JSON file.

    The file is reloaded when its mtime changes, so two processes pointing at
    the same path see each other's writes on the next call. Writes go through
    a temp file and ``os.replace``; ``_save_locked`` only adopts the new state
    once the file is in place. Subclasses hold ``self._lock`` while touching
    ``self._state`` and pass a modified copy to ``_save_locked``.
    """

    def __init__(
        self,
        path: Path,
        *,
        version: int,
        state_type: type[T],
        state_factory: Callable[[], T],
        log_prefix: str,
    ) -> None:
        self._path = path
        self._version = version
        self._state_type = state_type
        self._state_factory = state_factory
        self._log_prefix = log_prefix
        self._lock = anyio.Lock()
        self._mtime_ns: int | None = None
        self._state: T = state_factory()
        self._load_locked()

    @property
    def path(self) -> Path:
        return self._path

    def _stat_mtime(self) -> int | None:
        try:
            return self._path.stat().st_mtime_ns
        except FileNotFoundError:
            return None

    def _reload_locked_if_needed(self) -> None:
        if self._stat_mtime() != self._mtime_ns:
            self._load_locked()

    def _load_locked(self) -> None:
        self._mtime_ns = self._stat_mtime()
        if self._mtime_ns is None:
            self._state = self._state_factory()
            return
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(
                f"{self._log_prefix}.load_failed", path=str(self._path), error=str(exc)
            )
            self._state = self._state_factory()
            return
        if not isinstance(payload, dict) or payload.get("version") != self._version:
            logger.warning(
                f"{self._log_prefix}.version_mismatch",
                path=str(self._path),
                expected=self._version,
            )
            self._state = self._state_factory()
            return
        fields = {f.name for f in dataclasses.fields(self._state_type)}
        try:
            self._state = self._state_type(
                **{k: v for k, v in payload.items() if k in fields}
            )
        except TypeError as exc:
            logger.warning(
                f"{self._log_prefix}.invalid_state",
                path=str(self._path),
                error=str(exc),
            )
            self._state = self._state_factory()

    def _save_locked(self, state: T) -> None:
        payload: dict[str, Any] = dataclasses.asdict(state)
        payload["version"] = self._version
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), "utf-8")
        os.replace(tmp_path, self._path)
        self._state = state
        self._mtime_ns = self._stat_mtime()
