"""Per-scope text store.

One text blob per scope (a channel id) lives under ``key_prefix + scope_id``
in a key-value backend, together with the scope names it is associated
with. Scope names are a comma separated list; matching trims each part.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TypeVar

from .errors import StoreFailure
from .log import get_logger
from .state_store import JsonStateStore

logger = get_logger("trivia_bot.scoped_store")

STATE_VERSION = 1

R = TypeVar("R")


class KVBackend(Protocol):
    """Byte-valued key-value backend.

    Failures surface as exceptions; ``ScopedStore`` wraps any ``Exception`` a
    backend raises into ``StoreFailure`` with the operation and scope.
    """

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def list_keys(self, prefix: str = "") -> list[str]: ...


class MemoryKVStore:
    """Dict-backed backend; keys iterate in insertion order."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    async def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def list_keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._data if key.startswith(prefix)]


@dataclass
class _KVState:
    version: int
    entries: dict[str, str] = field(default_factory=dict)


def _new_state() -> _KVState:
    return _KVState(version=STATE_VERSION, entries={})


class JsonKVStore(JsonStateStore[_KVState]):
    """Backend persisted to a single JSON file; values are base64 encoded."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            path,
            version=STATE_VERSION,
            state_type=_KVState,
            state_factory=_new_state,
            log_prefix="trivia.kv",
        )

    async def get(self, key: str) -> bytes | None:
        async with self._lock:
            self._reload_locked_if_needed()
            raw = self._state.entries.get(key)
            if not isinstance(raw, str):
                return None
            return base64.b64decode(raw.encode("ascii"))

    async def set(self, key: str, value: bytes) -> None:
        async with self._lock:
            self._reload_locked_if_needed()
            entries = dict(self._state.entries)
            entries[key] = base64.b64encode(value).decode("ascii")
            self._save_locked(_KVState(version=STATE_VERSION, entries=entries))

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._reload_locked_if_needed()
            if key not in self._state.entries:
                return
            entries = {k: v for k, v in self._state.entries.items() if k != key}
            self._save_locked(_KVState(version=STATE_VERSION, entries=entries))

    async def list_keys(self, prefix: str = "") -> list[str]:
        async with self._lock:
            self._reload_locked_if_needed()
            return [key for key in self._state.entries if key.startswith(prefix)]


@dataclass(frozen=True, slots=True)
class StoredEntry:
    key: str
    name: str
    value: str

    @property
    def names(self) -> list[str]:
        return split_scope_names(self.name)


def split_scope_names(value: str) -> list[str]:
    return [part.strip() for part in value.split(",")]


def matches_scope_name(entry: StoredEntry, target: str) -> bool:
    return any(name == target for name in entry.names)


def _encode_entry(name: str, value: str) -> bytes:
    return json.dumps({"name": name, "value": value}).encode("utf-8")


def _decode_entry(key: str, raw: bytes) -> StoredEntry:
    payload = json.loads(raw.decode("utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("stored entry is not an object")
    name = payload.get("name", "")
    value = payload.get("value")
    if not isinstance(name, str) or not isinstance(value, str):
        raise ValueError("stored entry has non-string fields")
    return StoredEntry(key=key, name=name, value=value)


class ScopedStore:
    """CRUD over one text value per scope, plus scan and preview.

    Writes are unconditional: the last ``set`` on a key wins.
    """

    def __init__(self, backend: KVBackend, *, key_prefix: str = "") -> None:
        self._backend = backend
        self._key_prefix = key_prefix

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    def key_for(self, scope_id: str) -> str:
        return f"{self._key_prefix}{scope_id}"

    async def _call(
        self, operation: str, scope_id: str, call: Callable[[], Awaitable[R]]
    ) -> R:
        try:
            return await call()
        except StoreFailure:
            raise
        except Exception as exc:
            logger.warning(
                "trivia.store.failed",
                operation=operation,
                scope=scope_id,
                error=str(exc),
            )
            raise StoreFailure(operation, scope_id, exc) from exc

    async def get(self, scope_id: str) -> StoredEntry | None:
        key = self.key_for(scope_id)
        raw = await self._call("get", scope_id, lambda: self._backend.get(key))
        if raw is None:
            return None
        try:
            return _decode_entry(key, raw)
        except (UnicodeDecodeError, ValueError) as exc:
            raise StoreFailure("decode", scope_id, exc) from exc

    async def set(self, scope_id: str, value: str, *, name: str = "") -> None:
        key = self.key_for(scope_id)
        payload = _encode_entry(name, value)
        await self._call("set", scope_id, lambda: self._backend.set(key, payload))
        logger.debug("trivia.store.saved", key=key, size=len(payload))

    async def delete(self, scope_id: str) -> None:
        key = self.key_for(scope_id)
        await self._call("delete", scope_id, lambda: self._backend.delete(key))
        logger.debug("trivia.store.deleted", key=key)

    async def scan_all(self) -> list[StoredEntry]:
        """Every entry under the prefix, in backend order."""
        keys = await self._call(
            "scan", "*", lambda: self._backend.list_keys(self._key_prefix)
        )
        entries: list[StoredEntry] = []
        for key in keys:
            scope_id = key[len(self._key_prefix) :]
            raw = await self._call(
                "scan", scope_id, lambda key=key: self._backend.get(key)
            )
            if raw is None:
                continue
            try:
                entries.append(_decode_entry(key, raw))
            except (UnicodeDecodeError, ValueError) as exc:
                raise StoreFailure("decode", scope_id, exc) from exc
        return entries

    async def preview(self, target: str) -> list[StoredEntry]:
        """All entries associated with ``target``; does not stop at the first."""
        entries = await self.scan_all()
        return [entry for entry in entries if matches_scope_name(entry, target)]

    async def list_names(self) -> list[str]:
        """Distinct scope-name associations, first-seen order."""
        return list(dict.fromkeys(entry.name for entry in await self.scan_all()))

    def scope_id_for(self, entry: StoredEntry) -> str:
        return entry.key[len(self._key_prefix) :]
