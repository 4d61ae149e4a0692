"""Key/value persistence backends and the fault-containing adapter."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from tipster.core.ports import KeyValueStorePort
from tipster.utils.helpers import ensure_dir

if TYPE_CHECKING:
    from loguru import Logger


class MemoryKeyValueStore:
    """Dict-backed store scoped to the current process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class SqliteKeyValueStore:
    """SQLite-backed store that survives process restarts."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        ensure_dir(self.db_path.parent)

        self._lock = threading.RLock()
        self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA synchronous=NORMAL")
        self._create_schema()

    def _create_schema(self) -> None:
        with self._lock:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            self._conn.commit()

    def get(self, key: str) -> str | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM kv WHERE key = ? LIMIT 1",
                (str(key),),
            ).fetchone()
        return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (str(key), str(value)),
            )
            self._conn.commit()

    def remove(self, key: str) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM kv WHERE key = ?", (str(key),))
            self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class SafeKeyValueStore:
    """Wraps a raw store so that backend faults never reach callers.

    ``get`` yields None and ``set``/``remove`` yield False on failure; every
    failure is logged as a warning.
    """

    def __init__(self, store: KeyValueStorePort, log: Logger | None = None) -> None:
        self._store = store
        self._log = log or logger.bind(component="kv_store")

    @property
    def inner(self) -> KeyValueStorePort:
        return self._store

    def get(self, key: str) -> str | None:
        try:
            return self._store.get(key)
        except Exception as e:
            self._log.warning("kv_read_failed key={} error={}", key, e)
            return None

    def set(self, key: str, value: str) -> bool:
        try:
            self._store.set(key, value)
            return True
        except Exception as e:
            self._log.warning("kv_write_failed key={} error={}", key, e)
            return False

    def remove(self, key: str) -> bool:
        try:
            self._store.remove(key)
            return True
        except Exception as e:
            self._log.warning("kv_remove_failed key={} error={}", key, e)
            return False


def as_safe_store(store: KeyValueStorePort | SafeKeyValueStore, log: Logger | None = None) -> SafeKeyValueStore:
    """Return ``store`` wrapped in :class:`SafeKeyValueStore` unless it already is."""
    if isinstance(store, SafeKeyValueStore):
        return store
    return SafeKeyValueStore(store, log=log)
