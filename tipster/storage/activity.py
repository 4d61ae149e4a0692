"""Persisted chat activity facts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Callable

from loguru import logger

from tipster.core.models import ActivityRecord
from tipster.core.ports import KeyValueStorePort
from tipster.storage.keys import StorageKeyRegistry
from tipster.storage.kv import SafeKeyValueStore, as_safe_store
from tipster.utils.helpers import to_epoch_ms, utc_now

if TYPE_CHECKING:
    from loguru import Logger

SECTION = "CHAT"
ACTIVITY_KEYS = ("CHAT_OPEN", "CHAT_CLOSE", "MESSAGE_SENT", "LAST_MESSAGE_SENT")


class UserActivityStorage:
    """Reads and writes chat-open/close and message-sent facts."""

    def __init__(
        self,
        keys: StorageKeyRegistry,
        store: KeyValueStorePort | SafeKeyValueStore,
        log: Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._keys = keys
        self._log = log or logger.bind(component="activity_storage")
        self._store = as_safe_store(store, log=self._log)
        self._clock = clock

    def mark_chat_open(self) -> bool:
        return self._write_now("CHAT_OPEN")

    def mark_chat_close(self) -> bool:
        return self._write_now("CHAT_CLOSE")

    def mark_message_sent(self) -> bool:
        key = self._key("MESSAGE_SENT")
        return key is not None and self._store.set(key, "true")

    def mark_last_message_sent(self) -> bool:
        return self._write_now("LAST_MESSAGE_SENT")

    def get_last_chat_open_time(self) -> int | None:
        return self._read_ms("CHAT_OPEN")

    def get_last_chat_close_time(self) -> int | None:
        return self._read_ms("CHAT_CLOSE")

    def get_last_message_sent_time(self) -> int | None:
        return self._read_ms("LAST_MESSAGE_SENT")

    def has_sent_message(self) -> bool:
        key = self._key("MESSAGE_SENT")
        return key is not None and self._store.get(key) == "true"

    def get_record(self) -> ActivityRecord:
        return ActivityRecord(
            last_chat_open_time=self.get_last_chat_open_time(),
            last_chat_close_time=self.get_last_chat_close_time(),
            has_sent_message=self.has_sent_message(),
            last_message_sent_time=self.get_last_message_sent_time(),
        )

    def clear(self) -> None:
        for name in ACTIVITY_KEYS:
            key = self._key(name)
            if key is not None:
                self._store.remove(key)

    def _key(self, name: str) -> str | None:
        key = self._keys.get(SECTION, name)
        if key is None:
            self._log.warning("activity_storage_unresolved_key section={} name={}", SECTION, name)
        return key

    def _write_now(self, name: str) -> bool:
        key = self._key(name)
        if key is None:
            return False
        return self._store.set(key, str(to_epoch_ms(self._clock())))

    def _read_ms(self, name: str) -> int | None:
        key = self._key(name)
        if key is None:
            return None
        raw = self._store.get(key)
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            self._log.warning("activity_storage_bad_value key={} value={!r}", key, raw)
            return None
