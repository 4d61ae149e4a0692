"""Persisted "shown" records per (type, category)."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Callable

from loguru import logger

from tipster.core.models import ShownRecord
from tipster.core.ports import KeyValueStorePort
from tipster.storage.keys import StorageKeyRegistry
from tipster.storage.kv import SafeKeyValueStore, as_safe_store
from tipster.utils.helpers import to_epoch_ms, utc_now

if TYPE_CHECKING:
    from loguru import Logger

RECORD_VERSION = 1

# category -> type -> (registry section, registry name)
TIP_STORAGE_MAP: dict[str, dict[str, tuple[str, str]]] = {
    "out": {
        "welcome": ("OUTER_TIP", "WELCOME_SHOWN"),
        "followup": ("OUTER_TIP", "FOLLOWUP_SHOWN"),
        "returning": ("OUTER_TIP", "RETURNING_SHOWN"),
        "active_return": ("OUTER_TIP", "ACTIVE_RETURN_SHOWN"),
        "reconnect": ("OUTER_TIP", "RECONNECT_SHOWN"),
    },
    "in": {
        "greeting": ("INNER_TIP", "GREETING_SHOWN"),
        "followup": ("INNER_TIP", "FOLLOWUP_SHOWN"),
        "error": ("INNER_TIP", "ERROR_SHOWN"),
        "fallback": ("INNER_TIP", "FALLBACK_SHOWN"),
    },
}


def parse_timestamp_ms(value: str) -> int | None:
    """Parse an ISO-8601 timestamp into epoch ms; naive values are UTC."""
    try:
        moment = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return to_epoch_ms(moment)


class TipStorage:
    """Stores at most one ShownRecord per (type, category).

    Storage faults and unknown keys are logged and reported as absence.
    """

    def __init__(
        self,
        keys: StorageKeyRegistry,
        store: KeyValueStorePort | SafeKeyValueStore,
        log: Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._keys = keys
        self._log = log or logger.bind(component="tip_storage")
        self._store = as_safe_store(store, log=self._log)
        self._clock = clock

    def key_for(self, type: str, category: str = "out") -> str | None:
        """Resolve the storage key for one tip type, warning when unknown."""
        category_map = TIP_STORAGE_MAP.get(category)
        if category_map is None:
            self._log.warning("tip_storage_unknown_category category={}", category)
            return None
        pair = category_map.get(type)
        if pair is None:
            self._log.warning("tip_storage_unknown_type type={} category={}", type, category)
            return None
        key = self._keys.get(*pair)
        if key is None:
            self._log.warning("tip_storage_unresolved_key section={} name={}", *pair)
        return key

    def mark_as_shown(self, type: str, category: str = "out") -> bool:
        key = self.key_for(type, category)
        if key is None:
            return False
        record = ShownRecord(
            type=type,
            category=category,
            timestamp=self._clock().isoformat(),
            version=RECORD_VERSION,
        )
        return self._store.set(key, json.dumps(record.to_dict()))

    def get_record(self, type: str, category: str = "out") -> ShownRecord | None:
        key = self.key_for(type, category)
        if key is None:
            return None
        return self._read_record(key)

    def was_shown(self, type: str, category: str = "out") -> bool:
        return self.get_record(type, category) is not None

    def get_last_shown_time(self, type: str, category: str = "out") -> int | None:
        """Return epoch ms of the last show, or None if absent or unparsable."""
        record = self.get_record(type, category)
        if record is None:
            return None
        parsed = parse_timestamp_ms(record.timestamp)
        if parsed is None:
            self._log.warning(
                "tip_storage_bad_timestamp type={} category={} value={!r}",
                type,
                category,
                record.timestamp,
            )
        return parsed

    def clear(self, type: str, category: str = "out") -> None:
        key = self.key_for(type, category)
        if key is not None:
            self._store.remove(key)

    def get_all(self, category: str = "out") -> dict[str, ShownRecord]:
        result: dict[str, ShownRecord] = {}
        for type in TIP_STORAGE_MAP.get(category, {}):
            record = self.get_record(type, category)
            if record is not None:
                result[type] = record
        return result

    def has_any_been_shown(self, category: str = "out") -> bool:
        return bool(self.get_all(category))

    def clear_all(self, category: str = "out") -> None:
        for type in TIP_STORAGE_MAP.get(category, {}):
            self.clear(type, category)

    def _read_record(self, key: str) -> ShownRecord | None:
        raw = self._store.get(key)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return ShownRecord.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            self._log.warning("tip_storage_corrupt_record key={} error={}", key, e)
            return None
