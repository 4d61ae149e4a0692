"""Persistence: key/value backends, key registry and tip/activity storages."""

from tipster.storage.activity import UserActivityStorage
from tipster.storage.keys import StorageKeyRegistry
from tipster.storage.kv import MemoryKeyValueStore, SafeKeyValueStore, SqliteKeyValueStore
from tipster.storage.tips import TIP_STORAGE_MAP, TipStorage

__all__ = [
    "MemoryKeyValueStore",
    "SafeKeyValueStore",
    "SqliteKeyValueStore",
    "StorageKeyRegistry",
    "TIP_STORAGE_MAP",
    "TipStorage",
    "UserActivityStorage",
]
