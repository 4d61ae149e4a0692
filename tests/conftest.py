from datetime import UTC, datetime, timedelta

import pytest
from loguru import logger

from tipster.storage.keys import StorageKeyRegistry
from tipster.storage.kv import MemoryKeyValueStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class FailingStore:
    """Store whose every operation raises, as a full or denied disk would."""

    def get(self, key: str) -> str | None:
        raise OSError("store unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("store unavailable")

    def remove(self, key: str) -> None:
        raise OSError("store unavailable")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def keys() -> StorageKeyRegistry:
    return StorageKeyRegistry()


@pytest.fixture
def log_messages():
    """Collect WARNING+ loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
