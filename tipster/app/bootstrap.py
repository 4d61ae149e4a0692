"""Composition root wiring the tipster runtime."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from loguru import logger

from tipster.activity.monitor import UserActivityMonitor
from tipster.bus.emitter import EventEmitter
from tipster.config.defaults import build_storage_keys
from tipster.config.schema import TipsterConfig
from tipster.core.ports import EventBusPort, KeyValueStorePort
from tipster.messages.catalog import MessageCatalog
from tipster.storage.activity import UserActivityStorage
from tipster.storage.keys import StorageKeyRegistry
from tipster.storage.kv import (
    MemoryKeyValueStore,
    SafeKeyValueStore,
    SqliteKeyValueStore,
    as_safe_store,
)
from tipster.storage.tips import TipStorage
from tipster.tips.cooldown import TipCooldown
from tipster.tips.coordinator import OuterTipsCoordinator
from tipster.tips.engine import DecisionEngine, EngineHelpers
from tipster.tips.rules import OUTER_RULES
from tipster.tips.scheduler import Scheduler, TipScheduler
from tipster.utils.helpers import utc_now


@dataclass(slots=True)
class TipsterApp:
    """Lifecycle holder for the composed tip runtime."""

    config: TipsterConfig
    emitter: EventBusPort
    store: SafeKeyValueStore
    keys: StorageKeyRegistry
    tip_storage: TipStorage
    activity_storage: UserActivityStorage
    catalog: MessageCatalog
    cooldown: TipCooldown
    engine: DecisionEngine
    monitor: UserActivityMonitor
    scheduler: Scheduler
    tip_scheduler: TipScheduler
    coordinator: OuterTipsCoordinator

    def start(self) -> None:
        self.coordinator.start()

    def stop(self) -> None:
        self.coordinator.stop()

    def close(self) -> None:
        self.stop()
        inner = self.store.inner
        if isinstance(inner, SqliteKeyValueStore):
            inner.close()


def _make_store(config: TipsterConfig) -> KeyValueStorePort:
    if config.storage.backend == "memory":
        return MemoryKeyValueStore()
    return SqliteKeyValueStore(config.storage.db_file)


def build_tipster(
    config: TipsterConfig | None = None,
    *,
    emitter: EventBusPort | None = None,
    store: KeyValueStorePort | None = None,
    clock: Callable[[], datetime] | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> TipsterApp:
    """Compose storage, catalog, engine and timers around one event bus."""
    config = config or TipsterConfig()
    clock = clock or utc_now
    emitter = emitter if emitter is not None else EventEmitter()

    safe_store = as_safe_store(store if store is not None else _make_store(config))
    keys = StorageKeyRegistry(build_storage_keys(config.storage.key_prefix))
    catalog = MessageCatalog(config.message_overrides())

    tip_storage = TipStorage(keys, safe_store, clock=clock)
    activity_storage = UserActivityStorage(keys, safe_store, clock=clock)
    cooldown = TipCooldown(catalog, tip_storage, clock=clock)
    engine = DecisionEngine(
        catalog,
        OUTER_RULES,
        EngineHelpers(storage=tip_storage, cooldown=cooldown),
    )
    monitor = UserActivityMonitor(emitter, activity_storage, config=config.activity, clock=clock)
    scheduler = Scheduler(loop=loop)
    tip_scheduler = TipScheduler(scheduler, emitter)
    coordinator = OuterTipsCoordinator(
        engine=engine,
        catalog=catalog,
        monitor=monitor,
        scheduler=tip_scheduler,
        emitter=emitter,
    )

    logger.info(
        "tipster_built backend={} prefix={} rules={}",
        config.storage.backend if store is None else type(store).__name__,
        config.storage.key_prefix,
        [rule.name for rule in engine.rules],
    )
    return TipsterApp(
        config=config,
        emitter=emitter,
        store=safe_store,
        keys=keys,
        tip_storage=tip_storage,
        activity_storage=activity_storage,
        catalog=catalog,
        cooldown=cooldown,
        engine=engine,
        monitor=monitor,
        scheduler=scheduler,
        tip_scheduler=tip_scheduler,
        coordinator=coordinator,
    )
