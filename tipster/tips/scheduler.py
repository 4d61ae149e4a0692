"""Named, cancellable timers on the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Callable

from loguru import logger

from tipster.bus import events
from tipster.core.models import TimerName
from tipster.core.ports import EventBusPort

if TYPE_CHECKING:
    from loguru import Logger


class Scheduler:
    """At most one pending timer per name; rescheduling a name replaces it."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        log: Logger | None = None,
    ) -> None:
        self._loop = loop
        self._log = log or logger.bind(component="scheduler")
        self._timers: dict[TimerName, asyncio.TimerHandle] = {}

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, name: TimerName, delay_ms: float, callback: Callable[[], Any]) -> None:
        self.cancel(name)

        def fire() -> None:
            self._timers.pop(name, None)
            callback()

        delay = max(0.0, float(delay_ms)) / 1000
        self._timers[name] = self._get_loop().call_later(delay, fire)
        self._log.info("timer_scheduled name={} delay_ms={}", name.value, delay_ms)

    def cancel(self, name: TimerName) -> None:
        handle = self._timers.pop(name, None)
        if handle is not None:
            handle.cancel()
            self._log.info("timer_cancelled name={}", name.value)

    def clear_all(self) -> None:
        for name, handle in self._timers.items():
            handle.cancel()
            self._log.info("timer_cancelled name={}", name.value)
        self._timers.clear()

    def has_scheduled(self, name: TimerName) -> bool:
        return name in self._timers

    @property
    def pending(self) -> list[TimerName]:
        return list(self._timers)


class TipScheduler:
    """Binds scheduler timers to tip trigger events."""

    def __init__(
        self,
        scheduler: Scheduler,
        emitter: EventBusPort,
        log: Logger | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._emitter = emitter
        self._log = log or logger.bind(component="tip_scheduler")

    def schedule(
        self,
        name: TimerName,
        delay_ms: float,
        event: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Arm ``name`` to emit ``event`` after ``delay_ms``.

        A None payload emits the event with no argument; an empty dict is
        still delivered as an argument.
        """

        def trigger() -> None:
            self._log.info("tip_trigger event={}", event)
            if payload is None:
                self._emitter.emit(event)
            else:
                self._emitter.emit(event, payload)

        self._scheduler.schedule(name, delay_ms, trigger)

    def schedule_show(self, delay_ms: float, message_type: str | None) -> None:
        self.schedule(
            TimerName.OUTER_SHOW,
            delay_ms,
            events.OUTER_TIP_SCHEDULE_SHOW,
            {"type": message_type},
        )

    def schedule_auto_hide(self, duration_ms: float) -> None:
        self.schedule(TimerName.OUTER_AUTO_HIDE, duration_ms, events.OUTER_TIP_AUTO_HIDE)

    def schedule_follow_up(self, delay_ms: float) -> None:
        self.schedule(TimerName.OUTER_FOLLOW_UP, delay_ms, events.OUTER_TIP_FOLLOW_UP_TRIGGER)

    def schedule_active_return_check(self, delay_ms: float) -> None:
        self.schedule(
            TimerName.OUTER_ACTIVE_RETURN, delay_ms, events.OUTER_TIP_ACTIVE_RETURN_TRIGGER
        )

    def schedule_returning(self, delay_ms: float) -> None:
        self.schedule(TimerName.OUTER_RETURNING, delay_ms, events.OUTER_TIP_RETURNING_TRIGGER)

    def schedule_reconnect(self, delay_ms: float) -> None:
        self.schedule(TimerName.OUTER_RECONNECT, delay_ms, events.OUTER_TIP_RECONNECT_TRIGGER)

    def cancel(self, name: TimerName) -> None:
        self._scheduler.cancel(name)

    def clear_all(self) -> None:
        self._scheduler.clear_all()

    def has_scheduled(self, name: TimerName) -> bool:
        return self._scheduler.has_scheduled(name)
