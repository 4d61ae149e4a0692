"""Session activity tracking driven by event-bus signals."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from loguru import logger

from tipster.bus import events
from tipster.config.schema import ActivityConfig
from tipster.core.models import UserState
from tipster.core.ports import EventBusPort
from tipster.storage.activity import UserActivityStorage
from tipster.utils.helpers import to_epoch_ms, utc_now

if TYPE_CHECKING:
    from loguru import Logger

_MS_PER_MINUTE = 60 * 1000
_MS_PER_DAY = 24 * 60 * _MS_PER_MINUTE


class UserActivityMonitor:
    """
    Records chat activity and announces page returns.

    Listens for chat open/close and message-sent signals and persists them via
    :class:`UserActivityStorage`. Page visibility and focus signals are turned
    into a single ``page return`` event; that event is not persisted.
    """

    def __init__(
        self,
        emitter: EventBusPort,
        storage: UserActivityStorage,
        config: ActivityConfig | None = None,
        log: Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._emitter = emitter
        self._storage = storage
        self._config = config or ActivityConfig()
        self._log = log or logger.bind(component="activity_monitor")
        self._clock = clock
        self._subscriptions: list[tuple[str, Callable[..., Any]]] = []
        self.is_active = False

    def start(self) -> None:
        if self.is_active:
            return
        self.is_active = True
        self._subscribe(events.CHAT_OPEN, self._on_chat_open)
        self._subscribe(events.CHAT_CLOSE, self._on_chat_close)
        self._subscribe(events.MESSAGE_SENT, self._on_message_sent)
        self._subscribe(events.PAGE_VISIBILITY, self._on_visibility)
        self._subscribe(events.PAGE_FOCUS, self._on_focus)
        self._log.info("activity_monitor_started")

    def stop(self) -> None:
        if not self.is_active:
            return
        self.is_active = False
        for event, handler in self._subscriptions:
            self._emitter.off(event, handler)
        self._subscriptions.clear()
        self._log.info("activity_monitor_stopped")

    def destroy(self) -> None:
        self.stop()

    def _subscribe(self, event: str, handler: Callable[..., Any]) -> None:
        self._emitter.on(event, handler)
        self._subscriptions.append((event, handler))

    def _on_chat_open(self, *_: Any) -> None:
        self.mark_chat_open()

    def _on_chat_close(self, *_: Any) -> None:
        self.mark_chat_close()

    def _on_message_sent(self, *_: Any) -> None:
        self.mark_message_sent()

    def _on_visibility(self, payload: dict[str, Any] | None = None, *_: Any) -> None:
        if payload and payload.get("visible"):
            self._emitter.emit(events.PAGE_RETURN)

    def _on_focus(self, *_: Any) -> None:
        self._emitter.emit(events.PAGE_RETURN)

    def mark_chat_open(self) -> None:
        try:
            self._storage.mark_chat_open()
            self._log.info("chat_opened")
        except Exception as e:
            self._log.warning("activity_write_failed action=chat_open error={}", e)

    def mark_chat_close(self) -> None:
        try:
            self._storage.mark_chat_close()
            self._log.info("chat_closed")
        except Exception as e:
            self._log.warning("activity_write_failed action=chat_close error={}", e)

    def mark_message_sent(self) -> None:
        try:
            self._storage.mark_message_sent()
            self._storage.mark_last_message_sent()
            self._log.info("message_sent")
        except Exception as e:
            self._log.warning("activity_write_failed action=message_sent error={}", e)

    def get_last_chat_open_time(self) -> int | None:
        return self._storage.get_last_chat_open_time()

    def get_last_message_sent_time(self) -> int | None:
        return self._storage.get_last_message_sent_time()

    def has_sent_message(self) -> bool:
        return self._storage.has_sent_message()

    def current_state(self) -> UserState:
        """Build the engine input from persisted activity.

        The returning window is measured from the last chat open; reconnect
        eligibility from the last message sent.
        """
        now_ms = to_epoch_ms(self._clock())
        last_open = self.get_last_chat_open_time()
        last_sent = self.get_last_message_sent_time()
        has_sent = self.has_sent_message()

        since_open = None if last_open is None else now_ms - last_open
        recently_returned = since_open is not None and (
            self._config.returning_min_minutes * _MS_PER_MINUTE
            <= since_open
            <= self._config.returning_max_minutes * _MS_PER_MINUTE
        )

        since_sent = None if last_sent is None else now_ms - last_sent
        eligible_for_reconnect = (
            has_sent
            and since_sent is not None
            and self._config.returning_max_minutes * _MS_PER_MINUTE
            < since_sent
            <= self._config.reconnect_max_days * _MS_PER_DAY
        )

        return UserState(
            last_chat_open_time=last_open,
            has_sent_message=has_sent,
            is_recently_returned=recently_returned,
            is_eligible_for_reconnect=eligible_for_reconnect,
        )
