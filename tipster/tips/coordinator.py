"""Outer-tip flow: decide, announce, mark shown, re-arm follow-on timers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from loguru import logger

from tipster.activity.monitor import UserActivityMonitor
from tipster.bus import events
from tipster.core.models import TimerName, TipContext
from tipster.core.ports import EventBusPort
from tipster.messages.catalog import MessageCatalog
from tipster.tips.engine import DecisionEngine
from tipster.tips.scheduler import TipScheduler

if TYPE_CHECKING:
    from loguru import Logger

CATEGORY = "out"


class OuterTipsCoordinator:
    """
    Drives outer tips without rendering them.

    The presentation layer listens for ``OUTER_TIP_SHOW`` / ``OUTER_TIP_HIDE``;
    everything else (state, decisions, timers) happens here.
    """

    def __init__(
        self,
        *,
        engine: DecisionEngine,
        catalog: MessageCatalog,
        monitor: UserActivityMonitor,
        scheduler: TipScheduler,
        emitter: EventBusPort,
        log: Logger | None = None,
    ) -> None:
        self._engine = engine
        self._catalog = catalog
        self._monitor = monitor
        self._scheduler = scheduler
        self._emitter = emitter
        self._log = log or logger.bind(component="outer_tips")
        self._subscriptions: list[tuple[str, Callable[..., Any]]] = []
        self.started = False
        self.current_type: str | None = None
        self.chat_open = False

    @property
    def is_shown(self) -> bool:
        return self.current_type is not None

    def start(self) -> None:
        if self.started:
            return
        self.started = True
        # Monitor subscribes first so activity is persisted before we react to it.
        self._monitor.start()
        self._subscribe(events.OUTER_TIP_SCHEDULE_SHOW, self._on_show_trigger)
        self._subscribe(events.OUTER_TIP_FOLLOW_UP_TRIGGER, self._on_generic_trigger)
        self._subscribe(events.OUTER_TIP_RETURNING_TRIGGER, self._on_returning_trigger)
        self._subscribe(events.OUTER_TIP_RECONNECT_TRIGGER, self._on_generic_trigger)
        self._subscribe(events.OUTER_TIP_ACTIVE_RETURN_TRIGGER, self._on_active_return_trigger)
        self._subscribe(events.OUTER_TIP_AUTO_HIDE, self._on_auto_hide)
        self._subscribe(events.PAGE_RETURN, self._on_page_return)
        self._subscribe(events.CHAT_OPEN, self._on_chat_open)
        self._subscribe(events.CHAT_CLOSE, self._on_chat_close)
        self._subscribe(events.MESSAGE_SENT, self._on_user_engaged)

        if self._monitor.current_state().is_eligible_for_reconnect:
            self._scheduler.schedule_reconnect(self._catalog.get_delay(CATEGORY, "reconnect"))
        else:
            self._scheduler.schedule_show(self._catalog.get_delay(CATEGORY, "welcome"), None)
        self._log.info("outer_tips_started")

    def stop(self) -> None:
        if not self.started:
            return
        self.started = False
        for event, handler in self._subscriptions:
            self._emitter.off(event, handler)
        self._subscriptions.clear()
        self._scheduler.clear_all()
        self._monitor.stop()
        self.current_type = None
        self.chat_open = False
        self._log.info("outer_tips_stopped")

    def decide_and_show(self, context: TipContext = TipContext.UNSPECIFIED) -> str | None:
        """Run the engine against current activity and show the winner, if any."""
        if self.is_shown:
            return None
        message_type = self._engine.determine(self._monitor.current_state(), context)
        self._log.info("outer_tip_decision type={} context={}", message_type, context.value)
        if message_type:
            self._show(message_type)
        return message_type

    def show_by_type(self, message_type: str) -> bool:
        """Show a specific type if it exists and its cooldown allows it."""
        if self.is_shown:
            return False
        if not self._engine.has(message_type, CATEGORY):
            return False
        if not self._engine.helpers.cooldown.can_show(message_type, CATEGORY):
            return False
        self._show(message_type)
        return True

    def hide(self) -> None:
        if not self.is_shown:
            return
        hidden = self.current_type
        self.current_type = None
        self._scheduler.cancel(TimerName.OUTER_AUTO_HIDE)
        self._emitter.emit(events.OUTER_TIP_HIDE, {"type": hidden})

    def _show(self, message_type: str) -> None:
        self.current_type = message_type
        self._emitter.emit(
            events.OUTER_TIP_SHOW,
            {"type": message_type, "text": self._catalog.get_text(CATEGORY, message_type)},
        )
        self._engine.helpers.storage.mark_as_shown(message_type, CATEGORY)

        duration = self._catalog.get_duration(CATEGORY, message_type)
        if isinstance(duration, (int, float)) and duration > 0:
            self._scheduler.schedule_auto_hide(duration)

        if message_type == "welcome":
            self._scheduler.schedule_follow_up(self._catalog.get_delay(CATEGORY, "followup"))

    def _subscribe(self, event: str, handler: Callable[..., Any]) -> None:
        self._emitter.on(event, handler)
        self._subscriptions.append((event, handler))

    def _on_show_trigger(self, payload: dict[str, Any] | None = None) -> None:
        requested = (payload or {}).get("type")
        if requested:
            self.show_by_type(requested)
        else:
            self.decide_and_show(TipContext.UNSPECIFIED)

    def _on_generic_trigger(self, *_: Any) -> None:
        self.decide_and_show(TipContext.UNSPECIFIED)

    def _on_active_return_trigger(self, *_: Any) -> None:
        if self.chat_open:
            return
        self.decide_and_show(TipContext.RETURN)

    def _on_returning_trigger(self, *_: Any) -> None:
        if self._monitor.has_sent_message() or self.is_shown:
            return
        self.show_by_type("returning")

    def _on_auto_hide(self, *_: Any) -> None:
        self.hide()

    def _on_page_return(self, *_: Any) -> None:
        # Only visitors who wrote before, and only while the chat is closed.
        if self.chat_open or not self._monitor.has_sent_message():
            return
        self._scheduler.schedule_active_return_check(
            self._catalog.get_delay(CATEGORY, "active_return")
        )

    def _on_chat_open(self, *_: Any) -> None:
        self.chat_open = True
        self._on_user_engaged()

    def _on_chat_close(self, *_: Any) -> None:
        self.chat_open = False
        if self._monitor.has_sent_message() or self.is_shown:
            return
        self._scheduler.schedule_returning(self._catalog.get_delay(CATEGORY, "returning"))

    def _on_user_engaged(self, *_: Any) -> None:
        self._scheduler.cancel(TimerName.OUTER_SHOW)
        self._scheduler.cancel(TimerName.OUTER_FOLLOW_UP)
        self._scheduler.cancel(TimerName.OUTER_RETURNING)
        self._scheduler.cancel(TimerName.OUTER_RECONNECT)
        self.hide()
