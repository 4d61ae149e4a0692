"""Synchronous in-process event emitter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

Handler = Callable[..., Any]


class EventEmitter:
    """
    Publish/subscribe hub that decouples environment signals from the tip core.

    Handlers run synchronously in subscription order. A handler that raises is
    logged and skipped; remaining handlers still run.
    """

    def __init__(self, log: Logger | None = None) -> None:
        self._handlers: dict[str, list[Handler]] = {}
        self._log = log or logger.bind(component="event_emitter")

    def on(self, event: str, handler: Handler) -> EventEmitter:
        """Subscribe ``handler`` to ``event``."""
        self._handlers.setdefault(event, []).append(handler)
        return self

    def once(self, event: str, handler: Handler) -> EventEmitter:
        """Subscribe ``handler`` for a single delivery."""

        def wrapper(*args: Any) -> None:
            self.off(event, wrapper)
            handler(*args)

        return self.on(event, wrapper)

    def off(self, event: str, handler: Handler | None = None) -> EventEmitter:
        """Unsubscribe ``handler``, or every handler of ``event`` when omitted."""
        if event not in self._handlers:
            return self
        if handler is None:
            del self._handlers[event]
        else:
            self._handlers[event] = [h for h in self._handlers[event] if h != handler]
        return self

    def emit(self, event: str, *args: Any) -> EventEmitter:
        """Deliver ``event`` to a snapshot of current subscribers."""
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(*args)
            except Exception as e:
                self._log.error("event_handler_failed event={} error={}", event, e)
        return self

    def has_listeners(self, event: str) -> bool:
        return bool(self._handlers.get(event))
