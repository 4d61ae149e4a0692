"""Port interfaces for the tipster core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

from tipster.core.models import TipContext, UserState

if TYPE_CHECKING:
    from tipster.tips.engine import DecisionEngine


class KeyValueStorePort(Protocol):
    """Raw persistent key/value store. Every call may raise."""

    def get(self, key: str) -> str | None:
        """Return stored value or None."""

    def set(self, key: str, value: str) -> None:
        """Store one value."""

    def remove(self, key: str) -> None:
        """Delete one key; missing keys are ignored."""


class EventBusPort(Protocol):
    """Synchronous publish/subscribe facility."""

    def on(self, event: str, handler: Callable[..., Any]) -> Any:
        """Subscribe handler to event."""

    def off(self, event: str, handler: Callable[..., Any] | None = None) -> Any:
        """Unsubscribe handler, or every handler when omitted."""

    def emit(self, event: str, *args: Any) -> Any:
        """Deliver event to current subscribers."""


@runtime_checkable
class TipRule(Protocol):
    """One prioritised predicate plugged into the decision engine."""

    @property
    def name(self) -> str:
        """Stable rule identifier used in logs."""

    def matches(self, state: UserState, engine: DecisionEngine, context: TipContext) -> str | None:
        """Return the tip type to show, or None for no opinion."""
