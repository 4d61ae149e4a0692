"""Reference rule set for outer tips.

Each rule is a frozen, stateless object; ``matches`` depends only on its
arguments, so evaluation is deterministic and replayable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tipster.core.models import TipContext, UserState

if TYPE_CHECKING:
    from tipster.tips.engine import DecisionEngine


def _fresh_and_allowed(engine: DecisionEngine, type: str, category: str) -> bool:
    """Exists, never shown and out of cooldown."""
    storage = engine.helpers.storage
    cooldown = engine.helpers.cooldown
    if not engine.has(type, category):
        return False
    if storage.was_shown(type, category):
        return False
    return cooldown.can_show(type, category)


@dataclass(frozen=True, slots=True)
class WelcomeRule:
    """First visit: chat never opened, nothing sent."""

    name: str = "welcome"
    category: str = "out"

    def matches(self, state: UserState, engine: DecisionEngine, context: TipContext) -> str | None:
        if not _fresh_and_allowed(engine, self.name, self.category):
            return None
        if state.last_chat_open_time is not None:
            return None
        if state.has_sent_message:
            return None
        return self.name


@dataclass(frozen=True, slots=True)
class FollowupRule:
    """Visitor ignored the welcome tip."""

    name: str = "followup"
    category: str = "out"

    def matches(self, state: UserState, engine: DecisionEngine, context: TipContext) -> str | None:
        if not _fresh_and_allowed(engine, self.name, self.category):
            return None
        # Welcome must come first.
        if not engine.helpers.storage.was_shown("welcome", self.category):
            return None
        if state.last_chat_open_time is not None:
            return None
        if state.has_sent_message:
            return None
        return self.name


@dataclass(frozen=True, slots=True)
class ReturningRule:
    """Opened the chat without writing and came back within the returning window."""

    name: str = "returning"
    category: str = "out"

    def matches(self, state: UserState, engine: DecisionEngine, context: TipContext) -> str | None:
        storage = engine.helpers.storage
        if not engine.has(self.name, self.category):
            return None
        if not engine.helpers.cooldown.can_show(self.name, self.category):
            return None
        if state.last_chat_open_time is None or state.has_sent_message:
            return None
        if not state.is_recently_returned:
            return None
        if not storage.was_shown("welcome", self.category):
            return None
        if engine.has("followup", self.category) and not storage.was_shown("followup", self.category):
            return None
        return self.name


@dataclass(frozen=True, slots=True)
class ReconnectRule:
    """Wrote before and came back after a longer absence."""

    name: str = "reconnect"
    category: str = "out"

    def matches(self, state: UserState, engine: DecisionEngine, context: TipContext) -> str | None:
        if not _fresh_and_allowed(engine, self.name, self.category):
            return None
        if not state.is_eligible_for_reconnect:
            return None
        return self.name


@dataclass(frozen=True, slots=True)
class ActiveReturnRule:
    """Visitor who already wrote returned to the page."""

    name: str = "active_return"
    category: str = "out"

    def matches(self, state: UserState, engine: DecisionEngine, context: TipContext) -> str | None:
        if context is not TipContext.RETURN:
            return None
        if not state.has_sent_message:
            return None
        if not _fresh_and_allowed(engine, self.name, self.category):
            return None
        return self.name


WELCOME = WelcomeRule()
FOLLOWUP = FollowupRule()
RETURNING = ReturningRule()
RECONNECT = ReconnectRule()
ACTIVE_RETURN = ActiveReturnRule()

# Order is priority.
OUTER_RULES = (WELCOME, FOLLOWUP, RETURNING, RECONNECT, ACTIVE_RETURN)
INNER_RULES: tuple = ()
ALL_RULES = OUTER_RULES + INNER_RULES
