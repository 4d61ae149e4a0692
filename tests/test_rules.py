from dataclasses import FrozenInstanceError

import pytest

from tipster.core.models import TipContext, UserState
from tipster.messages.catalog import MessageCatalog
from tipster.storage.tips import TipStorage
from tipster.tips.cooldown import TipCooldown
from tipster.tips.engine import DecisionEngine, EngineHelpers
from tipster.tips.rules import (
    ACTIVE_RETURN,
    FOLLOWUP,
    OUTER_RULES,
    RECONNECT,
    RETURNING,
    WELCOME,
)

NEW_VISITOR = UserState()
WROTE_BEFORE = UserState(last_chat_open_time=1, has_sent_message=True)


def _engine(keys, store, clock, overrides=None) -> DecisionEngine:
    catalog = MessageCatalog(overrides)
    storage = TipStorage(keys, store, clock=clock)
    cooldown = TipCooldown(catalog, storage, clock=clock)
    return DecisionEngine(catalog, OUTER_RULES, EngineHelpers(storage=storage, cooldown=cooldown))


def test_rule_order_is_priority() -> None:
    assert [r.name for r in OUTER_RULES] == ["welcome", "followup", "returning", "reconnect", "active_return"]


def test_welcome_for_new_visitor(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    assert WELCOME.matches(NEW_VISITOR, engine, TipContext.UNSPECIFIED) == "welcome"


def test_welcome_not_after_chat_opened_or_message_sent(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    assert WELCOME.matches(UserState(last_chat_open_time=1), engine, TipContext.UNSPECIFIED) is None
    assert WELCOME.matches(UserState(has_sent_message=True), engine, TipContext.UNSPECIFIED) is None


def test_welcome_only_once(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    engine.helpers.storage.mark_as_shown("welcome")
    clock.advance(days=30)
    assert WELCOME.matches(NEW_VISITOR, engine, TipContext.UNSPECIFIED) is None


def test_welcome_disabled(keys, store, clock) -> None:
    engine = _engine(keys, store, clock, {"out": {"welcome": {"disable": True}}})
    assert WELCOME.matches(NEW_VISITOR, engine, TipContext.UNSPECIFIED) is None


def test_followup_requires_welcome_first(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    assert FOLLOWUP.matches(NEW_VISITOR, engine, TipContext.UNSPECIFIED) is None
    engine.helpers.storage.mark_as_shown("welcome")
    clock.advance(hours=1)
    assert FOLLOWUP.matches(NEW_VISITOR, engine, TipContext.UNSPECIFIED) == "followup"


def test_followup_not_once_shown(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    engine.helpers.storage.mark_as_shown("welcome")
    engine.helpers.storage.mark_as_shown("followup")
    clock.advance(days=2)
    assert FOLLOWUP.matches(NEW_VISITOR, engine, TipContext.UNSPECIFIED) is None


def test_returning_within_window_after_welcome_and_followup(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    state = UserState(last_chat_open_time=1, is_recently_returned=True)
    assert RETURNING.matches(state, engine, TipContext.UNSPECIFIED) is None

    engine.helpers.storage.mark_as_shown("welcome")
    engine.helpers.storage.mark_as_shown("followup")
    assert RETURNING.matches(state, engine, TipContext.UNSPECIFIED) == "returning"
    assert RETURNING.matches(UserState(last_chat_open_time=1), engine, TipContext.UNSPECIFIED) is None


def test_returning_respects_cooldown(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    storage = engine.helpers.storage
    storage.mark_as_shown("welcome")
    storage.mark_as_shown("followup")
    storage.mark_as_shown("returning")
    state = UserState(last_chat_open_time=1, is_recently_returned=True)

    clock.advance(hours=5)
    assert RETURNING.matches(state, engine, TipContext.UNSPECIFIED) is None
    clock.advance(hours=1)
    assert RETURNING.matches(state, engine, TipContext.UNSPECIFIED) == "returning"


def test_reconnect_needs_eligibility(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    assert RECONNECT.matches(WROTE_BEFORE, engine, TipContext.UNSPECIFIED) is None
    eligible = UserState(last_chat_open_time=1, has_sent_message=True, is_eligible_for_reconnect=True)
    assert RECONNECT.matches(eligible, engine, TipContext.UNSPECIFIED) == "reconnect"


def test_active_return_only_in_return_context(keys, store, clock) -> None:
    engine = _engine(keys, store, clock)
    assert ACTIVE_RETURN.matches(WROTE_BEFORE, engine, TipContext.RETURN) == "active_return"
    assert ACTIVE_RETURN.matches(WROTE_BEFORE, engine, TipContext.OUTER) is None
    assert ACTIVE_RETURN.matches(WROTE_BEFORE, engine, TipContext.UNSPECIFIED) is None
    assert ACTIVE_RETURN.matches(NEW_VISITOR, engine, TipContext.RETURN) is None


def test_rules_are_immutable() -> None:
    with pytest.raises(FrozenInstanceError):
        WELCOME.name = "other"  # type: ignore[misc]
