import json

from tipster.messages.catalog import MessageCatalog
from tipster.storage.tips import TipStorage
from tipster.tips.cooldown import TipCooldown


def _cooldown(keys, store, clock, overrides=None) -> tuple[TipCooldown, TipStorage]:
    storage = TipStorage(keys, store, clock=clock)
    return TipCooldown(MessageCatalog(overrides), storage, clock=clock), storage


def test_never_shown_can_show(keys, store, clock) -> None:
    cooldown, _ = _cooldown(keys, store, clock)
    assert cooldown.can_show("welcome", "out")


def test_cooldown_hours_window(keys, store, clock) -> None:
    cooldown, storage = _cooldown(keys, store, clock, {"out": {"welcome": {"cooldown_hours": 3}}})
    storage.mark_as_shown("welcome", "out")

    clock.advance(hours=2, minutes=59)
    assert not cooldown.can_show("welcome", "out")
    clock.advance(minutes=1)
    assert cooldown.can_show("welcome", "out")


def test_default_cooldown_is_24_hours(keys, store, clock) -> None:
    cooldown, storage = _cooldown(keys, store, clock)
    assert cooldown.get_cooldown_hours("welcome") == 24
    storage.mark_as_shown("welcome")
    clock.advance(hours=23)
    assert not cooldown.can_show("welcome")
    clock.advance(hours=1)
    assert cooldown.can_show("welcome")


def test_zero_cooldown_means_once_ever(keys, store, clock) -> None:
    cooldown, storage = _cooldown(keys, store, clock, {"out": {"welcome": {"cooldown_hours": 0}}})
    assert cooldown.can_show("welcome")
    storage.mark_as_shown("welcome")
    clock.advance(days=365)
    assert not cooldown.can_show("welcome")


def test_corrupt_record_allows_show(keys, store, clock) -> None:
    cooldown, _ = _cooldown(keys, store, clock)
    store.set("tipster:ui:outer-tip:welcome-shown", "garbage")
    assert cooldown.can_show("welcome")

    store.set(
        "tipster:ui:outer-tip:welcome-shown",
        json.dumps({"type": "welcome", "category": "out", "timestamp": "not-a-date"}),
    )
    assert cooldown.can_show("welcome")


def test_bad_cooldown_value_falls_back(keys, store, clock, log_messages) -> None:
    cooldown, _ = _cooldown(keys, store, clock, {"out": {"welcome": {"cooldown_hours": "soon"}}})
    assert cooldown.get_cooldown_hours("welcome") == 24
    assert any("cooldown_bad_value" in m for m in log_messages)


def test_has_seen_recently(keys, store, clock) -> None:
    cooldown, storage = _cooldown(keys, store, clock)
    assert not cooldown.has_seen_recently("followup")
    storage.mark_as_shown("followup")
    clock.advance(hours=5)
    assert cooldown.has_seen_recently("followup", hours_window=6)
    assert not cooldown.has_seen_recently("followup", hours_window=5)


def test_failing_store_allows_show(keys, failing_store, clock) -> None:
    storage = TipStorage(keys, failing_store, clock=clock)
    cooldown = TipCooldown(MessageCatalog(), storage, clock=clock)
    assert cooldown.can_show("welcome")
