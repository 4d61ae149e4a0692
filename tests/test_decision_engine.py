from dataclasses import dataclass, field

from tipster.core.models import TipContext, UserState
from tipster.core.ports import TipRule
from tipster.messages.catalog import MessageCatalog
from tipster.storage.tips import TipStorage
from tipster.tips.cooldown import TipCooldown
from tipster.tips.engine import DecisionEngine, EngineHelpers
from tipster.tips.rules import OUTER_RULES


@dataclass
class RecordingRule:
    name: str
    result: str | None = None
    calls: list[TipContext] = field(default_factory=list)

    def matches(self, state, engine, context):
        self.calls.append(context)
        return self.result


class ExplodingRule:
    name = "exploding"

    def matches(self, state, engine, context):
        raise RuntimeError("boom")


def _engine(keys, store, clock, rules, overrides=None) -> DecisionEngine:
    catalog = MessageCatalog(overrides)
    storage = TipStorage(keys, store, clock=clock)
    helpers = EngineHelpers(storage=storage, cooldown=TipCooldown(catalog, storage, clock=clock))
    return DecisionEngine(catalog, rules, helpers)


def test_first_match_wins_and_later_rules_are_skipped(keys, store, clock) -> None:
    first = RecordingRule("first")
    second = RecordingRule("second", "alpha")
    third = RecordingRule("third", "beta")
    engine = _engine(keys, store, clock, [first, second, third])

    assert engine.determine(UserState()) == "alpha"
    assert len(first.calls) == 1
    assert len(second.calls) == 1
    assert third.calls == []


def test_no_match_returns_none(keys, store, clock) -> None:
    engine = _engine(keys, store, clock, [RecordingRule("a"), RecordingRule("b")])
    assert engine.determine(UserState()) is None


def test_empty_rule_list(keys, store, clock) -> None:
    assert _engine(keys, store, clock, []).determine(UserState()) is None


def test_context_is_parsed_before_rules_see_it(keys, store, clock) -> None:
    rule = RecordingRule("r")
    engine = _engine(keys, store, clock, [rule])
    engine.determine(UserState(), "return")
    engine.determine(UserState(), "sideways")
    engine.determine(UserState())
    engine.determine(UserState(), TipContext.OUTER)
    assert rule.calls == [TipContext.RETURN, TipContext.UNSPECIFIED, TipContext.UNSPECIFIED, TipContext.OUTER]


def test_raising_rule_is_skipped(keys, store, clock, log_messages) -> None:
    engine = _engine(keys, store, clock, [ExplodingRule(), RecordingRule("after", "fallback")])
    assert engine.determine(UserState()) == "fallback"
    assert any("rule_failed rule=exploding" in m for m in log_messages)


def test_has_consults_catalog(keys, store, clock) -> None:
    engine = _engine(keys, store, clock, [], {"out": {"followup": {"disable": True}}})
    assert engine.has("welcome")
    assert not engine.has("followup")
    assert engine.has("greeting", "in")
    assert not engine.has("nope")


def test_rules_satisfy_protocol() -> None:
    for rule in OUTER_RULES:
        assert isinstance(rule, TipRule)
    assert isinstance(RecordingRule("x"), TipRule)


def test_deterministic_for_identical_inputs(keys, store, clock) -> None:
    engine = _engine(keys, store, clock, OUTER_RULES)
    state = UserState(has_sent_message=True, last_chat_open_time=1)
    results = {engine.determine(state, "return") for _ in range(5)}
    assert results == {"active_return"}
