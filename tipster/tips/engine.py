"""Rule-driven decision engine for proactive tips."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from tipster.core.models import TipContext, UserState
from tipster.core.ports import TipRule
from tipster.messages.catalog import MessageCatalog
from tipster.storage.tips import TipStorage
from tipster.tips.cooldown import TipCooldown

if TYPE_CHECKING:
    from loguru import Logger


@dataclass(frozen=True, slots=True)
class EngineHelpers:
    """Services rules may consult."""

    storage: TipStorage
    cooldown: TipCooldown


class DecisionEngine:
    """Evaluates rules in priority order; the first match wins.

    Rules below a match are never evaluated.
    """

    def __init__(
        self,
        catalog: MessageCatalog,
        rules: Sequence[TipRule],
        helpers: EngineHelpers,
        log: Logger | None = None,
    ) -> None:
        self.catalog = catalog
        self.rules: tuple[TipRule, ...] = tuple(rules)
        self.helpers = helpers
        self._log = log or logger.bind(component="decision_engine")

    def determine(self, state: UserState, context: TipContext | str | None = None) -> str | None:
        """Return the tip type to show, or None if no rule matches."""
        resolved_context = TipContext.parse(context)
        for rule in self.rules:
            try:
                result = rule.matches(state, self, resolved_context)
            except Exception as e:
                self._log.error("rule_failed rule={} error={}", rule.name, e)
                continue
            if result:
                self._log.debug(
                    "decision rule={} type={} context={}", rule.name, result, resolved_context.value
                )
                return result
        self._log.debug("decision type=None context={}", resolved_context.value)
        return None

    def has(self, type: str, category: str = "out") -> bool:
        return self.catalog.has(category, type)
