"""Tip decisions: cooldown, rules, engine, scheduler and coordinator."""

from tipster.tips.cooldown import TipCooldown
from tipster.tips.coordinator import OuterTipsCoordinator
from tipster.tips.engine import DecisionEngine, EngineHelpers
from tipster.tips.rules import (
    ALL_RULES,
    INNER_RULES,
    OUTER_RULES,
    ActiveReturnRule,
    FollowupRule,
    ReconnectRule,
    ReturningRule,
    WelcomeRule,
)
from tipster.tips.scheduler import Scheduler, TipScheduler

__all__ = [
    "ALL_RULES",
    "INNER_RULES",
    "OUTER_RULES",
    "ActiveReturnRule",
    "DecisionEngine",
    "EngineHelpers",
    "FollowupRule",
    "OuterTipsCoordinator",
    "ReconnectRule",
    "ReturningRule",
    "Scheduler",
    "TipCooldown",
    "TipScheduler",
    "WelcomeRule",
]
