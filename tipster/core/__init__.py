"""Core models and ports."""

from tipster.core.models import (
    CATEGORIES,
    ActivityRecord,
    Category,
    ShownRecord,
    TimerName,
    TipContext,
    UserState,
)
from tipster.core.ports import EventBusPort, KeyValueStorePort, TipRule

__all__ = [
    "CATEGORIES",
    "ActivityRecord",
    "Category",
    "EventBusPort",
    "KeyValueStorePort",
    "ShownRecord",
    "TimerName",
    "TipContext",
    "TipRule",
    "UserState",
]
