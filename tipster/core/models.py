"""Typed data models shared by tipster components."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Literal

Category = Literal["in", "out"]

CATEGORIES: tuple[Category, ...] = ("in", "out")


class TipContext(Enum):
    """Why a decision is being requested."""

    RETURN = "return"
    OUTER = "outer"
    INNER = "inner"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: TipContext | str | None) -> TipContext:
        """Map a caller hint onto the closed set; unknown hints are unspecified."""
        if isinstance(value, TipContext):
            return value
        if not value:
            return cls.UNSPECIFIED
        for member in (cls.RETURN, cls.OUTER, cls.INNER):
            if member.value == value:
                return member
        return cls.UNSPECIFIED


class TimerName(str, Enum):
    """Closed set of scheduler timer names."""

    OUTER_SHOW = "outer-tip:show"
    OUTER_AUTO_HIDE = "outer-tip:auto-hide"
    OUTER_FOLLOW_UP = "outer-tip:follow-up"
    OUTER_RETURNING = "outer-tip:returning"
    OUTER_ACTIVE_RETURN = "outer-tip:active-return"
    OUTER_RECONNECT = "outer-tip:reconnect"
    INNER_SHOW = "inner-tip:show"
    INNER_AUTO_HIDE = "inner-tip:auto-hide"
    INNER_GREETING_START = "inner-tip:greeting-start"
    INNER_FALLBACK_SHOW = "inner-tip:fallback-show"


@dataclass(frozen=True, slots=True, kw_only=True)
class ShownRecord:
    """Persisted fact that one tip type was shown."""

    type: str
    category: str
    timestamp: str
    version: int = 1

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShownRecord:
        return cls(
            type=str(data["type"]),
            category=str(data["category"]),
            timestamp=str(data["timestamp"]),
            version=int(data.get("version", 1)),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ActivityRecord:
    """Session-wide activity facts, epoch milliseconds."""

    last_chat_open_time: int | None = None
    last_chat_close_time: int | None = None
    has_sent_message: bool = False
    last_message_sent_time: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UserState:
    """Engine input derived from activity at decision time."""

    last_chat_open_time: int | None = None
    has_sent_message: bool = False
    is_recently_returned: bool = False
    is_eligible_for_reconnect: bool = False
