"""Per-type cooldown enforcement over persisted shown records."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Callable

from loguru import logger

from tipster.config.defaults import DEFAULT_COOLDOWN_HOURS
from tipster.messages.catalog import MessageCatalog
from tipster.storage.tips import TipStorage
from tipster.utils.helpers import to_epoch_ms, utc_now

if TYPE_CHECKING:
    from loguru import Logger

_MS_PER_HOUR = 1000 * 60 * 60


class TipCooldown:
    """Decides whether enough time has passed since a tip type was last shown.

    A cooldown of zero means "show once, ever". Records whose timestamp cannot
    be parsed count as never shown.
    """

    def __init__(
        self,
        catalog: MessageCatalog,
        storage: TipStorage,
        log: Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._catalog = catalog
        self._storage = storage
        self._log = log or logger.bind(component="tip_cooldown")
        self._clock = clock

    def get_cooldown_hours(self, type: str, category: str = "out") -> float:
        raw = self._catalog.get_field(category, type, "cooldown_hours", DEFAULT_COOLDOWN_HOURS)
        try:
            return float(raw)
        except (TypeError, ValueError):
            self._log.warning(
                "cooldown_bad_value type={} category={} value={!r}", type, category, raw
            )
            return float(DEFAULT_COOLDOWN_HOURS)

    def can_show(self, type: str, category: str = "out") -> bool:
        cooldown_hours = self.get_cooldown_hours(type, category)
        if cooldown_hours == 0:
            return not self._storage.was_shown(type, category)

        last = self._storage.get_last_shown_time(type, category)
        if last is None:
            return True
        return self.get_hours_since(last) >= cooldown_hours

    def has_seen_recently(self, type: str, category: str = "out", hours_window: float = 24) -> bool:
        """True iff the type was shown less than ``hours_window`` hours ago."""
        last = self._storage.get_last_shown_time(type, category)
        if last is None:
            return False
        return self.get_hours_since(last) < hours_window

    def get_hours_since(self, last_ms: int) -> float:
        return (to_epoch_ms(self._clock()) - last_ms) / _MS_PER_HOUR
