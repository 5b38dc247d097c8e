import datetime
import logging
from typing import Callable

from log_store import LogStore
from tools import DateTools

logger = logging.getLogger(__name__)

# Days examined including today. A safety bound, not a streak limit.
MAX_LOOKBACK_DAYS = 365


def compute_streak(store: LogStore, today: datetime.date) -> int:
    """Return the current streak of active days ending at ``today``.

    If ``today`` has activity the streak counts back from today. Otherwise the
    previous day acts as a grace day: when it is active the streak counts back
    from it, when it is not the streak is zero. Counting stops at the first
    inactive day.
    """
    today = DateTools.parse(today)
    if store.has_activity(today):
        count = 1
        offset = 1
    elif store.has_activity(DateTools.days_before(today, 1)):
        count = 1
        offset = 2
    else:
        return 0
    while offset < MAX_LOOKBACK_DAYS:
        if not store.has_activity(DateTools.days_before(today, offset)):
            break
        count += 1
        offset += 1
    return count


class StreakService:
    """Recompute the streak for a session's log on demand."""

    def __init__(
        self,
        store_provider: Callable[[], LogStore],
        today_provider: Callable[[], datetime.date] = DateTools.today,
    ) -> None:
        self._store = store_provider
        self._today = today_provider

    def current_streak(self) -> int:
        today = self._today()
        streak = compute_streak(self._store(), today)
        logger.debug("Streak for %s recomputed: %d", today.isoformat(), streak)
        return streak
