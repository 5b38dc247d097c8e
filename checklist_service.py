import datetime
import logging
from typing import Callable

from catalog import EXERCISES, ExerciseCatalog
from db import LogRepository
from log_store import LogStore
from stats_service import StatisticsService
from streak_service import StreakService
from tools import DateTools

logger = logging.getLogger(__name__)


class ChecklistService:
    """Own the exercise log for one session.

    The log is loaded once on construction. Every toggle is persisted before
    the streak is recomputed, so callers always observe a saved state.
    """

    def __init__(
        self,
        repo: LogRepository,
        catalog: ExerciseCatalog = EXERCISES,
        today_provider: Callable[[], datetime.date] = DateTools.today,
    ) -> None:
        self.repo = repo
        self.catalog = catalog
        self.today = today_provider
        self.store = repo.load()
        self.streaks = StreakService(lambda: self.store, today_provider)
        self.stats = StatisticsService(lambda: self.store, catalog)
        self.streak = self.streaks.current_streak()

    def toggle(self, exercise_id: str, day: datetime.date | None = None) -> int:
        """Toggle ``exercise_id`` on ``day`` (default today) and return the streak.

        If saving fails the toggle is undone before the error propagates, so the
        in-memory log never runs ahead of the persisted one.
        """
        day = DateTools.parse(day) if day is not None else self.today()
        self.store.toggle_exercise(day, exercise_id)
        try:
            self.repo.save(self.store)
        except Exception:
            self.store.toggle_exercise(day, exercise_id)
            raise
        done = exercise_id in self.store.get_daily_log(day)
        logger.info(
            "%s %s on %s", "Completed" if done else "Cleared", exercise_id, day.isoformat()
        )
        return self.refresh_streak()

    def refresh_streak(self) -> int:
        """Recompute the streak, e.g. after the calendar day has changed."""
        self.streak = self.streaks.current_streak()
        return self.streak

    def daily_log(self, day: datetime.date | None = None) -> frozenset[str]:
        day = DateTools.parse(day) if day is not None else self.today()
        return self.store.get_daily_log(day)

    def progress(self, day: datetime.date | None = None) -> int:
        day = DateTools.parse(day) if day is not None else self.today()
        return self.stats.get_progress(day)

    def week(self):
        return self.stats.seven_day_window(self.today())

    def replace(self, store: LogStore) -> None:
        """Swap in ``store`` as the session log and persist it."""
        self.repo.save(store)
        self.store = store
        self.refresh_streak()
