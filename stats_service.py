import datetime
import math
from dataclasses import dataclass
from typing import Callable

from catalog import EXERCISES, ExerciseCatalog, Phase
from log_store import LogStore
from tools import DateTools


@dataclass(frozen=True)
class DayStatus:
    date: datetime.date
    has_activity: bool
    is_today: bool
    weekday: str

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "has_activity": self.has_activity,
            "is_today": self.is_today,
            "weekday": self.weekday,
        }


class StatisticsService:
    """Read-only views derived from the exercise log."""

    WINDOW_DAYS = 7
    WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

    def __init__(
        self,
        store_provider: Callable[[], LogStore],
        catalog: ExerciseCatalog = EXERCISES,
    ) -> None:
        self._store = store_provider
        self.catalog = catalog

    def is_completed(self, day: datetime.date, exercise_id: str) -> bool:
        return exercise_id in self._store().get_daily_log(day)

    def get_progress(self, day: datetime.date) -> int:
        """Return the percentage of the catalog completed on ``day``."""
        done = len(self._store().get_daily_log(day) & self.catalog.ids())
        percent = math.floor(100 * done / len(self.catalog) + 0.5)
        return max(0, min(percent, 100))

    def phase_progress(self, day: datetime.date) -> dict[Phase, tuple[int, int]]:
        """Return ``(done, total)`` for each phase in catalog order."""
        completed = self._store().get_daily_log(day)
        result: dict[Phase, tuple[int, int]] = {}
        for phase in Phase:
            ids = [ex.id for ex in self.catalog.by_phase(phase)]
            if ids:
                result[phase] = (sum(1 for i in ids if i in completed), len(ids))
        return result

    def seven_day_window(self, today: datetime.date) -> list[DayStatus]:
        today = DateTools.parse(today)
        store = self._store()
        return [
            DayStatus(
                date=day,
                has_activity=store.has_activity(day),
                is_today=day == today,
                weekday=self.WEEKDAYS[day.weekday()],
            )
            for day in DateTools.window(today, self.WINDOW_DAYS)
        ]
