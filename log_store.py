"""In-memory per-day completion log.

The store maps calendar dates to the set of exercise ids completed on that
day. An empty set and a missing date mean the same thing: no activity.
"""

import datetime
import json
import logging
from typing import Iterable

from tools import DateTools

logger = logging.getLogger(__name__)


class LogStore:
    """Mapping of ``datetime.date`` to completed exercise ids."""

    def __init__(self, entries: dict[datetime.date, Iterable[str]] | None = None) -> None:
        self._logs: dict[datetime.date, set[str]] = {}
        for day, ids in (entries or {}).items():
            self._logs[DateTools.parse(day)] = set(ids)

    def toggle_exercise(self, day: datetime.date, exercise_id: str) -> None:
        """Flip completion of ``exercise_id`` on ``day``.

        The caller is expected to persist the store right after this call.
        """
        day = DateTools.parse(day)
        completed = self._logs.setdefault(day, set())
        if exercise_id in completed:
            completed.remove(exercise_id)
        else:
            completed.add(exercise_id)

    def get_daily_log(self, day: datetime.date) -> frozenset[str]:
        return frozenset(self._logs.get(DateTools.parse(day), ()))

    def has_activity(self, day: datetime.date) -> bool:
        return len(self.get_daily_log(day)) > 0

    def dates(self) -> list[datetime.date]:
        """Return the dates with at least one completed exercise."""
        return sorted(day for day, ids in self._logs.items() if ids)

    def __len__(self) -> int:
        return len(self.dates())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogStore):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, list[str]]:
        """Return the storage form: ISO date keys to sorted id lists."""
        return {
            DateTools.to_key(day): sorted(self._logs[day])
            for day in self.dates()
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, data: dict) -> "LogStore":
        store = cls()
        for key, ids in data.items():
            try:
                day = DateTools.parse(key)
            except ValueError:
                logger.warning("Skipping log entry with invalid date key %r", key)
                continue
            if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
                logger.warning("Skipping log entry %s: expected a list of ids", key)
                continue
            store._logs.setdefault(day, set()).update(ids)
        return store

    @classmethod
    def from_json(cls, text: str | None) -> "LogStore":
        """Rebuild a store from persisted JSON.

        Missing or unreadable state yields an empty store. Duplicate ids within
        a day collapse into one.
        """
        if not text:
            return cls()
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            logger.warning("Discarding unreadable exercise log: %s", e)
            return cls()
        if not isinstance(data, dict):
            logger.warning(
                "Discarding exercise log: expected an object, got %s",
                type(data).__name__,
            )
            return cls()
        return cls.from_dict(data)
