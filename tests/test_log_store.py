import os
import sys
import json
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from log_store import LogStore
from tools import DateTools


class LogStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.day = datetime.date(2024, 1, 31)
        self.store = LogStore()

    def test_absent_date_is_empty(self) -> None:
        self.assertEqual(self.store.get_daily_log(self.day), frozenset())
        self.assertFalse(self.store.has_activity(self.day))

    def test_toggle_adds_and_removes(self) -> None:
        self.store.toggle_exercise(self.day, "main_walk")
        self.assertEqual(self.store.get_daily_log(self.day), {"main_walk"})
        self.store.toggle_exercise(self.day, "cool_breathe")
        self.assertEqual(
            self.store.get_daily_log(self.day), {"main_walk", "cool_breathe"}
        )
        self.store.toggle_exercise(self.day, "main_walk")
        self.assertEqual(self.store.get_daily_log(self.day), {"cool_breathe"})

    def test_toggle_is_own_inverse(self) -> None:
        self.store.toggle_exercise(self.day, "warmup_walk")
        before = self.store.get_daily_log(self.day)
        self.store.toggle_exercise(self.day, "main_strength")
        self.store.toggle_exercise(self.day, "main_strength")
        self.assertEqual(self.store.get_daily_log(self.day), before)

    def test_daily_log_is_a_copy(self) -> None:
        self.store.toggle_exercise(self.day, "main_walk")
        log = self.store.get_daily_log(self.day)
        self.store.toggle_exercise(self.day, "main_walk")
        self.assertEqual(log, {"main_walk"})
        self.assertEqual(self.store.get_daily_log(self.day), frozenset())

    def test_get_does_not_create_entries(self) -> None:
        self.store.get_daily_log(self.day)
        self.assertEqual(self.store.to_dict(), {})

    def test_string_and_date_keys_match(self) -> None:
        self.store.toggle_exercise("2024-01-31", "main_walk")
        self.assertTrue(self.store.has_activity(self.day))

    def test_empty_days_are_not_written(self) -> None:
        self.store.toggle_exercise(self.day, "main_walk")
        self.store.toggle_exercise(self.day, "main_walk")
        self.store.toggle_exercise(datetime.date(2024, 2, 1), "cool_stretch")
        self.assertEqual(self.store.to_dict(), {"2024-02-01": ["cool_stretch"]})
        self.assertEqual(self.store.dates(), [datetime.date(2024, 2, 1)])

    def test_json_round_trip(self) -> None:
        self.store.toggle_exercise(self.day, "main_walk")
        self.store.toggle_exercise(self.day, "cool_breathe")
        text = self.store.to_json()
        self.assertEqual(
            json.loads(text), {"2024-01-31": ["cool_breathe", "main_walk"]}
        )
        self.assertEqual(LogStore.from_json(text), self.store)

    def test_duplicates_collapse_on_load(self) -> None:
        store = LogStore.from_json('{"2024-01-31": ["main_walk", "main_walk"]}')
        self.assertEqual(store.get_daily_log(self.day), {"main_walk"})
        store.toggle_exercise(self.day, "main_walk")
        self.assertFalse(store.has_activity(self.day))

    def test_missing_or_corrupt_state_is_empty(self) -> None:
        for text in (None, "", "{not json", "[1, 2]", '"text"', "null"):
            with self.subTest(text=text):
                self.assertEqual(LogStore.from_json(text).to_dict(), {})

    def test_bad_entries_are_skipped(self) -> None:
        text = json.dumps(
            {
                "2024-01-31": ["main_walk"],
                "yesterday": ["main_walk"],
                "2024-01-30": "main_walk",
                "2024-01-29": [1, 2],
            }
        )
        with self.assertLogs("log_store", level="WARNING") as logs:
            store = LogStore.from_json(text)
        self.assertEqual(store.to_dict(), {"2024-01-31": ["main_walk"]})
        self.assertEqual(len(logs.output), 3)

    def test_empty_array_loads_as_inactive(self) -> None:
        store = LogStore.from_json('{"2024-01-31": []}')
        self.assertFalse(store.has_activity(self.day))


class DateToolsTestCase(unittest.TestCase):
    def test_days_before_crosses_month_and_year(self) -> None:
        self.assertEqual(
            DateTools.days_before(datetime.date(2024, 3, 1), 1),
            datetime.date(2024, 2, 29),
        )
        self.assertEqual(
            DateTools.days_before(datetime.date(2024, 1, 1), 1),
            datetime.date(2023, 12, 31),
        )

    def test_parse(self) -> None:
        self.assertEqual(DateTools.parse("2024-05-06"), datetime.date(2024, 5, 6))
        self.assertEqual(
            DateTools.parse(datetime.datetime(2024, 5, 6, 23, 59)),
            datetime.date(2024, 5, 6),
        )
        with self.assertRaises(ValueError):
            DateTools.parse("06/05/2024")
        with self.assertRaises(ValueError):
            DateTools.parse("2024-02-30")
        self.assertEqual(DateTools.parse(" 2024-05-06 "), datetime.date(2024, 5, 6))

    def test_parse_rejects_unpadded_keys(self) -> None:
        for value in ("2024-7-5", "2024-07-5", "2024-7-05"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    DateTools.parse(value)

    def test_unpadded_keys_skipped_on_load(self) -> None:
        with self.assertLogs("log_store", level="WARNING"):
            store = LogStore.from_json('{"2024-7-5": ["main_walk"], "2024-07-06": ["main_walk"]}')
        self.assertEqual(store.to_dict(), {"2024-07-06": ["main_walk"]})

    def test_window_is_oldest_first(self) -> None:
        days = DateTools.window(datetime.date(2024, 1, 3), 3)
        self.assertEqual(
            days,
            [
                datetime.date(2024, 1, 1),
                datetime.date(2024, 1, 2),
                datetime.date(2024, 1, 3),
            ],
        )


if __name__ == "__main__":
    unittest.main()
