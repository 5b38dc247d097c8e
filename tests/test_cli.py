import io
import os
import sys
import json
import datetime
import unittest
from contextlib import redirect_stdout, redirect_stderr

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
import cli
from db import LogRepository


class CLITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db_path = "test_cli.db"
        self.yaml_path = "test_cli_settings.yaml"
        self.out_path = "test_cli_export.json"
        self.backup_path = "test_cli_backup.db"
        self._cleanup()

    def tearDown(self) -> None:
        self._cleanup()

    def _cleanup(self) -> None:
        for path in (self.db_path, self.yaml_path, self.out_path, self.backup_path):
            if os.path.exists(path):
                os.remove(path)

    def _run(self, *args: str) -> str:
        buf = io.StringIO()
        with redirect_stdout(buf):
            cli.main(["--db", self.db_path, "--yaml", self.yaml_path, *args])
        return buf.getvalue()

    def test_toggle_and_status(self) -> None:
        output = self._run("toggle", "main_walk")
        self.assertIn("1 day streak, 17% done", output)
        self.assertIn("[x] Brisk Walk (Talk Test)", output)
        output = self._run("status")
        self.assertIn("1 day streak", output)
        self.assertIn("[ ] Deep Breathing", output)

    def test_toggle_past_date(self) -> None:
        yesterday = (datetime.date.today() - datetime.timedelta(days=1)).isoformat()
        output = self._run("toggle", "cool_breathe", "--date", yesterday)
        self.assertIn(f"{yesterday}: 1 day streak", output)

    def test_unknown_exercise(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self._run("toggle", "jogging")

    def test_bad_date(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self._run("status", "--date", "yesterday")

    def test_week(self) -> None:
        self._run("toggle", "main_walk")
        lines = self._run("week").strip().splitlines()
        self.assertEqual(len(lines), 7)
        self.assertTrue(lines[-1].endswith("# <- today"))

    def test_export_and_import(self) -> None:
        self._run("toggle", "main_walk")
        self._run("export", "--out", self.out_path)
        with open(self.out_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data, {datetime.date.today().isoformat(): ["main_walk"]})

        with open(self.out_path, "w", encoding="utf-8") as f:
            json.dump({"2024-01-01": ["cool_stretch", "cool_stretch"]}, f)
        self._run("import", "--in", self.out_path)
        self.assertEqual(
            LogRepository(self.db_path).load().to_dict(),
            {"2024-01-01": ["cool_stretch"]},
        )

    def test_backup_and_restore(self) -> None:
        self._run("toggle", "main_walk")
        self._run("backup", "--out", self.backup_path)
        self._run("toggle", "main_walk")
        self.assertEqual(LogRepository(self.db_path).load().to_dict(), {})
        self._run("restore", "--in", self.backup_path)
        self.assertEqual(len(LogRepository(self.db_path).load()), 1)


if __name__ == "__main__":
    unittest.main()
