import argparse
import datetime
import logging
import shutil

from catalog import EXERCISES, Phase
from checklist_service import ChecklistService
from config import DEFAULT_STORAGE_KEY
from db import LogRepository, SettingsRepository
from log_store import LogStore
from tools import DateTools


def _open_checklist(db_path: str, yaml_path: str) -> ChecklistService:
    settings = SettingsRepository(db_path, yaml_path)
    repo = LogRepository(db_path, settings.get_text("storage_key", DEFAULT_STORAGE_KEY))
    return ChecklistService(repo)


def _date_arg(value: str) -> datetime.date:
    try:
        return DateTools.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def print_status(checklist: ChecklistService, day: datetime.date | None = None) -> None:
    day = day or checklist.today()
    completed = checklist.daily_log(day)
    print(f"{day.isoformat()}: {checklist.streak} day streak, {checklist.progress(day)}% done")
    for phase in Phase:
        print(phase.value)
        for ex in EXERCISES.by_phase(phase):
            mark = "x" if ex.id in completed else " "
            print(f"  [{mark}] {ex.label} ({ex.duration})  {ex.id}")


def print_week(checklist: ChecklistService) -> None:
    for status in checklist.week():
        mark = "#" if status.has_activity else "."
        suffix = " <- today" if status.is_today else ""
        print(f"{status.weekday} {status.date.isoformat()} {mark}{suffix}")


def export_logs(checklist: ChecklistService, out_path: str) -> None:
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(checklist.store.to_json())


def import_logs(checklist: ChecklistService, in_path: str) -> None:
    """Replace the stored log with the contents of a JSON export."""
    with open(in_path, "r", encoding="utf-8") as f:
        checklist.replace(LogStore.from_json(f.read()))


def backup_db(db_path: str, backup_path: str) -> None:
    shutil.copy(db_path, backup_path)


def restore_db(backup_path: str, db_path: str) -> None:
    shutil.copy(backup_path, db_path)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="CKD daily exercise checklist")
    parser.add_argument("--db", default="ckd_tracker.db")
    parser.add_argument("--yaml", default="settings.yaml")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    status = sub.add_parser("status")
    status.add_argument("--date", type=_date_arg)

    tog = sub.add_parser("toggle")
    tog.add_argument("exercise_id")
    tog.add_argument("--date", type=_date_arg)

    sub.add_parser("week")

    exp = sub.add_parser("export")
    exp.add_argument("--out", default="ckd_logs.json")

    imp = sub.add_parser("import")
    imp.add_argument("--in", dest="src", required=True)

    bkp = sub.add_parser("backup")
    bkp.add_argument("--out", default="backup.db")

    rst = sub.add_parser("restore")
    rst.add_argument("--in", dest="src", default="backup.db")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.cmd == "backup":
        backup_db(args.db, args.out)
        return
    if args.cmd == "restore":
        restore_db(args.src, args.db)
        return

    checklist = _open_checklist(args.db, args.yaml)
    if args.cmd == "status":
        print_status(checklist, args.date)
    elif args.cmd == "toggle":
        if args.exercise_id not in EXERCISES:
            parser.error(f"unknown exercise id: {args.exercise_id}")
        checklist.toggle(args.exercise_id, args.date)
        print_status(checklist, args.date)
    elif args.cmd == "week":
        print_week(checklist)
    elif args.cmd == "export":
        export_logs(checklist, args.out)
    elif args.cmd == "import":
        import_logs(checklist, args.src)


if __name__ == "__main__":
    main()
