import datetime
from typing import Callable

from fastapi import FastAPI, HTTPException, APIRouter

from catalog import EXERCISES, SAFETY_TIPS, DISCLAIMER
from checklist_service import ChecklistService
from db import LogRepository, SettingsRepository
from config import APP_VERSION, DEFAULT_STORAGE_KEY
from tools import DateTools


class TrackerAPI:
    """Provides REST endpoints for the daily exercise checklist."""

    def __init__(
        self,
        db_path: str = "ckd_tracker.db",
        yaml_path: str = "settings.yaml",
        *,
        today_provider: Callable[[], datetime.date] = DateTools.today,
    ) -> None:
        self.db_path = db_path
        self.settings = SettingsRepository(db_path, yaml_path)
        self.logs = LogRepository(
            db_path, self.settings.get_text("storage_key", DEFAULT_STORAGE_KEY)
        )
        self.checklist = ChecklistService(self.logs, EXERCISES, today_provider)
        self.app = FastAPI(
            title="CKD Active API",
            description="REST API for the daily kidney-friendly exercise checklist",
            version=APP_VERSION,
        )
        self._setup_routes()

    def _parse_date(self, value: str) -> datetime.date:
        try:
            return DateTools.parse(value)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    def _day_summary(self, day: datetime.date) -> dict:
        return {
            "date": day.isoformat(),
            "completed": sorted(self.checklist.daily_log(day)),
            "streak": self.checklist.streak,
            "progress": self.checklist.progress(day),
        }

    def _toggle(self, day: datetime.date, exercise_id: str) -> dict:
        if exercise_id not in EXERCISES:
            raise HTTPException(status_code=404, detail="exercise not found")
        self.checklist.toggle(exercise_id, day)
        return self._day_summary(day)

    def _setup_routes(self) -> None:
        logs_router = APIRouter(prefix="/logs", tags=["Logs"])

        @self.app.get(
            "/health",
            summary="Health check",
            description="Verify API and database connectivity.",
        )
        def health():
            """Return API and database connection status."""
            try:
                self.logs.load_raw()
                return {"status": "ok"}
            except Exception as e:  # pragma: no cover - connectivity failure
                raise HTTPException(status_code=500, detail=str(e))

        @self.app.get("/exercises", tags=["Catalog"])
        def list_exercises():
            return [ex.to_dict() for ex in EXERCISES]

        @self.app.get("/safety", tags=["Catalog"])
        def safety():
            return {
                "tips": [{"title": t, "text": text} for t, text in SAFETY_TIPS],
                "disclaimer": DISCLAIMER,
            }

        @logs_router.get("/{date}")
        def get_daily_log(date: str):
            day = self._parse_date(date)
            return {
                "date": day.isoformat(),
                "completed": sorted(self.checklist.daily_log(day)),
            }

        @logs_router.post("/{date}/toggle")
        def toggle_for_date(date: str, exercise_id: str):
            return self._toggle(self._parse_date(date), exercise_id)

        @self.app.post("/today/toggle", tags=["Logs"])
        def toggle_today(exercise_id: str):
            return self._toggle(self.checklist.today(), exercise_id)

        @self.app.get("/streak", tags=["Progress"])
        def get_streak():
            return {
                "streak": self.checklist.streak,
                "today": self.checklist.today().isoformat(),
            }

        @self.app.get("/progress", tags=["Progress"])
        def get_progress(date: str = None):
            day = self._parse_date(date) if date else self.checklist.today()
            phases = self.checklist.stats.phase_progress(day)
            return {
                "date": day.isoformat(),
                "progress": self.checklist.progress(day),
                "phases": {
                    phase.value: {"done": done, "total": total}
                    for phase, (done, total) in phases.items()
                },
            }

        @self.app.get("/week", tags=["Progress"])
        def get_week():
            return [status.to_dict() for status in self.checklist.week()]

        @self.app.get("/export", tags=["Logs"])
        def export_logs():
            return self.checklist.store.to_dict()

        @self.app.get("/settings", tags=["Settings"])
        def get_settings():
            return self.settings.all_settings()

        @self.app.post("/settings", tags=["Settings"])
        def update_settings(
            show_safety_tips: bool = None,
            show_disclaimer: bool = None,
            language: str = None,
            theme: str = None,
        ):
            values = {
                "show_safety_tips": show_safety_tips,
                "show_disclaimer": show_disclaimer,
                "language": language,
                "theme": theme,
            }
            try:
                self.settings.update({k: v for k, v in values.items() if v is not None})
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {"status": "updated"}

        self.app.include_router(logs_router)


if __name__ == "__main__":
    import os
    import uvicorn

    api = TrackerAPI(
        db_path=os.environ.get("DB_PATH", "ckd_tracker.db"),
        yaml_path=os.environ.get("YAML_PATH", "settings.yaml"),
    )
    uvicorn.run(api.app)
