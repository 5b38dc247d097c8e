import datetime
import os

import streamlit as st

from catalog import EXERCISES, SAFETY_TIPS, DISCLAIMER, Phase
from checklist_service import ChecklistService
from config import DEFAULT_STORAGE_KEY
from db import LogRepository, SettingsRepository


class TrackerApp:
    """Streamlit checklist page for the daily CKD exercise routine."""

    def __init__(
        self, db_path: str = "ckd_tracker.db", yaml_path: str = "settings.yaml"
    ) -> None:
        self.settings_repo = SettingsRepository(db_path, yaml_path)
        self.show_safety_tips = self.settings_repo.get_bool("show_safety_tips", True)
        self.show_disclaimer = self.settings_repo.get_bool("show_disclaimer", True)
        self.logs = LogRepository(
            db_path, self.settings_repo.get_text("storage_key", DEFAULT_STORAGE_KEY)
        )
        self._configure_page()
        if "checklist" not in st.session_state:
            st.session_state.checklist = ChecklistService(self.logs)
        self.checklist: ChecklistService = st.session_state.checklist

    def _configure_page(self) -> None:
        if st.session_state.get("layout_set"):
            return
        st.set_page_config(page_title="CKD Active", layout="centered")
        st.session_state.layout_set = True

    def _toggle(self, exercise_id: str, day: datetime.date) -> None:
        self.checklist.toggle(exercise_id, day)

    def _header(self) -> None:
        left, right = st.columns([3, 1])
        with left:
            st.title("CKD Active")
            st.caption("Slow & Steady Wins.")
        with right:
            st.metric("Streak", f"{self.checklist.streak} Day Streak")
        st.progress(self.checklist.progress())

    def _safety_card(self) -> None:
        lines = "\n".join(f"- **{title}:** {text}" for title, text in SAFETY_TIPS)
        st.info(f"**Safety First**\n\n{lines}")

    def _phase_section(self, phase: Phase) -> None:
        st.subheader(phase.value)
        day = self.checklist.today()
        completed = self.checklist.daily_log(day)
        for ex in EXERCISES.by_phase(phase):
            # one widget per day so a new day starts from the stored log
            st.checkbox(
                f"{ex.label} ({ex.duration})",
                value=ex.id in completed,
                key=f"ex_{day.isoformat()}_{ex.id}",
                on_change=self._toggle,
                args=(ex.id, day),
            )

    def _week_view(self) -> None:
        st.subheader("Last 7 Days")
        cols = st.columns(7)
        for col, status in zip(cols, self.checklist.week()):
            mark = "✅" if status.has_activity else "⬜"
            label = f"**{status.weekday[0]}**" if status.is_today else status.weekday[0]
            col.markdown(f"{mark}\n\n{label}")

    def run(self) -> None:
        self.checklist.refresh_streak()
        self._header()
        if self.show_safety_tips:
            self._safety_card()
        for phase in Phase:
            self._phase_section(phase)
        self._week_view()
        if self.show_disclaimer:
            st.caption(f"Disclaimer: {DISCLAIMER}")


if __name__ == "__main__":
    db_path = os.environ.get("DB_PATH", "ckd_tracker.db")
    yaml_path = os.environ.get("YAML_PATH", "settings.yaml")
    TrackerApp(db_path=db_path, yaml_path=yaml_path).run()
