import requests


class TrackerClient:
    """Simple REST client for the checklist API."""

    def __init__(self, base_url: str = "http://localhost:8000", session=None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _get(self, path: str, **params):
        resp = self.session.get(f"{self.base_url}{path}", params=params or None)
        resp.raise_for_status()
        return resp.json()

    def _post(self, path: str, **params):
        resp = self.session.post(f"{self.base_url}{path}", params=params or None)
        resp.raise_for_status()
        return resp.json()

    def exercises(self) -> list[dict]:
        return self._get("/exercises")

    def toggle(self, exercise_id: str, date: str | None = None) -> dict:
        if date is None:
            return self._post("/today/toggle", exercise_id=exercise_id)
        return self._post(f"/logs/{date}/toggle", exercise_id=exercise_id)

    def daily_log(self, date: str) -> list[str]:
        return self._get(f"/logs/{date}")["completed"]

    def streak(self) -> int:
        return self._get("/streak")["streak"]

    def progress(self, date: str | None = None) -> int:
        if date is None:
            return self._get("/progress")["progress"]
        return self._get("/progress", date=date)["progress"]

    def week(self) -> list[dict]:
        return self._get("/week")
