import datetime


class DateTools:
    """Calendar-day helpers used as the only time source of the tracker."""

    KEY_FORMAT = "%Y-%m-%d"

    @staticmethod
    def today() -> datetime.date:
        """Return the current local calendar date."""
        return datetime.date.today()

    @staticmethod
    def days_before(day: datetime.date, days: int) -> datetime.date:
        """Return the calendar date ``days`` days before ``day``."""
        return day - datetime.timedelta(days=days)

    @staticmethod
    def to_key(day: datetime.date) -> str:
        return day.isoformat()

    @classmethod
    def parse(cls, value: str | datetime.date) -> datetime.date:
        """Normalize ``value`` to a ``datetime.date``.

        Datetimes are truncated to their date part. Strings must be in
        ``YYYY-MM-DD`` form, otherwise ``ValueError`` is raised.
        """
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unsupported date value: {value!r}")
        text = value.strip()
        try:
            day = datetime.datetime.strptime(text, cls.KEY_FORMAT).date()
        except ValueError:
            raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
        if day.isoformat() != text:
            raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
        return day

    @classmethod
    def window(cls, end: datetime.date, days: int) -> list[datetime.date]:
        """Return ``days`` consecutive dates ending at ``end``, oldest first."""
        return [cls.days_before(end, offset) for offset in range(days - 1, -1, -1)]
