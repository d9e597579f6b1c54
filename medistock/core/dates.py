from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return date.fromisoformat(value_text)
        except ValueError:
            try:
                return datetime.fromisoformat(value_text).date()
            except ValueError:
                return None
    return None


def start_of_day(now: datetime, days_back: int = 0) -> datetime:
    """Local midnight of ``now``'s calendar day, shifted back ``days_back`` days.

    A naive ``now`` is read as local time so the result compares with stored
    UTC timestamps.
    """
    if now.tzinfo is None:
        now = now.astimezone()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days_back)


def days_until(target: date, today: date) -> int:
    return (target - today).days
