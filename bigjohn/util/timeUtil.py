from datetime import date, datetime, timedelta, timezone
from typing import List, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utcnow().date()


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    SQLite hands timezone aware columns back as naive datetimes. Everything we
    store is UTC, so a naive value is tagged as UTC rather than converted.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def last_n_days(n: int, today: Optional[date] = None) -> List[date]:
    # ascending, today inclusive
    today = today or utc_today()
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]


def millis_timestamp() -> int:
    return int(utcnow().timestamp() * 1000)
