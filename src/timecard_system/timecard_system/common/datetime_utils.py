from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 datetime, keeping the wall-clock value as given.

    A trailing 'Z' is accepted; the result is then UTC-aware. No conversion
    to local time happens here.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_clock_time(value: str) -> time:
    """Parse a 24-hour HH:MM (or HH:MM:SS) string."""
    value = value.strip()
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def overnight_interval(work_date: date, start: time, end: time) -> tuple[datetime, datetime]:
    """Combine wall-clock times with a date, moving end to the next day when
    it is not after start (e.g. 22:00 -> 05:00)."""
    start_dt = datetime.combine(work_date, start)
    end_dt = datetime.combine(work_date, end)
    if end_dt <= start_dt:
        end_dt += timedelta(days=1)
    return start_dt, end_dt


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
