from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.constants import SECONDS_PER_HOUR

# Last representable millisecond of a local day.
END_OF_DAY_TIME = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def end_of_day(day: date, *, tzinfo=None) -> datetime:
    """23:59:59.999 on ``day``, in the same zone as the event that asked for it."""
    return datetime.combine(day, END_OF_DAY_TIME, tzinfo=tzinfo)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def start_of_month(day: date) -> date:
    return day.replace(day=1)
