"""Date and time helpers. Every timestamp in the system is UTC."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def week_start(value: datetime) -> date:
    """Monday of the ISO week containing value."""
    day = ensure_utc(value).date()
    return day - timedelta(days=day.weekday())


def month_start(value: datetime) -> date:
    return ensure_utc(value).date().replace(day=1)
