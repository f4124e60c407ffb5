"""Shared helpers for analytics services."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from dateutil.relativedelta import relativedelta

from admissions.core.config import settings
from admissions.utils.dates import ensure_utc, month_start, start_of_day, utcnow, week_start

CENTS = Decimal("0.01")

WINDOW_PRIOR_MONTH = "prior_month"
WINDOW_LAST_4_WEEKS = "last_4_weeks"
KNOWN_WINDOWS = (WINDOW_PRIOR_MONTH, WINDOW_LAST_4_WEEKS)


# ============================================================================
# Zero-guarded arithmetic
# ============================================================================

def to_decimal(value) -> Decimal:
    """Coerce DB aggregates (int, float, str, None) to Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def money(value) -> float:
    """Monetary value as a float rounded to cents (for report payloads)."""
    return float(quantize_money(value))


def safe_ratio(numerator, denominator) -> Decimal:
    """numerator / denominator, or 0 when the denominator is 0."""
    den = to_decimal(denominator)
    if den == 0:
        return Decimal("0")
    return to_decimal(numerator) / den


def safe_rate(numerator, denominator) -> float:
    """Percentage numerator / denominator * 100 rounded to 2 places, 0 when the denominator is 0."""
    ratio = safe_ratio(numerator, denominator)
    return float((ratio * 100).quantize(CENTS, rounding=ROUND_HALF_UP))


def calculate_roi(revenue, spent) -> float:
    """(revenue - spent) / spent * 100; 0 when nothing was spent."""
    spent_dec = to_decimal(spent)
    return safe_rate(to_decimal(revenue) - spent_dec, spent_dec)


# ============================================================================
# Time windows
# ============================================================================

def prior_month_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    """[first day of previous month, first day of current month)."""
    now = ensure_utc(now or utcnow())
    end = start_of_day(month_start(now))
    start = end - relativedelta(months=1)
    return start, end


def trailing_weeks_window(weeks: int, now: datetime | None = None) -> tuple[datetime, datetime]:
    """[now - weeks, now)."""
    now = ensure_utc(now or utcnow())
    return now - timedelta(weeks=weeks), now


def resolve_window(
    start: datetime | None,
    end: datetime | None,
    default: str,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """
    Turn optional bounds into an explicit [start, end) window.

    default is "prior_month" or "last_4_weeks". A single explicit bound is
    kept and the other one is taken from the default window.
    """
    if start and end:
        return ensure_utc(start), ensure_utc(end)
    if default == WINDOW_PRIOR_MONTH:
        default_start, default_end = prior_month_window(now)
    elif default == WINDOW_LAST_4_WEEKS:
        default_start, default_end = trailing_weeks_window(4, now)
    else:
        raise ValueError(f"Unknown default window '{default}'")
    return (
        ensure_utc(start) if start else default_start,
        ensure_utc(end) if end else default_end,
    )


def report_window(
    start: datetime | None, end: datetime | None, now: datetime | None = None
) -> tuple[datetime, datetime]:
    return resolve_window(start, end, settings.REPORT_DEFAULT_WINDOW, now)


def dashboard_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    return trailing_weeks_window(settings.METRICS_WEEKLY_WINDOW_WEEKS, now)


# ============================================================================
# Bucketing
# ============================================================================

def week_starts(start: datetime, end: datetime) -> list[date]:
    """Monday of every ISO week overlapping [start, end)."""
    first = week_start(start)
    last = week_start(ensure_utc(end) - timedelta(microseconds=1))
    weeks = []
    current = first
    while current <= last:
        weeks.append(current)
        current += timedelta(days=7)
    return weeks


def month_starts(start: datetime, end: datetime) -> list[date]:
    """First day of every calendar month overlapping [start, end)."""
    first = month_start(start)
    last = month_start(ensure_utc(end) - timedelta(microseconds=1))
    months = []
    current = first
    while current <= last:
        months.append(current)
        current += relativedelta(months=1)
    return months


def bucket_by_week(
    timestamps: Iterable[datetime], start: datetime, end: datetime
) -> list[dict]:
    """Count timestamps per week; every week in the window is present, zero-filled."""
    counts = {week: 0 for week in week_starts(start, end)}
    for ts in timestamps:
        key = week_start(ts)
        if key in counts:
            counts[key] += 1
    return [{"week_start": week, "count": count} for week, count in counts.items()]


def bucket_by_month(
    timestamps: Iterable[datetime], start: datetime, end: datetime
) -> list[dict]:
    """Count timestamps per calendar month; zero-filled across the window."""
    counts = {month: 0 for month in month_starts(start, end)}
    for ts in timestamps:
        key = month_start(ts)
        if key in counts:
            counts[key] += 1
    return [{"month_start": month, "count": count} for month, count in counts.items()]
