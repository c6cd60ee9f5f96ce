"""Cadence period boundaries, UTC only (never local time)."""

from __future__ import annotations

import calendar
import math
from datetime import datetime, time, timedelta, timezone

from goalpulse.goals.models import Cadence, PeriodBounds

ONE_DAY = timedelta(days=1)
ONE_HOUR = timedelta(hours=1)
ONE_MS = timedelta(milliseconds=1)


def as_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _midnight(dt: datetime) -> datetime:
    return datetime.combine(dt.date(), time.min, tzinfo=timezone.utc)


def period_window(cadence: Cadence, now: datetime) -> tuple[datetime, datetime]:
    """Return (start, end) of the period containing `now`; end is inclusive (…23:59:59.999)."""
    now = as_utc(now)
    today = _midnight(now)

    if cadence == Cadence.DAILY:
        start = today
        days = 1
    elif cadence == Cadence.WEEKLY:
        # datetime.weekday(): Monday == 0 … Sunday == 6
        start = today - timedelta(days=now.weekday())
        days = 7
    else:
        start = today.replace(day=1)
        _, days = calendar.monthrange(now.year, now.month)

    end = start + timedelta(days=days) - ONE_MS
    return start, end


def compute_period_bounds(cadence: Cadence, now: datetime) -> PeriodBounds:
    """Period bounds plus day counts for `now`.

    days_elapsed counts completed whole days (floor), clamped to [0, days_total].
    """
    now = as_utc(now)
    start, end = period_window(cadence, now)

    days_total = max(1, math.ceil((end - start) / ONE_DAY))
    days_elapsed = min(max((now - start) // ONE_DAY, 0), days_total)
    days_remaining = max(0, days_total - days_elapsed)
    hours_remaining = max(0, (end - now) // ONE_HOUR)

    return PeriodBounds(
        start=start,
        end=end,
        days_total=days_total,
        days_elapsed=days_elapsed,
        days_remaining=days_remaining,
        hours_remaining=hours_remaining,
    )


def in_period(ts: datetime, bounds: PeriodBounds) -> bool:
    ts = as_utc(ts)
    return bounds.start <= ts <= bounds.end
