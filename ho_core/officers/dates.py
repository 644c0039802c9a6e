# ho_core/officers/dates.py
"""
Date engine for rotation tracking.

Everything here is local-date arithmetic over ``datetime.date`` values. Callers
may pass ``today`` explicitly; otherwise the current date in the configured
TIME_ZONE is used.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from django.utils import timezone
from django.utils.dateparse import parse_date

from ho_core.officers.constants import ROTATION_WEEKS, UPCOMING_WINDOW_DAYS, TimelineColor


def _today(today: Optional[date]) -> date:
    return today if today is not None else timezone.localdate()


def parse_iso_date(value) -> Optional[date]:
    """
    Accepts a date, a datetime, an ISO 'YYYY-MM-DD' string or an empty value.
    Raises ValueError for malformed strings.
    """
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_date(str(value).strip()[:10])
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r}. Use YYYY-MM-DD.")
    return parsed


def format_date(value: Optional[date]) -> str:
    """'Mar 06, 2025' style, or '' when unset."""
    if value is None:
        return ""
    return f"{value:%b %d, %Y}"


def calculate_sign_out_date(sign_in: date) -> date:
    return sign_in + timedelta(weeks=ROTATION_WEEKS)


def is_upcoming(value: Optional[date], window: int = UPCOMING_WINDOW_DAYS, today: Optional[date] = None) -> bool:
    """True iff today < value < today + window (both ends exclusive)."""
    if value is None:
        return False
    now = _today(today)
    return now < value < now + timedelta(days=window)


def get_days_until_date(value: date, today: Optional[date] = None) -> int:
    """Signed whole days from today; negative means the date has passed."""
    return (value - _today(today)).days


def get_timeline_color(value: date, today: Optional[date] = None) -> TimelineColor:
    days = get_days_until_date(value, today)
    if days < 0:
        return TimelineColor.PAST
    if days <= 7:
        return TimelineColor.URGENT
    if days <= 14:
        return TimelineColor.WARNING
    return TimelineColor.OK


def get_timeline_progress(start: date, target: date, today: Optional[date] = None) -> float:
    """
    Percentage of the start..target span already elapsed, clamped to [0, 100].
    A zero-length span counts as complete once it has started.
    """
    now = _today(today)
    total = (target - start).days
    if total == 0:
        return 100.0 if now >= start else 0.0

    elapsed = (now - start).days
    pct = elapsed / total * 100
    return float(min(100.0, max(0.0, pct)))
