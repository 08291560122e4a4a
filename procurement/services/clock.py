"""Workflow timestamps in Indian Standard Time.

Planned dates never fall on a Sunday: the helpers here push those to the
following Monday.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from django.utils import timezone

IST = ZoneInfo("Asia/Kolkata")
SUNDAY = 6


def now() -> datetime:
    """Return the current time as an aware IST datetime."""

    return timezone.now().astimezone(IST)


def skip_sunday(value: datetime) -> datetime:
    local = value.astimezone(IST)
    if local.weekday() == SUNDAY:
        return local + timedelta(days=1)
    return local


def planned_now() -> datetime:
    return skip_sunday(now())


def fiscal_year_code(value: date | datetime | None = None) -> str:
    """Return the ``YY-YY`` code of the April to March fiscal year."""

    if value is None:
        value = now()
    if isinstance(value, datetime):
        value = value.astimezone(IST).date()
    start = value.year if value.month >= 4 else value.year - 1
    return f"{start % 100:02d}-{(start + 1) % 100:02d}"


def format_ist(value: datetime | None, fmt: str = "%d/%m/%Y %H:%M") -> str:
    if value is None:
        return ""
    return value.astimezone(IST).strftime(fmt)


__all__ = ["IST", "now", "planned_now", "skip_sunday", "fiscal_year_code", "format_ist"]
