from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time {value!r} (expected HH:MM)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def week_start(day: date, *, first_weekday: int) -> date:
    """First day of the week containing ``day``.

    ``first_weekday`` uses ``date.weekday()`` numbering (0 = Monday, 6 = Sunday).
    """
    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def month_bounds(day: date) -> tuple[date, date]:
    first = day.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)
