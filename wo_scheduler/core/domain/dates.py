from __future__ import annotations

from datetime import date, datetime, timedelta

from wo_scheduler.core.exceptions import ValidationError


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=int(n))


def days_between(a: date, b: date) -> int:
    """Signed whole days from a to b (b - a)."""
    return (b - a).days


def inclusive_duration(start: date, end: date) -> int:
    """Calendar days covered by an inclusive [start, end] range, never below 1."""
    return max(1, days_between(start, end) + 1)


def format_date(d: date | None) -> str:
    return "Invalid" if d is None else d.isoformat()


def parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    try:
        # tolerate full ISO timestamps ("2024-03-01T00:00:00.000Z")
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"Invalid date value: {value!r}", code="INVALID_DATE") from None


__all__ = ["add_days", "days_between", "inclusive_duration", "format_date", "parse_date"]
