"""Calendar helpers for month-scoped reports."""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta
from typing import Optional

from ..errors import ValidationError


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a month."""

    if not 1 <= month <= 12:
        raise ValidationError("Validation failed", {"month": ["Month must be between 1 and 12."]})
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(
            "Validation failed", {"year": [f"Year must be between {MINYEAR} and {MAXYEAR}."]}
        )
    start = date(year, month, 1)
    if month == 12:
        return start, date(year, 12, 31)
    return start, date(year, month + 1, 1) - timedelta(days=1)


def parse_month_key(value: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` key into (year, month)."""

    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except (AttributeError, ValueError) as exc:
        raise ValidationError(
            "Validation failed", {"month": ["Month must use the YYYY-MM format."]}
        ) from exc
    return parsed.year, parsed.month


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def current_time_label(now: Optional[datetime] = None) -> str:
    """Local time of day as ``hh:mm AM/PM``."""

    return (now or datetime.now()).strftime("%I:%M %p")
