from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse a YYYY-MM-DD string (or a full ISO timestamp) into a date.

    Timestamps are truncated to their calendar day.
    """
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name} (expected YYYY-MM-DD)", fields=[field_name])
    v = (value or "").strip()
    if not v:
        raise ValidationError(f"{field_name} is required", fields=[field_name])
    try:
        if len(v) > 10:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return datetime.strptime(v, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name} (expected YYYY-MM-DD)", fields=[field_name])


def to_day(value: Union[date, datetime, None], *, default: Optional[date] = None) -> date:
    """Normalize a date/datetime to a day-granularity key."""
    if value is None:
        return default or today_local()
    if isinstance(value, datetime):
        return value.date()
    return value


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
