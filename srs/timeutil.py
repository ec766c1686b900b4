"""UTC time helpers. All scheduling dates are UTC calendar days."""

from datetime import date, datetime, time, timezone
from typing import Optional, Union

Instant = Union[datetime, date]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Instant) -> datetime:
    """
    Normalise to a timezone-aware UTC datetime.

    Naive datetimes are taken to already be UTC; a bare date means UTC midnight.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise TypeError(f"Expected datetime or date, got {type(value).__name__}")


def resolve_now(value: Optional[Instant] = None) -> datetime:
    """Caller-supplied instant if given, else the wall clock."""
    return utc_now() if value is None else as_utc(value)


def utc_date(value: Optional[Instant] = None) -> date:
    return resolve_now(value).date()


def parse_datetime(text: str) -> datetime:
    """Parse an ISO-8601 timestamp (trailing 'Z' allowed) into UTC."""
    text = text.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return as_utc(datetime.fromisoformat(text))
