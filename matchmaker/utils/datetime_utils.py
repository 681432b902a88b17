"""Datetime helpers.

All timestamps are handled as timezone-aware UTC values. SQLite drops the
offset on the way back, so values read from the database go through
``as_utc`` before being compared.
"""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Get the current UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_future(value: datetime, now: datetime | None = None) -> bool:
    """Check that ``value`` is strictly later than ``now``."""
    return as_utc(value) > (now or utcnow())
