"""
Time helpers for the domain layer.

All domain timestamps are timezone-aware UTC. SQLite hands DATETIME values
back without tzinfo, so anything naive is interpreted as UTC.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive values are assumed UTC)"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a trailing Z, e.g. 2025-12-20T12:00:00.000Z"""
    return ensure_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
