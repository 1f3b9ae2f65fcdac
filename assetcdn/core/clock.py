"""UTC timestamp helpers shared by the domain services."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_timestamp(previous: Optional[datetime], now: Optional[datetime] = None) -> datetime:
    """Return a timestamp strictly later than ``previous``."""
    current = now or utcnow()
    if previous is None:
        return current
    previous = ensure_utc(previous)
    if current <= previous:
        return previous + timedelta(microseconds=1)
    return current


def http_date(value: datetime) -> str:
    """Format ``value`` as an IMF-fixdate for Last-Modified headers."""
    return format_datetime(ensure_utc(value).replace(microsecond=0), usegmt=True)


__all__ = ["ensure_utc", "http_date", "next_timestamp", "utcnow"]
