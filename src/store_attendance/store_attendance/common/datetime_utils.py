from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def get_zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def now_local(tz: ZoneInfo) -> datetime:
    """Current time in the attendance time zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)


def whole_minutes(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Convert an aware timestamp to naive UTC for DATETIME columns."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_naive_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)
