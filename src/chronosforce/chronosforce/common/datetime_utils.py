from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: str) -> time:
    """Parse a HH:MM wall-clock string."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time {value!r} (expected HH:MM)")


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def utc_now() -> datetime:
    """Current instant, timezone-aware UTC.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def load_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown time zone: {name!r}")


def as_utc(value: datetime) -> datetime:
    """Coerce a datetime to aware UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_org_time(value: datetime, zone: ZoneInfo) -> datetime:
    return as_utc(value).astimezone(zone)


def org_date(value: datetime, zone: ZoneInfo) -> date:
    """Organisational calendar day the instant falls on."""
    return to_org_time(value, zone).date()


def org_day_bounds(day: date, zone: ZoneInfo) -> tuple[datetime, datetime]:
    """UTC [start, end) of an organisational day.

    Computed from local midnights so DST days are 23 or 25 hours long.
    """
    start_local = datetime.combine(day, time.min, tzinfo=zone)
    next_day = date.fromordinal(day.toordinal() + 1)
    end_local = datetime.combine(next_day, time.min, tzinfo=zone)
    return start_local.astimezone(timezone.utc), end_local.astimezone(timezone.utc)


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, never negative."""
    seconds = (as_utc(end) - as_utc(start)).total_seconds()
    return max(int(seconds // 60), 0)
