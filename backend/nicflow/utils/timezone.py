from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE = "UTC"


def get_timezone(name: Optional[str] = None) -> ZoneInfo:
    """
    Returns the configured timezone, UTC when the name is unknown.
    """
    try:
        return ZoneInfo(name or DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def to_local(dt: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """
    Converts a datetime to the local timezone.
    Assumes naive datetimes are UTC.
    """
    if tz is None:
        tz = get_timezone()

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(tz)


def start_of_day(dt: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """
    Local midnight of the day containing `dt`, returned in UTC.
    """
    local_dt = to_local(dt, tz)
    midnight = local_dt.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


def local_hour(dt: datetime, tz: Optional[ZoneInfo] = None) -> int:
    return to_local(dt, tz).hour
