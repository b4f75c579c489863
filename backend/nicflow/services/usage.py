from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from nicflow.models.insights import UsageByHour, UsageByType
from nicflow.services.concentration import IntakeEvent
from nicflow.services.math.curves import ensure_utc
from nicflow.utils.timezone import local_hour

UNTYPED_KIND = "other"


def _empty_buckets() -> dict[str, int]:
    return {str(hour): 0 for hour in range(24)}


def _recent(events: Sequence[IntakeEvent], now: datetime, days: int) -> list[IntakeEvent]:
    since = now - timedelta(days=days)
    return [e for e in events if since <= ensure_utc(e.taken_at) <= now]


def usage_by_hour(
    events: Sequence[IntakeEvent],
    now: datetime,
    days: int = 7,
    tz: Optional[ZoneInfo] = None,
) -> UsageByHour:
    """Entry counts per local hour of day over the trailing `days`."""
    now = ensure_utc(now)
    recent = _recent(events, now, days)

    by_hour = _empty_buckets()
    by_type: dict[str, dict[str, int]] = {}
    for event in recent:
        hour = str(local_hour(event.taken_at, tz))
        kind = event.kind or UNTYPED_KIND
        by_hour[hour] += 1
        by_type.setdefault(kind, _empty_buckets())[hour] += 1

    return UsageByHour(
        days=days,
        total_entries=len(recent),
        by_hour=by_hour,
        by_hour_and_type=by_type,
    )


def usage_by_type(events: Sequence[IntakeEvent], now: datetime, days: int = 30) -> UsageByType:
    now = ensure_utc(now)
    recent = _recent(events, now, days)
    counts = Counter(e.kind or UNTYPED_KIND for e in recent)
    most_common = counts.most_common(1)[0][0] if counts else None
    return UsageByType(
        days=days,
        total_entries=len(recent),
        by_type=dict(counts),
        most_common=most_common,
    )


__all__ = ["usage_by_hour", "usage_by_type"]
