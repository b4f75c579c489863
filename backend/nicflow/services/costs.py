from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from nicflow.models.insights import CostStats
from nicflow.services.concentration import IntakeEvent
from nicflow.services.math.curves import ensure_utc


def cost_stats(events: Sequence[IntakeEvent], now: datetime) -> CostStats:
    """Spend over the trailing 1, 7 and 30 days. Boundaries are inclusive."""
    now = ensure_utc(now)
    day_ago = now - timedelta(days=1)
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)

    daily = weekly = monthly = 0.0
    for event in events:
        cost = event.cost or 0.0
        ts = ensure_utc(event.taken_at)
        if ts >= month_ago:
            monthly += cost
            if ts >= week_ago:
                weekly += cost
                if ts >= day_ago:
                    daily += cost

    return CostStats(
        daily=round(daily, 2),
        weekly=round(weekly, 2),
        monthly=round(monthly, 2),
    )


__all__ = ["cost_stats"]
