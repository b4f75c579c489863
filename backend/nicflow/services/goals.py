from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Sequence

from nicflow.models.goals import Goal, GoalProgress
from nicflow.services.concentration import IntakeEvent
from nicflow.services.math.curves import ensure_utc

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0


def _days_ceil(start: datetime, end: datetime) -> int:
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def _daily_limit_progress(goal: Goal, events: Sequence[IntakeEvent], now: datetime) -> GoalProgress:
    day_ago = now - timedelta(hours=24)
    current = sum(e.amount for e in events if ensure_utc(e.taken_at) >= day_ago)

    progress = GoalProgress(current_value=round(current, 2))
    target = goal.target_value
    if target is None:
        return progress

    if target <= 0:
        # Abstinence limit: any use fills it
        progress.percent_complete = 100.0 if current > 0 else 0.0
    else:
        progress.percent_complete = round(min(100.0, current / target * 100), 2)
    progress.on_track = current <= target
    return progress


def _time_based_progress(goal: Goal, now: datetime) -> GoalProgress:
    if goal.target_date is None:
        return GoalProgress()

    start = ensure_utc(goal.start_date)
    target = ensure_utc(goal.target_date)
    total_days = _days_ceil(start, target)
    days_passed = max(0, _days_ceil(start, now))

    if total_days <= 0:
        # Target on or before start: nothing left to wait for
        return GoalProgress(
            current_value=days_passed,
            percent_complete=100.0,
            on_track=now < target,
            days_remaining=0,
        )

    return GoalProgress(
        current_value=days_passed,
        percent_complete=round(min(100.0, days_passed / total_days * 100), 2),
        on_track=now < target,
        days_remaining=max(0, total_days - days_passed),
    )


def goal_progress(goal: Goal, window_events: Sequence[IntakeEvent], now: datetime) -> GoalProgress:
    """
    Derived progress for a goal. Under-specified goals (no target value or
    target date) return zeroed progress instead of raising.
    """
    now = ensure_utc(now)
    if goal.goal_type == "daily_limit":
        return _daily_limit_progress(goal, window_events, now)
    if goal.goal_type in ("reduction", "quit_date"):
        return _time_based_progress(goal, now)

    logger.warning("Unknown goal type", extra={"goal_type": goal.goal_type})
    return GoalProgress()


__all__ = ["goal_progress"]
