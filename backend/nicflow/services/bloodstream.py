from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from nicflow.core.constants import BASELINE_CAP_HOURS, BASELINE_LEVEL_MG
from nicflow.models.insights import BloodstreamStats
from nicflow.services.concentration import IntakeEvent, build_series, total_level
from nicflow.services.math.curves import ensure_utc
from nicflow.services.profiles import ProfileLookup
from nicflow.utils.timezone import start_of_day

logger = logging.getLogger(__name__)


def _round2(value: float) -> float:
    return round(value, 2)


def events_in_window(events: Sequence[IntakeEvent], now: datetime, window_hours: float) -> list[IntakeEvent]:
    since = ensure_utc(now) - timedelta(hours=window_hours)
    return [e for e in events if ensure_utc(e.taken_at) >= since]


def peak_level_between(
    events: Sequence[IntakeEvent],
    start: datetime,
    now: datetime,
    profile_lookup: ProfileLookup,
    step_minutes: float = 5,
) -> float:
    peak = total_level(events, now, profile_lookup).actual
    for point in build_series(events, start, now, step_minutes, profile_lookup, reference_now=now):
        peak = max(peak, point.actual)
    return max(peak, 0.0)


def time_to_baseline_hours(
    events: Sequence[IntakeEvent],
    now: datetime,
    profile_lookup: ProfileLookup,
    baseline_level: float = BASELINE_LEVEL_MG,
    cap_hours: float = BASELINE_CAP_HOURS,
    step_minutes: float = 5,
) -> float:
    """
    Hours from `now` after which the summed level stays at or below
    `baseline_level`, found by sampling the whole cap forward. Doses still
    rising or taken later than `now` keep the level above baseline even when
    the level at `now` is low.

    Returns 0 when no sample exceeds the baseline and `cap_hours` when the
    level is still above it at the cap.
    """
    now = ensure_utc(now)
    cap_minutes = cap_hours * 60
    n_steps = math.ceil(cap_minutes / step_minutes)

    last_above = None
    for i in range(n_steps + 1):
        minutes = min(i * step_minutes, cap_minutes)
        level = total_level(events, now + timedelta(minutes=minutes), profile_lookup).actual
        if level > baseline_level:
            last_above = i

    if last_above is None:
        return 0.0
    if last_above >= n_steps:
        return float(cap_hours)
    return min((last_above + 1) * step_minutes, cap_minutes) / 60


def summarize(
    events: Sequence[IntakeEvent],
    now: datetime,
    profile_lookup: ProfileLookup,
    window_hours: float = 24,
    tz: Optional[ZoneInfo] = None,
    sum_full_history: bool = True,
    baseline_level: float = BASELINE_LEVEL_MG,
    baseline_cap_hours: float = BASELINE_CAP_HOURS,
    baseline_step_minutes: float = 5,
    peak_step_minutes: float = 5,
) -> BloodstreamStats:
    now = ensure_utc(now)
    recent = events_in_window(events, now, window_hours)
    # Restricting to the window drops the tails of older intakes
    level_events = events if sum_full_history else recent

    day_start = start_of_day(now, tz)
    today_count = sum(1 for e in events if day_start <= ensure_utc(e.taken_at) <= now)

    current = total_level(level_events, now, profile_lookup).actual
    peak = peak_level_between(level_events, day_start, now, profile_lookup, peak_step_minutes)
    to_baseline = time_to_baseline_hours(
        level_events,
        now,
        profile_lookup,
        baseline_level=baseline_level,
        cap_hours=baseline_cap_hours,
        step_minutes=baseline_step_minutes,
    )

    logger.debug(
        "Bloodstream stats computed",
        extra={"entries": len(events), "in_window": len(recent)},
    )

    return BloodstreamStats(
        current_level=_round2(current),
        entries_in_window=len(recent),
        total_amount_in_window=_round2(sum(e.amount for e in recent)),
        today_usage_count=today_count,
        peak_level_today=_round2(peak),
        time_to_baseline_hours=_round2(to_baseline),
        window_hours=window_hours,
    )


__all__ = ["events_in_window", "peak_level_between", "summarize", "time_to_baseline_hours"]
