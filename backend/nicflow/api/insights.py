import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from nicflow.core.settings import Settings, get_settings
from nicflow.models.entries import InsightsRequest, PreviewRequest
from nicflow.models.insights import (
    BloodstreamStats,
    CostStats,
    LevelSeriesResponse,
    PreviewPoint,
    PreviewResponse,
    SeriesPoint,
    UsageByHour,
    UsageByType,
)
from nicflow.services.bloodstream import summarize
from nicflow.services.concentration import level_series, preview_series, total_level
from nicflow.services.costs import cost_stats
from nicflow.services.profiles import ProfileTable, get_profile_lookup
from nicflow.services.usage import usage_by_hour, usage_by_type
from nicflow.utils.timezone import get_timezone

logger = logging.getLogger(__name__)

router = APIRouter()


def clamp_int(value: Optional[int], low: int, high: int, default: int) -> int:
    if value is None:
        return default
    return max(low, min(high, value))


def resolve_profiles(payload: InsightsRequest, settings: Settings) -> ProfileTable:
    model = payload.model or settings.engine.default_model
    return get_profile_lookup(model, settings.engine.half_life_hours)


@router.post("/bloodstream", response_model=BloodstreamStats, summary="Current level, peak and time to baseline")
async def bloodstream_stats(
    payload: InsightsRequest,
    settings: Settings = Depends(get_settings),
):
    engine = settings.engine
    return summarize(
        payload.events(),
        payload.resolved_now(),
        resolve_profiles(payload, settings),
        window_hours=engine.window_hours,
        tz=get_timezone(settings.locale.timezone),
        sum_full_history=engine.sum_full_history,
        baseline_level=engine.baseline_level,
        baseline_cap_hours=engine.baseline_cap_hours,
        baseline_step_minutes=engine.baseline_step_minutes,
        peak_step_minutes=engine.peak_step_minutes,
    )


@router.post("/costs", response_model=CostStats, summary="Daily, weekly and monthly spend")
async def costs(payload: InsightsRequest):
    return cost_stats(payload.events(), payload.resolved_now())


@router.post("/level-series", response_model=LevelSeriesResponse, summary="Historical bloodstream level series")
async def get_level_series(
    payload: InsightsRequest,
    hours: Optional[int] = Query(None, description="Lookback window, clamped to 1-168"),
    interval_minutes: Optional[int] = Query(None, description="Sampling interval, clamped to 5-240"),
    settings: Settings = Depends(get_settings),
):
    safe_hours = clamp_int(hours, 1, 168, default=24)
    safe_interval = clamp_int(interval_minutes, 5, 240, default=30)

    points = level_series(
        payload.events(),
        payload.resolved_now(),
        safe_hours,
        safe_interval,
        resolve_profiles(payload, settings),
    )
    return LevelSeriesResponse(
        hours=safe_hours,
        interval_minutes=safe_interval,
        points=[SeriesPoint(timestamp=p.timestamp, level=round(p.actual, 2)) for p in points],
    )


@router.post("/preview", response_model=PreviewResponse, summary="Actual vs projected curve for a not-yet-logged intake")
async def get_preview(
    payload: PreviewRequest,
    hours_past: Optional[int] = Query(None, description="Clamped to 1-48"),
    hours_future: Optional[int] = Query(None, description="Clamped to 1-48"),
    settings: Settings = Depends(get_settings),
):
    safe_past = clamp_int(hours_past, 1, 48, default=12)
    safe_future = clamp_int(hours_future, 1, 48, default=12)
    step = 5

    now = payload.resolved_now()
    events = payload.events()
    profiles = resolve_profiles(payload, settings)
    simulated = payload.simulated.to_event(now) if payload.simulated else None

    points = preview_series(events, now, safe_past, safe_future, profiles, simulated, step_minutes=step)
    peak = max((max(p.actual, p.projected) for p in points), default=0.0)

    return PreviewResponse(
        hours_past=safe_past,
        hours_future=safe_future,
        step_minutes=step,
        current_level=round(total_level(events, now, profiles).actual, 2),
        peak_level=round(peak, 2),
        points=[
            PreviewPoint(
                timestamp=p.timestamp,
                actual=round(max(0.0, p.actual), 2),
                projected=round(max(0.0, p.projected), 2),
                is_future=p.is_future,
            )
            for p in points
        ],
    )


@router.post("/usage-by-hour", response_model=UsageByHour, summary="Entries per local hour of day")
async def get_usage_by_hour(
    payload: InsightsRequest,
    days: Optional[int] = Query(None, description="Clamped to 1-90"),
    settings: Settings = Depends(get_settings),
):
    safe_days = clamp_int(days, 1, 90, default=7)
    return usage_by_hour(
        payload.events(),
        payload.resolved_now(),
        safe_days,
        tz=get_timezone(settings.locale.timezone),
    )


@router.post("/usage-by-type", response_model=UsageByType, summary="Entries per product type")
async def get_usage_by_type(
    payload: InsightsRequest,
    days: Optional[int] = Query(None, description="Clamped to 1-365"),
):
    safe_days = clamp_int(days, 1, 365, default=30)
    return usage_by_type(payload.events(), payload.resolved_now(), safe_days)
