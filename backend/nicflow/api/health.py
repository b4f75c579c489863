from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, Request

from nicflow import __version__
from nicflow.core.settings import get_settings, Settings

router = APIRouter()

_start_time = datetime.now(timezone.utc)


def _uptime_seconds() -> float:
    return (datetime.now(timezone.utc) - _start_time).total_seconds()


@router.api_route("/", methods=["GET", "HEAD"], summary="Liveness probe", response_model=None)
async def health(request: Request):
    if request.method == "HEAD":
        return Response(status_code=200)
    return {"ok": True}


@router.get("/full", summary="Full health check")
async def full_health(
    settings: Settings = Depends(get_settings),
) -> dict:
    engine = settings.engine
    return {
        "ok": True,
        "uptime_seconds": _uptime_seconds(),
        "version": __version__,
        "engine": {
            "model": engine.default_model,
            "half_life_hours": engine.half_life_hours,
            "window_hours": engine.window_hours,
            "baseline_level": engine.baseline_level,
        },
        "timezone": settings.locale.timezone,
    }
