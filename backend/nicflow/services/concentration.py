from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional, Sequence

from nicflow.services.math.curves import contribution, ensure_utc
from nicflow.services.profiles import ProfileLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntakeEvent:
    amount: float
    taken_at: datetime
    kind: Optional[str] = None
    cost: Optional[float] = None


@dataclass(frozen=True)
class SimulatedEvent:
    """Hypothetical intake previewed before it is logged."""
    taken_at: datetime
    kind: Optional[str] = None
    amount: Optional[float] = None


@dataclass(frozen=True)
class ConcentrationLevel:
    actual: float
    projected: float


@dataclass(frozen=True)
class SamplePoint:
    timestamp: datetime
    actual: float
    projected: float
    is_future: bool

    @property
    def level(self) -> float:
        return self.actual


def _parse_timestamp(ts: str) -> datetime:
    try:
        dt = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    except ValueError:
        dt = datetime.strptime(ts, "%Y-%m-%dT%H:%M:%S")
    return ensure_utc(dt)


def events_from_records(records: Iterable[dict]) -> list[IntakeEvent]:
    """
    Build events from decoded store rows. Accepts `amount`, `nicotineMg` or
    `calories` for the quantity and `timestamp` or `takenAt` for the time.
    Rows without a quantity or a time are skipped.
    """
    events: list[IntakeEvent] = []
    for record in records:
        amount = record.get("amount", record.get("nicotineMg", record.get("calories")))
        ts = record.get("timestamp", record.get("takenAt"))
        if amount is None or ts is None:
            continue
        taken_at = ts if isinstance(ts, datetime) else _parse_timestamp(str(ts))
        cost = record.get("cost")
        events.append(IntakeEvent(
            amount=float(amount),
            taken_at=ensure_utc(taken_at),
            kind=record.get("type", record.get("kind")),
            cost=float(cost) if cost is not None else None,
        ))
    return events


def _simulated_contribution(simulated: SimulatedEvent, sample_time: datetime, profile_lookup: ProfileLookup) -> float:
    profile = profile_lookup(simulated.kind)
    amount = simulated.amount
    if amount is None:
        amount = profile.default_amount or 0.0
    return contribution(amount, simulated.taken_at, sample_time, profile)


def total_level(
    events: Sequence[IntakeEvent],
    sample_time: datetime,
    profile_lookup: ProfileLookup,
    simulated_event: Optional[SimulatedEvent] = None,
) -> ConcentrationLevel:
    actual = 0.0
    for event in events:
        actual += contribution(event.amount, event.taken_at, sample_time, profile_lookup(event.kind))

    projected = actual
    if simulated_event is not None:
        projected += _simulated_contribution(simulated_event, sample_time, profile_lookup)
    return ConcentrationLevel(actual=actual, projected=projected)


def build_series(
    events: Sequence[IntakeEvent],
    start: datetime,
    end: datetime,
    step_minutes: float,
    profile_lookup: ProfileLookup,
    simulated_event: Optional[SimulatedEvent] = None,
    reference_now: Optional[datetime] = None,
) -> Iterator[SamplePoint]:
    """
    Yields one SamplePoint every `step_minutes` from `start` to `end`
    inclusive. Non-positive steps and inverted ranges yield nothing.
    """
    if step_minutes <= 0:
        return
    start = ensure_utc(start)
    end = ensure_utc(end)
    now = ensure_utc(reference_now) if reference_now is not None else end
    step = timedelta(minutes=step_minutes)

    i = 0
    sample_time = start
    while sample_time <= end:
        level = total_level(events, sample_time, profile_lookup, simulated_event)
        yield SamplePoint(
            timestamp=sample_time,
            actual=level.actual,
            projected=level.projected,
            is_future=sample_time > now,
        )
        i += 1
        # Offset from start avoids drift from repeated addition
        sample_time = start + step * i


def level_series(
    events: Sequence[IntakeEvent],
    now: datetime,
    hours: float,
    interval_minutes: float,
    profile_lookup: ProfileLookup,
) -> list[SamplePoint]:
    now = ensure_utc(now)
    since = now - timedelta(hours=hours)
    logger.debug("Building level series", extra={"hours": hours, "interval_minutes": interval_minutes})
    return list(build_series(events, since, now, interval_minutes, profile_lookup, reference_now=now))


def _floor_to_hour(dt: datetime) -> datetime:
    return dt.replace(minute=0, second=0, microsecond=0)


def preview_series(
    events: Sequence[IntakeEvent],
    now: datetime,
    hours_past: float,
    hours_future: float,
    profile_lookup: ProfileLookup,
    simulated_event: Optional[SimulatedEvent] = None,
    step_minutes: float = 5,
) -> list[SamplePoint]:
    """Chart window around `now`, both ends snapped to the top of the hour."""
    now = ensure_utc(now)
    start = _floor_to_hour(now - timedelta(hours=hours_past))
    end = _floor_to_hour(now + timedelta(hours=hours_future))
    return list(build_series(events, start, end, step_minutes, profile_lookup, simulated_event, reference_now=now))


__all__ = [
    "ConcentrationLevel",
    "IntakeEvent",
    "SamplePoint",
    "SimulatedEvent",
    "build_series",
    "events_from_records",
    "level_series",
    "preview_series",
    "total_level",
]
