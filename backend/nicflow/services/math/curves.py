from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class AbsorptionProfile:
    """
    Shape of the bloodstream curve for one kind of intake.

    half_life_hours : time for the level to halve once decay has started
    peak_time_hours : length of the linear rise phase (0 = decay starts at intake)
    peak_factor     : bioavailable fraction of the nominal amount at peak
    default_amount  : nominal dose used when a previewed intake states no amount
    """
    half_life_hours: float = 2.0
    peak_time_hours: float = 0.0
    peak_factor: float = 1.0
    default_amount: float | None = None


def ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def hours_between(start: datetime, end: datetime) -> float:
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / SECONDS_PER_HOUR


class NicotineCurves:
    """
    Single-dose bloodstream curves, expressed as the remaining level for a
    dose of 1 unit at `t_hours` after intake.
    """

    @staticmethod
    def decay_fraction(t_hours: float, half_life_hours: float) -> float:
        return 0.5 ** (t_hours / half_life_hours)

    @staticmethod
    def simple_decay(t_hours: float, profile: AbsorptionProfile) -> float:
        if t_hours < 0: return 0.0
        return profile.peak_factor * NicotineCurves.decay_fraction(t_hours, profile.half_life_hours)

    @staticmethod
    def rise_then_decay(t_hours: float, profile: AbsorptionProfile) -> float:
        if t_hours < 0: return 0.0
        peak_time = profile.peak_time_hours
        if t_hours < peak_time:
            # Linear absorption up to the peak
            return profile.peak_factor * (t_hours / peak_time)
        return profile.peak_factor * NicotineCurves.decay_fraction(t_hours - peak_time, profile.half_life_hours)

    @staticmethod
    def get_level(t_hours: float, profile: AbsorptionProfile) -> float:
        if profile.peak_time_hours and profile.peak_time_hours > 0:
            return NicotineCurves.rise_then_decay(t_hours, profile)
        return NicotineCurves.simple_decay(t_hours, profile)


def contribution(amount: float, taken_at: datetime, sample_time: datetime, profile: AbsorptionProfile) -> float:
    """Level contributed at `sample_time` by `amount` taken at `taken_at`."""
    t_hours = hours_between(taken_at, sample_time)
    return amount * NicotineCurves.get_level(t_hours, profile)


__all__ = ["AbsorptionProfile", "NicotineCurves", "contribution", "ensure_utc", "hours_between"]
