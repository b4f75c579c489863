from __future__ import annotations

from typing import Callable, Literal, Mapping, Optional

from nicflow.core.constants import (
    DEFAULT_NICOTINE_MG,
    DEVICE_ABSORPTION_TABLE,
    NICOTINE_HALF_LIFE_HOURS,
)
from nicflow.services.math.curves import AbsorptionProfile

LevelModel = Literal["simple", "absorption"]
ProfileLookup = Callable[[Optional[str]], AbsorptionProfile]


class ProfileTable:
    """
    Explicit kind -> AbsorptionProfile mapping with a fallback for unknown
    or missing kinds. Instances are callable so they can be passed wherever
    a ProfileLookup is expected.
    """

    def __init__(self, profiles: Mapping[str, AbsorptionProfile], fallback: AbsorptionProfile | None = None):
        self._profiles = dict(profiles)
        self._fallback = fallback or AbsorptionProfile()

    def __call__(self, kind: Optional[str]) -> AbsorptionProfile:
        if kind is None:
            return self._fallback
        return self._profiles.get(kind.lower(), self._fallback)

    def kinds(self) -> list[str]:
        return sorted(self._profiles)


def simple_decay_table(half_life_hours: float = NICOTINE_HALF_LIFE_HOURS) -> ProfileTable:
    profiles = {
        kind: AbsorptionProfile(half_life_hours=half_life_hours, default_amount=mg)
        for kind, mg in DEFAULT_NICOTINE_MG.items()
    }
    return ProfileTable(profiles, fallback=AbsorptionProfile(half_life_hours=half_life_hours))


def device_absorption_table(half_life_hours: float = NICOTINE_HALF_LIFE_HOURS) -> ProfileTable:
    profiles = {
        kind: AbsorptionProfile(half_life_hours=half_life_hours, default_amount=mg)
        for kind, mg in DEFAULT_NICOTINE_MG.items()
    }
    for device, (peak_time, peak_factor, mg) in DEVICE_ABSORPTION_TABLE.items():
        profiles[device] = AbsorptionProfile(
            half_life_hours=half_life_hours,
            peak_time_hours=peak_time,
            peak_factor=peak_factor,
            default_amount=mg,
        )
    return ProfileTable(profiles, fallback=AbsorptionProfile(half_life_hours=half_life_hours))


def get_profile_lookup(model: LevelModel, half_life_hours: float = NICOTINE_HALF_LIFE_HOURS) -> ProfileTable:
    if model == "absorption":
        return device_absorption_table(half_life_hours)
    return simple_decay_table(half_life_hours)


__all__ = [
    "LevelModel",
    "ProfileLookup",
    "ProfileTable",
    "device_absorption_table",
    "get_profile_lookup",
    "simple_decay_table",
]
