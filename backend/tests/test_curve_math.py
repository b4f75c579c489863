from datetime import datetime, timedelta, timezone
import math

import pytest

from nicflow.services.math.curves import AbsorptionProfile, NicotineCurves, contribution, hours_between

T0 = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def test_simple_decay_starts_at_full_amount():
    profile = AbsorptionProfile(half_life_hours=2)
    assert contribution(10.0, T0, T0, profile) == pytest.approx(10.0)


def test_half_life_exactness():
    profile = AbsorptionProfile(half_life_hours=2)
    assert contribution(10.0, T0, T0 + timedelta(hours=2), profile) == pytest.approx(5.0)
    assert contribution(10.0, T0, T0 + timedelta(hours=4), profile) == pytest.approx(2.5)


def test_simple_decay_strictly_decreasing():
    profile = AbsorptionProfile(half_life_hours=2)
    values = [
        contribution(4.0, T0, T0 + timedelta(minutes=mins), profile)
        for mins in range(0, 12 * 60 + 1, 15)
    ]
    assert all(a > b for a, b in zip(values, values[1:]))


def test_no_time_travel():
    simple = AbsorptionProfile(half_life_hours=2)
    rising = AbsorptionProfile(half_life_hours=2, peak_time_hours=0.5, peak_factor=0.8)
    assert contribution(10.0, T0, T0 - timedelta(hours=1), simple) == 0.0
    assert contribution(10.0, T0, T0 - timedelta(seconds=1), rising) == 0.0


def test_rise_phase_boundaries():
    profile = AbsorptionProfile(half_life_hours=2, peak_time_hours=0.5, peak_factor=0.8)
    assert contribution(10.0, T0, T0, profile) == pytest.approx(0.0)
    assert contribution(10.0, T0, T0 + timedelta(minutes=15), profile) == pytest.approx(4.0)
    assert contribution(10.0, T0, T0 + timedelta(minutes=30), profile) == pytest.approx(8.0)
    assert contribution(10.0, T0, T0 + timedelta(minutes=30 + 120), profile) == pytest.approx(4.0)


def test_peak_factor_scales_simple_decay():
    profile = AbsorptionProfile(half_life_hours=2, peak_factor=0.5)
    assert contribution(10.0, T0, T0, profile) == pytest.approx(5.0)
    assert contribution(10.0, T0, T0 + timedelta(hours=2), profile) == pytest.approx(2.5)


def test_get_level_dispatches_on_peak_time():
    rising = AbsorptionProfile(half_life_hours=2, peak_time_hours=1.0)
    assert NicotineCurves.get_level(0.5, rising) == pytest.approx(0.5)
    assert NicotineCurves.get_level(0.5, AbsorptionProfile()) == pytest.approx(0.5 ** 0.25)


def test_nan_amount_propagates():
    profile = AbsorptionProfile(half_life_hours=2)
    assert math.isnan(contribution(float("nan"), T0, T0 + timedelta(hours=1), profile))


def test_hours_between_treats_naive_as_utc():
    naive = datetime(2024, 5, 15, 10, 0)
    assert hours_between(naive, T0) == pytest.approx(2.0)
