from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from nicflow.services.concentration import IntakeEvent
from nicflow.services.usage import usage_by_hour, usage_by_type


def _at(hour, kind=None, day=15):
    return IntakeEvent(amount=1.0, taken_at=datetime(2024, 5, day, hour, 10, tzinfo=timezone.utc), kind=kind)


def test_usage_by_hour_buckets(now):
    events = [_at(8, "vape"), _at(8, "vape"), _at(8, "cigarette"), _at(13), _at(9, day=1)]
    usage = usage_by_hour(events, now, days=7)

    assert usage.days == 7
    assert usage.total_entries == 4
    assert set(usage.by_hour) == {str(h) for h in range(24)}
    assert usage.by_hour["8"] == 3
    assert usage.by_hour["13"] == 1
    assert usage.by_hour["9"] == 0
    assert usage.by_hour_and_type["vape"]["8"] == 2
    assert usage.by_hour_and_type["cigarette"]["8"] == 1
    assert usage.by_hour_and_type["cigarette"]["13"] == 0
    assert usage.by_hour_and_type["other"]["13"] == 1


def test_usage_by_hour_uses_local_time(now):
    usage = usage_by_hour([_at(8)], now, days=7, tz=ZoneInfo("Europe/Madrid"))
    assert usage.by_hour["10"] == 1
    assert usage.by_hour["8"] == 0


def test_usage_by_type_counts(now):
    events = [_at(8, "zyn"), _at(9, "zyn"), _at(10, "vape"), _at(11)]
    usage = usage_by_type(events, now, days=30)

    assert usage.total_entries == 4
    assert usage.by_type == {"zyn": 2, "vape": 1, "other": 1}
    assert usage.most_common == "zyn"


def test_usage_ignores_future_and_old_entries(now):
    events = [
        IntakeEvent(amount=1.0, taken_at=now + timedelta(minutes=1), kind="vape"),
        IntakeEvent(amount=1.0, taken_at=now - timedelta(days=31), kind="vape"),
    ]
    usage = usage_by_type(events, now, days=30)
    assert usage.total_entries == 0
    assert usage.most_common is None
