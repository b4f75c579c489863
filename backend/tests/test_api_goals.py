from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from nicflow.main import app

client = TestClient(app)

NOW = datetime(2024, 5, 15, 18, 0, tzinfo=timezone.utc)


def test_daily_limit_progress():
    payload = {
        "now": NOW.isoformat(),
        "goal": {"goalType": "daily_limit", "targetValue": 8, "startDate": (NOW - timedelta(days=2)).isoformat()},
        "entries": [
            {"nicotineMg": 2, "timestamp": (NOW - timedelta(hours=3)).isoformat()},
            {"nicotineMg": 6, "timestamp": (NOW - timedelta(hours=26)).isoformat()},
        ],
    }
    response = client.post("/api/goals/progress", json=payload)

    assert response.status_code == 200
    assert response.json() == {
        "current_value": 2.0,
        "percent_complete": 25.0,
        "on_track": True,
        "days_remaining": None,
    }


def test_unknown_goal_type_rejected():
    payload = {"goal": {"goalType": "moderation", "startDate": NOW.isoformat()}}
    response = client.post("/api/goals/progress", json=payload)
    assert response.status_code == 422


def test_target_before_start_rejected():
    payload = {
        "goal": {
            "goalType": "quit_date",
            "startDate": NOW.isoformat(),
            "targetDate": (NOW - timedelta(days=1)).isoformat(),
        },
    }
    response = client.post("/api/goals/progress", json=payload)
    assert response.status_code == 400
