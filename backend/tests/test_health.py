from fastapi.testclient import TestClient

from nicflow.core.settings import EngineConfig, Settings, get_settings
from nicflow.main import app


client = TestClient(app)


def test_health_ok():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_full_health_reports_engine_config():
    app.dependency_overrides[get_settings] = lambda: Settings(
        engine=EngineConfig(default_model="absorption", half_life_hours=2.5)
    )
    try:
        response = client.get("/api/health/full")
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert "uptime_seconds" in body
        assert "version" in body
        assert body["engine"]["model"] == "absorption"
        assert body["engine"]["half_life_hours"] == 2.5
    finally:
        app.dependency_overrides = {}


def test_full_health_uptime(mocker):
    mocker.patch("nicflow.api.health._uptime_seconds", return_value=42.0)
    app.dependency_overrides[get_settings] = lambda: Settings()
    try:
        body = client.get("/api/health/full").json()
        assert body["uptime_seconds"] == 42.0
        assert body["timezone"] == "UTC"
    finally:
        app.dependency_overrides = {}
