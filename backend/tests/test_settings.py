import json
import logging

import pytest

from nicflow.core import settings as settings_module
from nicflow.core.settings import get_settings, load_settings, merge_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_env_overrides_file():
    merged = merge_settings(
        env_config={"engine": {"half_life_hours": 3.0}},
        file_config={"engine": {"half_life_hours": 2.0, "window_hours": 12}, "server": {"port": 9000}},
    )
    assert merged["engine"] == {"half_life_hours": 3.0, "window_hours": 12}
    assert merged["server"] == {"port": 9000}
    assert merged["locale"] == {}


def test_defaults_without_config(monkeypatch, tmp_path):
    monkeypatch.setattr(settings_module, "DEFAULT_CONFIG_PATH", tmp_path / "missing.json")
    settings = get_settings()
    assert settings.engine.half_life_hours == 2.0
    assert settings.engine.default_model == "simple"
    assert settings.engine.baseline_cap_hours == 48
    assert settings.locale.timezone == "UTC"


def test_env_and_file_are_merged(monkeypatch, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"engine": {"window_hours": 12}, "locale": {"timezone": "Europe/Madrid"}}))
    monkeypatch.setattr(settings_module, "DEFAULT_CONFIG_PATH", config_path)
    monkeypatch.setenv("LEVEL_MODEL", "Absorption")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")

    settings = get_settings()
    assert settings.engine.window_hours == 12
    assert settings.engine.default_model == "absorption"
    assert settings.locale.timezone == "Europe/Madrid"
    assert settings.security.cors_origins == ["https://a.example", "https://b.example"]


def test_invalid_json_raises(monkeypatch, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")
    monkeypatch.setattr(settings_module, "DEFAULT_CONFIG_PATH", config_path)

    with pytest.raises(RuntimeError):
        get_settings()


def test_invalid_values_raise(monkeypatch, tmp_path):
    monkeypatch.setattr(settings_module, "DEFAULT_CONFIG_PATH", tmp_path / "missing.json")
    monkeypatch.setenv("HALF_LIFE_HOURS", "0")

    with pytest.raises(RuntimeError):
        get_settings()


def test_bad_env_number_raises(tmp_path):
    with pytest.raises(RuntimeError, match="WINDOW_HOURS"):
        load_settings(tmp_path / "missing.json", environ={"WINDOW_HOURS": "a day"})


def test_non_object_file_raises(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("[1, 2]")
    with pytest.raises(RuntimeError):
        load_settings(config_path, environ={})


def test_unknown_section_is_ignored(tmp_path, caplog):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"nightscout": {"url": "x"}, "engine": {"window_hours": 6}}))

    with caplog.at_level(logging.WARNING, logger="nicflow.core.settings"):
        settings = load_settings(config_path, environ={})
    assert settings.engine.window_hours == 6
    assert "unknown configuration sections" in caplog.text
