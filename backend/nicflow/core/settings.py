import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Literal, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from nicflow.core.constants import BASELINE_CAP_HOURS, BASELINE_LEVEL_MG, NICOTINE_HALF_LIFE_HOURS

logger = logging.getLogger(__name__)


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)


class EngineConfig(BaseModel):
    half_life_hours: float = Field(default=NICOTINE_HALF_LIFE_HOURS, gt=0)
    default_model: Literal["simple", "absorption"] = "simple"
    window_hours: float = Field(default=24, gt=0)
    sum_full_history: bool = True
    baseline_level: float = Field(default=BASELINE_LEVEL_MG, ge=0)
    baseline_cap_hours: float = Field(default=BASELINE_CAP_HOURS, gt=0, le=168)
    baseline_step_minutes: float = Field(default=5, gt=0)
    peak_step_minutes: float = Field(default=5, gt=0)


class LocaleConfig(BaseModel):
    timezone: str = Field(default="UTC")


class SecurityConfig(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)


class Settings(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    locale: LocaleConfig = Field(default_factory=LocaleConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)


DEFAULT_CONFIG_PATH = Path(os.environ.get("CONFIG_PATH", "config/config.json"))

SECTIONS = ("server", "engine", "locale", "security")


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# env var -> (section, field, parser)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "SERVER_HOST": ("server", "host", str),
    "SERVER_PORT": ("server", "port", int),
    "HALF_LIFE_HOURS": ("engine", "half_life_hours", float),
    "LEVEL_MODEL": ("engine", "default_model", str.lower),
    "WINDOW_HOURS": ("engine", "window_hours", float),
    "BASELINE_LEVEL": ("engine", "baseline_level", float),
    "BASELINE_CAP_HOURS": ("engine", "baseline_cap_hours", float),
    "APP_TIMEZONE": ("locale", "timezone", str),
    "CORS_ORIGINS": ("security", "cors_origins", _split_origins),
}


def _load_file_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Invalid JSON configuration at {path}") from exc
    if not isinstance(data, dict):
        raise RuntimeError(f"Configuration at {path} must be a JSON object")

    unknown = sorted(set(data) - set(SECTIONS))
    if unknown:
        logger.warning("Ignoring unknown configuration sections", extra={"sections": unknown, "path": str(path)})
    return data


def _load_env(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    environ = os.environ if environ is None else environ
    env_config: dict[str, Any] = {}
    for var, (section, field, parse) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if not raw:
            continue
        try:
            value = parse(raw)
        except ValueError as exc:
            raise RuntimeError(f"Invalid value for {var}: {raw!r}") from exc
        env_config.setdefault(section, {})[field] = value
    return env_config


def merge_settings(env_config: dict[str, Any], file_config: dict[str, Any]) -> dict[str, Any]:
    """Per-section merge; environment values win over the file."""
    return {section: {**file_config.get(section, {}), **env_config.get(section, {})} for section in SECTIONS}


def load_settings(path: Path, environ: Optional[Mapping[str, str]] = None) -> Settings:
    merged = merge_settings(env_config=_load_env(environ), file_config=_load_file_config(path))
    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise RuntimeError(f"Configuration error: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings(DEFAULT_CONFIG_PATH)


__all__ = ["ENV_OVERRIDES", "Settings", "get_settings", "load_settings", "merge_settings"]
