import logging
import os
from logging.config import dictConfig
from typing import Any, Optional

ENGINE_LOGGER = "nicflow.services"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_FALSEY = {"0", "false", "no", "off"}


def build_logging_config(level: str, engine_level: Optional[str] = None, access_log: bool = True) -> dict[str, Any]:
    """
    dictConfig payload with a single console handler. The engine modules get
    their own level so level and baseline sampling can be traced without
    turning on debug output for the whole server.
    """
    level = level.upper()
    engine_level = (engine_level or level).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%dT%H:%M:%S%z"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "structured", "level": "DEBUG"},
        },
        "loggers": {
            ENGINE_LOGGER: {"level": engine_level},
            # uvicorn keeps its own handler; propagating would print twice
            "uvicorn": {"handlers": ["console"], "level": level, "propagate": False},
            "uvicorn.access": {
                "handlers": ["console"] if access_log else [],
                "level": level if access_log else "WARNING",
                "propagate": False,
            },
        },
        "root": {"handlers": ["console"], "level": level},
    }


def configure_logging(level: Optional[str] = None, engine_level: Optional[str] = None) -> None:
    level = level or os.environ.get("LOG_LEVEL", "INFO")
    engine_level = engine_level or os.environ.get("ENGINE_LOG_LEVEL")
    access_log = os.environ.get("ACCESS_LOG", "1").strip().lower() not in _FALSEY

    config = build_logging_config(level, engine_level, access_log=access_log)
    dictConfig(config)
    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={"level": config["root"]["level"], "engine_level": config["loggers"][ENGINE_LOGGER]["level"]},
    )


__all__ = ["build_logging_config", "configure_logging"]
