import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nicflow import __version__
from nicflow.api import api_router
from nicflow.core.logging import configure_logging
from nicflow.core.settings import get_settings

configure_logging()
settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Nicflow", version=__version__)


def _collect_cors_origins() -> list[str]:
    default_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    configured_origins = settings.security.cors_origins
    env_origins = [
        origin.strip()
        for origin in os.environ.get("FRONTEND_ORIGIN", "").split(",")
        if origin.strip()
    ]

    collected: list[str] = []
    for origin in (*default_origins, *configured_origins, *env_origins):
        if origin and origin not in collected:
            collected.append(origin)

    return collected


app.add_middleware(
    CORSMiddleware,
    allow_origins=_collect_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event() -> None:
    engine = settings.engine
    logger.info(
        "Level engine ready: model=%s half_life=%sh window=%sh",
        engine.default_model,
        engine.half_life_hours,
        engine.window_hours,
    )


def run() -> None:
    import uvicorn

    uvicorn.run("nicflow.main:app", host=settings.server.host, port=settings.server.port)
