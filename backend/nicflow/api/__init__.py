from fastapi import APIRouter

from .goals import router as goals_router
from .health import router as health_router
from .insights import router as insights_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(insights_router, prefix="/insights", tags=["insights"])
api_router.include_router(goals_router, prefix="/goals", tags=["goals"])

__all__ = ["api_router"]
