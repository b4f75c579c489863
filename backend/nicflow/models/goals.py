from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nicflow.services.math.curves import ensure_utc

GoalType = Literal["daily_limit", "reduction", "quit_date"]
GoalStatus = Literal["active", "completed", "abandoned"]


class Goal(BaseModel):
    goal_type: GoalType = Field(..., alias="goalType")
    target_value: Optional[float] = Field(None, alias="targetValue")
    target_date: Optional[datetime] = Field(None, alias="targetDate")
    start_date: datetime = Field(..., alias="startDate")
    status: GoalStatus = "active"

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("target_date", "start_date")
    def _utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v is not None else None


class GoalProgress(BaseModel):
    current_value: float = 0.0
    percent_complete: float = 0.0
    on_track: bool = False
    days_remaining: Optional[int] = None
