from datetime import datetime, timedelta, timezone
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from nicflow.models.goals import Goal
from nicflow.services.concentration import IntakeEvent, SimulatedEvent
from nicflow.services.math.curves import ensure_utc


class Entry(BaseModel):
    amount: float = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("amount", "nicotineMg", "nicotine_mg", "calories"),
        description="Nominal quantity of substance (mg nicotine)",
    )
    timestamp: datetime = Field(..., validation_alias=AliasChoices("timestamp", "takenAt", "taken_at"))
    type: Optional[str] = Field(None, validation_alias=AliasChoices("type", "kind"))
    cost: Optional[float] = Field(None, ge=0)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("timestamp")
    def _utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def to_event(self) -> IntakeEvent:
        return IntakeEvent(amount=self.amount, taken_at=self.timestamp, kind=self.type, cost=self.cost)


class SimulatedEntry(BaseModel):
    type: Optional[str] = None
    time_offset_min: int = Field(0, description="Minutes from now (0=now, negative=past)")
    amount: Optional[float] = Field(None, gt=0, description="Defaults to the device's nominal dose")

    def to_event(self, now: datetime) -> SimulatedEvent:
        return SimulatedEvent(
            taken_at=now + timedelta(minutes=self.time_offset_min),
            kind=self.type,
            amount=self.amount,
        )


# --- Requests ---

class InsightsRequest(BaseModel):
    entries: List[Entry] = []
    now: Optional[datetime] = Field(None, description="Reference time, defaults to server time")
    model: Optional[Literal["simple", "absorption"]] = None

    def resolved_now(self) -> datetime:
        if self.now is None:
            return datetime.now(timezone.utc)
        return ensure_utc(self.now)

    def events(self) -> list[IntakeEvent]:
        return [entry.to_event() for entry in self.entries]


class PreviewRequest(InsightsRequest):
    simulated: Optional[SimulatedEntry] = None


class GoalProgressRequest(InsightsRequest):
    goal: Goal
