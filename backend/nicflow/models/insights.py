from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# --- Stats ---

class BloodstreamStats(BaseModel):
    current_level: float = Field(..., description="Level in the bloodstream at `now` (mg)")
    entries_in_window: int
    total_amount_in_window: float
    today_usage_count: int
    peak_level_today: float
    time_to_baseline_hours: float = Field(..., description="0 when already at baseline")
    window_hours: float = 24

class CostStats(BaseModel):
    daily: float = 0.0
    weekly: float = 0.0
    monthly: float = 0.0

# --- Series ---

class SeriesPoint(BaseModel):
    timestamp: datetime
    level: float

class PreviewPoint(BaseModel):
    timestamp: datetime
    actual: float
    projected: float
    is_future: bool

class LevelSeriesResponse(BaseModel):
    hours: int
    interval_minutes: int
    points: List[SeriesPoint]

class PreviewResponse(BaseModel):
    hours_past: int
    hours_future: int
    step_minutes: int
    current_level: float
    peak_level: float
    points: List[PreviewPoint]

# --- Usage ---

class UsageByHour(BaseModel):
    days: int
    total_entries: int
    by_hour: Dict[str, int]
    by_hour_and_type: Dict[str, Dict[str, int]] = {}

class UsageByType(BaseModel):
    days: int
    total_entries: int
    by_type: Dict[str, int]
    most_common: Optional[str] = None
