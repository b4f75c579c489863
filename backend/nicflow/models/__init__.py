from .entries import Entry, GoalProgressRequest, InsightsRequest, PreviewRequest, SimulatedEntry
from .goals import Goal, GoalProgress
from .insights import (
    BloodstreamStats,
    CostStats,
    LevelSeriesResponse,
    PreviewPoint,
    PreviewResponse,
    SeriesPoint,
    UsageByHour,
    UsageByType,
)
