from .service import ResourceForecastService
from .models import (
    BottleneckPrediction,
    BurnoutRisk,
    CapacityWeek,
    ContributingTask,
    ForecastSummary,
    RebalanceSuggestion,
    ResourceForecastResult,
    ResourceWorkload,
    SkillMatch,
    WeeklyUtilization,
)
from .serialization import to_payload

__all__ = [
    "ResourceForecastService",
    "BottleneckPrediction",
    "BurnoutRisk",
    "CapacityWeek",
    "ContributingTask",
    "ForecastSummary",
    "RebalanceSuggestion",
    "ResourceForecastResult",
    "ResourceWorkload",
    "SkillMatch",
    "WeeklyUtilization",
    "to_payload",
]
