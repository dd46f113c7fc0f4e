from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.models import BottleneckSeverity, BurnoutRiskLevel, SuggestionType


@dataclass
class WeeklyUtilization:
    week_start: date
    capacity: float
    allocated: float
    utilization: float


@dataclass
class ResourceWorkload:
    resource_id: str
    resource_name: str
    role: str
    weeks: List[WeeklyUtilization]
    average_utilization: float
    is_over_allocated: bool


@dataclass
class ContributingTask:
    task_id: str
    task_name: str
    hours_per_week: float


@dataclass
class BottleneckPrediction:
    resource_id: str
    resource_name: str
    week: date
    utilization: float
    severity: BottleneckSeverity
    contributing_tasks: List[ContributingTask] = field(default_factory=list)


@dataclass
class BurnoutRisk:
    resource_id: str
    resource_name: str
    consecutive_overload_weeks: int
    average_utilization: float
    risk_level: BurnoutRiskLevel


@dataclass
class CapacityWeek:
    week: date
    total_capacity: float
    total_allocated: float
    surplus: float
    deficit: float


@dataclass
class RebalanceSuggestion:
    type: SuggestionType
    description: str
    estimated_impact: str
    confidence: float
    affected_resource_id: Optional[str] = None
    affected_task_id: Optional[str] = None


@dataclass
class ForecastSummary:
    total_resources: int
    over_allocated_count: int
    average_utilization: int


@dataclass
class ResourceForecastResult:
    bottlenecks: List[BottleneckPrediction]
    burnout_risks: List[BurnoutRisk]
    capacity_forecast: List[CapacityWeek]
    summary: ForecastSummary
    rebalance_suggestions: Optional[List[RebalanceSuggestion]] = None


@dataclass
class SkillMatch:
    resource_id: str
    resource_name: str
    match_score: int
    matched_skills: List[str]
    available_capacity: float


__all__ = [
    "WeeklyUtilization",
    "ResourceWorkload",
    "ContributingTask",
    "BottleneckPrediction",
    "BurnoutRisk",
    "CapacityWeek",
    "RebalanceSuggestion",
    "ForecastSummary",
    "ResourceForecastResult",
    "SkillMatch",
]
