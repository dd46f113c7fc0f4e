from __future__ import annotations

from datetime import date
from typing import Iterable, List, Mapping, Optional

from core.models import BottleneckSeverity, BurnoutRiskLevel, ResourceAssignment
from core.services.forecasting.horizon import WEEK, in_horizon, overlaps
from core.services.forecasting.models import (
    BottleneckPrediction,
    BurnoutRisk,
    ContributingTask,
    ResourceWorkload,
    WeeklyUtilization,
)

OVERLOAD_THRESHOLD = 100.0
BURNOUT_MIN_WEEKS = 3


def classify_severity(utilization: float) -> BottleneckSeverity:
    if utilization > 150.0:
        return BottleneckSeverity.SEVERE
    if utilization > 125.0:
        return BottleneckSeverity.CRITICAL
    return BottleneckSeverity.WARNING


def classify_burnout(max_consecutive: int) -> Optional[BurnoutRiskLevel]:
    if max_consecutive < BURNOUT_MIN_WEEKS:
        return None
    if max_consecutive >= 8:
        return BurnoutRiskLevel.CRITICAL
    if max_consecutive >= 6:
        return BurnoutRiskLevel.HIGH
    if max_consecutive >= 4:
        return BurnoutRiskLevel.MEDIUM
    return BurnoutRiskLevel.LOW


def longest_overload_run(weeks: Iterable[WeeklyUtilization]) -> int:
    current = 0
    longest = 0
    for week in weeks:
        if week.utilization > OVERLOAD_THRESHOLD:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def collect_contributing_tasks(
    assignments: Iterable[ResourceAssignment],
    week_start: date,
    task_name_by_id: Mapping[str, str],
) -> List[ContributingTask]:
    week_end = week_start + WEEK
    return [
        ContributingTask(
            task_id=a.task_id,
            task_name=task_name_by_id.get(a.task_id) or a.task_id,
            hours_per_week=float(a.hours_per_week),
        )
        for a in assignments
        if overlaps(a.start_date, a.end_date, week_start, week_end)
    ]


def detect_bottlenecks(
    workloads: List[ResourceWorkload],
    assignments_by_resource: Mapping[str, List[ResourceAssignment]],
    task_name_by_id: Mapping[str, str],
    as_of: date,
    weeks_ahead: int,
) -> List[BottleneckPrediction]:
    predictions: List[BottleneckPrediction] = []
    for workload in workloads:
        resource_assignments = assignments_by_resource.get(workload.resource_id, [])
        for week in workload.weeks:
            if not in_horizon(week.week_start, as_of, weeks_ahead):
                continue
            if week.utilization <= OVERLOAD_THRESHOLD:
                continue
            predictions.append(
                BottleneckPrediction(
                    resource_id=workload.resource_id,
                    resource_name=workload.resource_name,
                    week=week.week_start,
                    utilization=week.utilization,
                    severity=classify_severity(week.utilization),
                    contributing_tasks=collect_contributing_tasks(
                        resource_assignments,
                        week.week_start,
                        task_name_by_id,
                    ),
                )
            )
    return predictions


def assess_burnout_risks(
    workloads: List[ResourceWorkload],
    as_of: date,
    weeks_ahead: int,
) -> List[BurnoutRisk]:
    risks: List[BurnoutRisk] = []
    for workload in workloads:
        weeks = sorted(
            (w for w in workload.weeks if in_horizon(w.week_start, as_of, weeks_ahead)),
            key=lambda w: w.week_start,
        )
        max_consecutive = longest_overload_run(weeks)
        level = classify_burnout(max_consecutive)
        if level is None:
            continue
        risks.append(
            BurnoutRisk(
                resource_id=workload.resource_id,
                resource_name=workload.resource_name,
                consecutive_overload_weeks=max_consecutive,
                average_utilization=workload.average_utilization,
                risk_level=level,
            )
        )
    return risks


__all__ = [
    "OVERLOAD_THRESHOLD",
    "BURNOUT_MIN_WEEKS",
    "classify_severity",
    "classify_burnout",
    "longest_overload_run",
    "collect_contributing_tasks",
    "detect_bottlenecks",
    "assess_burnout_risks",
]
