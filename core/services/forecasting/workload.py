from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, List

from core.models import Resource, ResourceAssignment
from core.services.forecasting.horizon import (
    WEEK,
    horizon_weeks,
    overlaps,
    validate_assignments,
    validate_weeks_ahead,
)
from core.services.forecasting.models import ResourceWorkload, WeeklyUtilization


def utilization_percent(allocated: float, capacity: float) -> float:
    if capacity <= 0:
        return 0.0
    return allocated * 100.0 / capacity


def allocated_hours(
    assignments: Iterable[ResourceAssignment],
    window_start: date,
    window_end: date,
) -> float:
    return sum(
        float(a.hours_per_week)
        for a in assignments
        if overlaps(a.start_date, a.end_date, window_start, window_end)
    )


def build_resource_workload(
    resource: Resource,
    assignments: List[ResourceAssignment],
    weeks: List[date],
) -> ResourceWorkload:
    capacity = float(resource.capacity_hours_per_week or 0.0)
    series: List[WeeklyUtilization] = []
    for week_start in weeks:
        allocated = allocated_hours(assignments, week_start, week_start + WEEK)
        series.append(
            WeeklyUtilization(
                week_start=week_start,
                capacity=capacity,
                allocated=allocated,
                utilization=utilization_percent(allocated, capacity),
            )
        )

    average = sum(w.utilization for w in series) / len(series) if series else 0.0
    return ResourceWorkload(
        resource_id=resource.id,
        resource_name=resource.name,
        role=resource.role,
        weeks=series,
        average_utilization=average,
        is_over_allocated=any(w.utilization > 100.0 for w in series),
    )


def build_resource_workloads(
    resources: List[Resource],
    assignments: List[ResourceAssignment],
    as_of: date,
    weeks_ahead: int,
) -> List[ResourceWorkload]:
    """
    One workload per resource over ``weeks_ahead`` Monday-aligned weeks starting
    with the week that contains ``as_of``. Resources without assignments get
    all-zero weeks rather than being dropped.
    """
    validate_weeks_ahead(weeks_ahead)
    validate_assignments(assignments)

    weeks = horizon_weeks(as_of, weeks_ahead)
    by_resource: dict[str, List[ResourceAssignment]] = defaultdict(list)
    for assignment in assignments:
        by_resource[assignment.resource_id].append(assignment)

    return [
        build_resource_workload(resource, by_resource.get(resource.id, []), weeks)
        for resource in resources
    ]


__all__ = [
    "utilization_percent",
    "allocated_hours",
    "build_resource_workload",
    "build_resource_workloads",
]
