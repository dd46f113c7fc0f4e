from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import List

from core.services.forecasting.horizon import in_horizon
from core.services.forecasting.models import CapacityWeek, ResourceWorkload


def build_capacity_forecast(
    workloads: List[ResourceWorkload],
    as_of: date,
    weeks_ahead: int,
) -> List[CapacityWeek]:
    """Portfolio surplus/deficit per week; weeks outside the horizon are absent."""
    totals: dict[date, list[float]] = defaultdict(lambda: [0.0, 0.0])
    for workload in workloads:
        for week in workload.weeks:
            if not in_horizon(week.week_start, as_of, weeks_ahead):
                continue
            bucket = totals[week.week_start]
            bucket[0] += week.capacity
            bucket[1] += week.allocated

    forecast: List[CapacityWeek] = []
    for week_start in sorted(totals):
        capacity, allocated = totals[week_start]
        forecast.append(
            CapacityWeek(
                week=week_start,
                total_capacity=capacity,
                total_allocated=allocated,
                surplus=max(0.0, capacity - allocated),
                deficit=max(0.0, allocated - capacity),
            )
        )
    return forecast


__all__ = ["build_capacity_forecast"]
