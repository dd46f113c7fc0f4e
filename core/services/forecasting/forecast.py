from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import TYPE_CHECKING, List

from core.exceptions import BusinessRuleError
from core.interfaces import (
    AssignmentRepository,
    ResourceRepository,
    ScheduleRepository,
    TaskRepository,
)
from core.models import Resource, ResourceAssignment
from core.services.forecasting.bottlenecks import assess_burnout_risks, detect_bottlenecks
from core.services.forecasting.capacity import build_capacity_forecast
from core.services.forecasting.horizon import (
    round_half_up,
    validate_assignments,
    validate_weeks_ahead,
)
from core.services.forecasting.models import (
    ForecastSummary,
    ResourceForecastResult,
    ResourceWorkload,
)
from core.services.forecasting.policy import default_weeks_ahead
from core.services.forecasting.workload import build_resource_workloads

if TYPE_CHECKING:
    from core.services.advisory.gateway import RebalanceAdvisoryGateway

logger = logging.getLogger(__name__)


class BottleneckForecastMixin:
    _resource_repo: ResourceRepository
    _schedule_repo: ScheduleRepository
    _task_repo: TaskRepository
    _assignment_repo: AssignmentRepository
    _advisory: RebalanceAdvisoryGateway

    def forecast_bottlenecks(
        self,
        project_id: str,
        weeks_ahead: int | None = None,
        caller_id: str | None = None,
        as_of: date | None = None,
    ) -> ResourceForecastResult:
        weeks_ahead = default_weeks_ahead() if weeks_ahead is None else weeks_ahead
        validate_weeks_ahead(weeks_ahead)
        as_of = as_of or date.today()
        logger.info(
            "Forecasting bottlenecks for project %s (%d weeks from %s, caller=%s)",
            project_id,
            weeks_ahead,
            as_of.isoformat(),
            caller_id or "-",
        )

        assignments = self._list_project_assignments(project_id)
        validate_assignments(assignments)
        resources = self._resolve_involved_resources(assignments)

        workloads = build_resource_workloads(resources, assignments, as_of, weeks_ahead)

        by_resource: dict[str, List[ResourceAssignment]] = defaultdict(list)
        for assignment in assignments:
            by_resource[assignment.resource_id].append(assignment)

        bottlenecks = detect_bottlenecks(
            workloads,
            by_resource,
            self._build_task_name_map(assignments),
            as_of,
            weeks_ahead,
        )
        burnout_risks = assess_burnout_risks(workloads, as_of, weeks_ahead)
        capacity_forecast = build_capacity_forecast(workloads, as_of, weeks_ahead)

        suggestions = self._advisory.request_suggestions(
            workloads,
            bottlenecks,
            burnout_risks,
            self._resource_repo.list_all,
        )

        result = ResourceForecastResult(
            bottlenecks=bottlenecks,
            burnout_risks=burnout_risks,
            capacity_forecast=capacity_forecast,
            summary=self._summarize(workloads),
            rebalance_suggestions=suggestions,
        )
        logger.info(
            "Forecast for project %s: %d resources, %d bottlenecks, %d burnout risks",
            project_id,
            result.summary.total_resources,
            len(bottlenecks),
            len(burnout_risks),
        )
        return result

    def get_resource_workloads(
        self,
        project_id: str,
        weeks_ahead: int | None = None,
        as_of: date | None = None,
    ) -> List[ResourceWorkload]:
        weeks_ahead = default_weeks_ahead() if weeks_ahead is None else weeks_ahead
        assignments = self._list_project_assignments(project_id)
        validate_assignments(assignments)
        return build_resource_workloads(
            self._resolve_involved_resources(assignments),
            assignments,
            as_of or date.today(),
            weeks_ahead,
        )

    def _list_project_assignments(self, project_id: str) -> List[ResourceAssignment]:
        schedule_ids = [s.id for s in self._schedule_repo.list_by_project(project_id)]
        if not schedule_ids:
            return []
        return self._assignment_repo.list_by_schedules(schedule_ids)

    def _resolve_involved_resources(
        self,
        assignments: List[ResourceAssignment],
    ) -> List[Resource]:
        resources: List[Resource] = []
        seen: set[str] = set()
        for assignment in assignments:
            rid = assignment.resource_id
            if rid in seen:
                continue
            seen.add(rid)
            resource = self._resource_repo.get(rid)
            if resource is None:
                raise BusinessRuleError(
                    f"Assignment {assignment.id} references unknown resource {rid}.",
                    code="ASSIGNMENT_UNKNOWN_RESOURCE",
                )
            resources.append(resource)
        return resources

    def _build_task_name_map(self, assignments: List[ResourceAssignment]) -> dict[str, str]:
        task_ids = sorted({a.task_id for a in assignments})
        if not task_ids:
            return {}
        return {task.id: task.name for task in self._task_repo.list_by_ids(task_ids)}

    @staticmethod
    def _summarize(workloads: List[ResourceWorkload]) -> ForecastSummary:
        total = len(workloads)
        average = (
            round_half_up(sum(w.average_utilization for w in workloads) / total)
            if total
            else 0
        )
        return ForecastSummary(
            total_resources=total,
            over_allocated_count=sum(1 for w in workloads if w.is_over_allocated),
            average_utilization=average,
        )


__all__ = ["BottleneckForecastMixin"]
