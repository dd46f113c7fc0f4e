from __future__ import annotations

from typing import TYPE_CHECKING

from core.interfaces import (
    AssignmentRepository,
    ResourceRepository,
    ScheduleRepository,
    TaskRepository,
)

from .forecast import BottleneckForecastMixin
from .matching import SkillMatchMixin

if TYPE_CHECKING:
    from core.services.advisory.gateway import RebalanceAdvisoryGateway


class ResourceForecastService(
    BottleneckForecastMixin,
    SkillMatchMixin,
):
    """
    Read-only workload forecasting over collaborator snapshots. Holds no state
    between calls beyond its repositories and advisory gateway.
    """

    def __init__(
        self,
        resource_repo: ResourceRepository,
        schedule_repo: ScheduleRepository,
        task_repo: TaskRepository,
        assignment_repo: AssignmentRepository,
        advisory_gateway: RebalanceAdvisoryGateway | None = None,
    ):
        if advisory_gateway is None:
            # Deferred: the advisory package imports forecasting models.
            from core.services.advisory.gateway import RebalanceAdvisoryGateway

            advisory_gateway = RebalanceAdvisoryGateway(enabled=False)
        self._resource_repo: ResourceRepository = resource_repo
        self._schedule_repo: ScheduleRepository = schedule_repo
        self._task_repo: TaskRepository = task_repo
        self._assignment_repo: AssignmentRepository = assignment_repo
        self._advisory: RebalanceAdvisoryGateway = advisory_gateway
