from __future__ import annotations

import logging
from typing import List

from core.exceptions import NotFoundError
from core.interfaces import AssignmentRepository, ResourceRepository, TaskRepository
from core.services.forecasting.horizon import validate_assignments, validate_task_dates
from core.services.forecasting.models import SkillMatch
from core.services.forecasting.skills import rank_resources_for_task

logger = logging.getLogger(__name__)


class SkillMatchMixin:
    _resource_repo: ResourceRepository
    _task_repo: TaskRepository
    _assignment_repo: AssignmentRepository

    def match_resources_to_task(self, task_id: str, schedule_id: str) -> List[SkillMatch]:
        """
        Ranks every active resource for the task by skill fit, then by free
        weekly hours during the task's dates within the given schedule.
        """
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError(f"Task not found: {task_id}", code="TASK_NOT_FOUND")
        validate_task_dates(task)

        resources = self._resource_repo.list_active()
        if not resources:
            return []

        assignments = self._assignment_repo.list_by_schedule(schedule_id)
        validate_assignments(assignments)

        matches = rank_resources_for_task(task, resources, assignments)
        logger.info(
            "Matched %d resources to task %s (best score %d)",
            len(matches),
            task_id,
            matches[0].match_score if matches else 0,
        )
        return matches


__all__ = ["SkillMatchMixin"]
