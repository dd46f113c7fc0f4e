from __future__ import annotations

from core.models import ResourceAssignment, Schedule, Task
from infra.db.models import ResourceAssignmentORM, ScheduleORM, TaskORM


def schedule_to_orm(schedule: Schedule) -> ScheduleORM:
    return ScheduleORM(id=schedule.id, project_id=schedule.project_id, name=schedule.name)


def schedule_from_orm(obj: ScheduleORM) -> Schedule:
    return Schedule(id=obj.id, project_id=obj.project_id, name=obj.name or "")


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        schedule_id=task.schedule_id,
        name=task.name,
        description=task.description,
        start_date=task.start_date,
        end_date=task.end_date,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        schedule_id=obj.schedule_id,
        name=obj.name,
        description=obj.description or "",
        start_date=obj.start_date,
        end_date=obj.end_date,
    )


def assignment_to_orm(assignment: ResourceAssignment) -> ResourceAssignmentORM:
    return ResourceAssignmentORM(
        id=assignment.id,
        resource_id=assignment.resource_id,
        task_id=assignment.task_id,
        schedule_id=assignment.schedule_id,
        start_date=assignment.start_date,
        end_date=assignment.end_date,
        hours_per_week=assignment.hours_per_week,
    )


def assignment_from_orm(obj: ResourceAssignmentORM) -> ResourceAssignment:
    return ResourceAssignment(
        id=obj.id,
        resource_id=obj.resource_id,
        task_id=obj.task_id,
        schedule_id=obj.schedule_id,
        start_date=obj.start_date,
        end_date=obj.end_date,
        hours_per_week=float(obj.hours_per_week or 0.0),
    )


__all__ = [
    "schedule_to_orm",
    "schedule_from_orm",
    "task_to_orm",
    "task_from_orm",
    "assignment_to_orm",
    "assignment_from_orm",
]
