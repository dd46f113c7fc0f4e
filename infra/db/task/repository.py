from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import AssignmentRepository, ScheduleRepository, TaskRepository
from core.models import ResourceAssignment, Schedule, Task
from infra.db.models import ResourceAssignmentORM, ScheduleORM, TaskORM
from infra.db.task.mapper import (
    assignment_from_orm,
    assignment_to_orm,
    schedule_from_orm,
    schedule_to_orm,
    task_from_orm,
    task_to_orm,
)


class SqlAlchemyScheduleRepository(ScheduleRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, schedule: Schedule) -> None:
        self.session.add(schedule_to_orm(schedule))

    def get(self, schedule_id: str) -> Optional[Schedule]:
        obj = self.session.get(ScheduleORM, schedule_id)
        return schedule_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[Schedule]:
        stmt = select(ScheduleORM).where(ScheduleORM.project_id == project_id).order_by(ScheduleORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [schedule_from_orm(r) for r in rows]


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_by_ids(self, task_ids: List[str]) -> List[Task]:
        if not task_ids:
            return []
        stmt = select(TaskORM).where(TaskORM.id.in_(list(task_ids)))
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(r) for r in rows]


class SqlAlchemyAssignmentRepository(AssignmentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, assignment: ResourceAssignment) -> None:
        self.session.add(assignment_to_orm(assignment))

    def list_by_resource(self, resource_id: str) -> List[ResourceAssignment]:
        stmt = (
            select(ResourceAssignmentORM)
            .where(ResourceAssignmentORM.resource_id == resource_id)
            .order_by(ResourceAssignmentORM.start_date, ResourceAssignmentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [assignment_from_orm(r) for r in rows]

    def list_by_schedule(self, schedule_id: str) -> List[ResourceAssignment]:
        return self.list_by_schedules([schedule_id])

    def list_by_schedules(self, schedule_ids: List[str]) -> List[ResourceAssignment]:
        if not schedule_ids:
            return []
        stmt = (
            select(ResourceAssignmentORM)
            .where(ResourceAssignmentORM.schedule_id.in_(list(schedule_ids)))
            .order_by(ResourceAssignmentORM.start_date, ResourceAssignmentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [assignment_from_orm(r) for r in rows]


__all__ = [
    "SqlAlchemyScheduleRepository",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyAssignmentRepository",
]
