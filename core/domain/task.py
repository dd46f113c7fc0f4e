from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


@dataclass
class Schedule:
    id: str
    project_id: str
    name: str = ""

    @staticmethod
    def create(project_id: str, name: str = "") -> "Schedule":
        return Schedule(id=generate_id(), project_id=project_id, name=name)


@dataclass
class Task:
    id: str
    schedule_id: str
    name: str
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @staticmethod
    def create(schedule_id: str, name: str, description: str = "", **extra) -> "Task":
        return Task(
            id=generate_id(),
            schedule_id=schedule_id,
            name=name,
            description=description,
            **extra,
        )


@dataclass
class ResourceAssignment:
    """Binds a resource to a task for an inclusive date range at a weekly rate."""

    id: str
    resource_id: str
    task_id: str
    schedule_id: str
    start_date: date
    end_date: date
    hours_per_week: float = 0.0

    @staticmethod
    def create(
        resource_id: str,
        task_id: str,
        schedule_id: str,
        start_date: date,
        end_date: date,
        hours_per_week: float,
    ) -> "ResourceAssignment":
        return ResourceAssignment(
            id=generate_id(),
            resource_id=resource_id,
            task_id=task_id,
            schedule_id=schedule_id,
            start_date=start_date,
            end_date=end_date,
            hours_per_week=hours_per_week,
        )


__all__ = ["generate_id", "Schedule", "Task", "ResourceAssignment"]
