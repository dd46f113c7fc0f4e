from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import Resource, ResourceAssignment, Schedule, Task


class ResourceRepository(ABC):
    @abstractmethod
    def add(self, resource: Resource) -> None: ...
    @abstractmethod
    def get(self, resource_id: str) -> Optional[Resource]: ...
    @abstractmethod
    def list_all(self) -> List[Resource]: ...

    def list_active(self) -> List[Resource]:
        return [resource for resource in self.list_all() if resource.is_active]


class ScheduleRepository(ABC):
    @abstractmethod
    def add(self, schedule: Schedule) -> None: ...
    @abstractmethod
    def get(self, schedule_id: str) -> Optional[Schedule]: ...
    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Schedule]: ...


class TaskRepository(ABC):
    @abstractmethod
    def add(self, task: Task) -> None: ...
    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]: ...
    @abstractmethod
    def list_by_ids(self, task_ids: List[str]) -> List[Task]: ...


class AssignmentRepository(ABC):
    @abstractmethod
    def add(self, assignment: ResourceAssignment) -> None: ...
    @abstractmethod
    def list_by_resource(self, resource_id: str) -> List[ResourceAssignment]: ...
    @abstractmethod
    def list_by_schedule(self, schedule_id: str) -> List[ResourceAssignment]: ...
    @abstractmethod
    def list_by_schedules(self, schedule_ids: List[str]) -> List[ResourceAssignment]: ...


__all__ = [
    "ResourceRepository",
    "ScheduleRepository",
    "TaskRepository",
    "AssignmentRepository",
]
