from __future__ import annotations

from datetime import date

from core.models import Resource, ResourceAssignment, Schedule, Task

# Wednesday; its week starts Monday 2024-01-01.
AS_OF = date(2024, 1, 3)


def make_resource(name="Dev", skills=None, capacity=40.0, role="Developer", is_active=True) -> Resource:
    return Resource.create(
        name,
        role=role,
        skills=list(skills or []),
        capacity_hours_per_week=capacity,
        is_active=is_active,
    )


def make_assignment(resource, task_id, start, end, hours, schedule_id="sched-1") -> ResourceAssignment:
    return ResourceAssignment.create(
        resource_id=resource.id if isinstance(resource, Resource) else resource,
        task_id=task_id,
        schedule_id=schedule_id,
        start_date=start,
        end_date=end,
        hours_per_week=hours,
    )


def seed_project(services, project_id="proj-1", schedule_name="Main"):
    schedule = Schedule.create(project_id, schedule_name)
    services["schedule_repo"].add(schedule)
    services["session"].commit()
    return schedule


def seed_task(services, schedule, name, description="", start=None, end=None) -> Task:
    task = Task.create(schedule.id, name, description, start_date=start, end_date=end)
    services["task_repo"].add(task)
    services["session"].commit()
    return task


def seed_resource(services, **kwargs) -> Resource:
    resource = make_resource(**kwargs)
    services["resource_repo"].add(resource)
    services["session"].commit()
    return resource


def seed_assignment(services, resource, task, start, end, hours) -> ResourceAssignment:
    assignment = make_assignment(resource, task.id, start, end, hours, schedule_id=task.schedule_id)
    services["assignment_repo"].add(assignment)
    services["session"].commit()
    return assignment
