from __future__ import annotations

from core.models import Resource
from infra.db.models import ResourceORM


def resource_to_orm(resource: Resource) -> ResourceORM:
    return ResourceORM(
        id=resource.id,
        name=resource.name,
        role=resource.role,
        skills=list(resource.skills or []),
        capacity_hours_per_week=resource.capacity_hours_per_week,
        is_active=resource.is_active,
    )


def resource_from_orm(obj: ResourceORM) -> Resource:
    return Resource(
        id=obj.id,
        name=obj.name,
        role=obj.role or "",
        skills=[str(skill) for skill in (obj.skills or [])],
        capacity_hours_per_week=float(obj.capacity_hours_per_week or 0.0),
        is_active=bool(obj.is_active),
    )


__all__ = ["resource_to_orm", "resource_from_orm"]
