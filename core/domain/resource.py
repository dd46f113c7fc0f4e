from __future__ import annotations

from dataclasses import dataclass, field

from core.domain.task import generate_id


@dataclass
class Resource:
    id: str
    name: str
    role: str = ""
    skills: list[str] = field(default_factory=list)
    capacity_hours_per_week: float = 40.0
    is_active: bool = True

    @staticmethod
    def create(
        name: str,
        role: str = "",
        skills: list[str] | None = None,
        capacity_hours_per_week: float = 40.0,
        is_active: bool = True,
    ) -> "Resource":
        return Resource(
            id=generate_id(),
            name=name,
            role=role,
            skills=list(skills or []),
            capacity_hours_per_week=capacity_hours_per_week,
            is_active=is_active,
        )


__all__ = ["Resource"]
