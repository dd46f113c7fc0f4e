# infra/db/models.py
from __future__ import annotations
from datetime import date
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    Float,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base


class ResourceORM(Base):
    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, default="")
    skills: Mapped[list] = mapped_column(JSON, default=list)
    capacity_hours_per_week: Mapped[float] = mapped_column(Float, default=40.0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class ScheduleORM(Base):
    __tablename__ = "schedules"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, default="")


Index("idx_schedules_project", ScheduleORM.project_id)


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    schedule_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("schedules.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)


class ResourceAssignmentORM(Base):
    __tablename__ = "resource_assignments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    # No FK to resources: a dangling reference must surface as a forecast error.
    resource_id: Mapped[str] = mapped_column(String, nullable=False)
    task_id: Mapped[str] = mapped_column(String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    schedule_id: Mapped[str] = mapped_column(
        String, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    hours_per_week: Mapped[float] = mapped_column(Float, default=0.0)


Index("idx_resource_assignments_schedule", ResourceAssignmentORM.schedule_id)
Index("idx_resource_assignments_resource", ResourceAssignmentORM.resource_id)
