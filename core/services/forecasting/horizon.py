from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Iterable

from core.exceptions import ValidationError
from core.models import ResourceAssignment, Task

WEEK = timedelta(days=7)
MAX_WEEKS_AHEAD = 52


def validate_weeks_ahead(weeks_ahead: int) -> int:
    if isinstance(weeks_ahead, bool) or not isinstance(weeks_ahead, int):
        raise ValidationError(
            "weeks_ahead must be a whole number of weeks.",
            code="FORECAST_INVALID_HORIZON",
        )
    if weeks_ahead <= 0 or weeks_ahead > MAX_WEEKS_AHEAD:
        raise ValidationError(
            f"weeks_ahead must be between 1 and {MAX_WEEKS_AHEAD}.",
            code="FORECAST_INVALID_HORIZON",
        )
    return weeks_ahead


def validate_assignments(assignments: Iterable[ResourceAssignment]) -> None:
    for assignment in assignments:
        start = assignment.start_date
        end = assignment.end_date
        if not isinstance(start, date) or not isinstance(end, date):
            raise ValidationError(
                f"Assignment {assignment.id} has malformed dates.",
                code="ASSIGNMENT_INVALID_RANGE",
            )
        if end < start:
            raise ValidationError(
                f"Assignment {assignment.id} ends before it starts.",
                code="ASSIGNMENT_INVALID_RANGE",
            )
        hours = assignment.hours_per_week
        if (
            isinstance(hours, bool)
            or not isinstance(hours, (int, float))
            or math.isnan(hours)
            or hours < 0
        ):
            raise ValidationError(
                f"Assignment {assignment.id} has invalid hours per week.",
                code="ASSIGNMENT_INVALID_HOURS",
            )


def validate_task_dates(task: Task) -> None:
    """Undated tasks pass; a dated task must not end before it starts."""
    start = task.start_date
    end = task.end_date
    for value in (start, end):
        if value is not None and not isinstance(value, date):
            raise ValidationError(
                f"Task {task.id} has malformed dates.",
                code="TASK_INVALID_RANGE",
            )
    if start is not None and end is not None and end < start:
        raise ValidationError(
            f"Task {task.id} ends before it starts.",
            code="TASK_INVALID_RANGE",
        )


def week_start_of(day: date) -> date:
    """Monday of the calendar week containing ``day``."""
    return day - timedelta(days=day.weekday())


def horizon_weeks(as_of: date, weeks_ahead: int) -> list[date]:
    first = week_start_of(as_of)
    return [first + WEEK * offset for offset in range(weeks_ahead)]


def week_offset(week_start: date, as_of: date) -> int:
    # Whole weeks from as_of, rounded up: the current week's Monday is offset 0.
    days = (week_start - as_of).days
    return -((-days) // 7)


def in_horizon(week_start: date, as_of: date, weeks_ahead: int) -> bool:
    return 0 <= week_offset(week_start, as_of) < weeks_ahead


def overlaps(start: date, end: date, window_start: date, window_end: date) -> bool:
    """Start-exclusive, end-inclusive overlap used by every allocation rule."""
    return start < window_end and end >= window_start


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


__all__ = [
    "WEEK",
    "MAX_WEEKS_AHEAD",
    "validate_weeks_ahead",
    "validate_assignments",
    "validate_task_dates",
    "week_start_of",
    "horizon_weeks",
    "week_offset",
    "in_horizon",
    "overlaps",
    "round_half_up",
]
