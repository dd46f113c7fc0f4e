from __future__ import annotations

from core.domain import (
    BottleneckSeverity,
    BurnoutRiskLevel,
    Resource,
    ResourceAssignment,
    Schedule,
    SuggestionType,
    Task,
    generate_id,
)

__all__ = [
    "generate_id",
    "BottleneckSeverity",
    "BurnoutRiskLevel",
    "SuggestionType",
    "Resource",
    "Schedule",
    "Task",
    "ResourceAssignment",
]
