from core.domain.enums import BottleneckSeverity, BurnoutRiskLevel, SuggestionType
from core.domain.resource import Resource
from core.domain.task import ResourceAssignment, Schedule, Task, generate_id

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
