from __future__ import annotations

from enum import Enum


class BottleneckSeverity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"
    SEVERE = "severe"


class BurnoutRiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SuggestionType(str, Enum):
    REASSIGN = "reassign"
    DELAY = "delay"
    SPLIT = "split"
    HIRE = "hire"


__all__ = ["BottleneckSeverity", "BurnoutRiskLevel", "SuggestionType"]
