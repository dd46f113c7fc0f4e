from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.services.forecasting.models import BottleneckPrediction, BurnoutRisk


@dataclass
class WorkloadDigest:
    resource_id: str
    resource_name: str
    role: str
    average_utilization: float
    is_over_allocated: bool


@dataclass
class RosterEntry:
    id: str
    name: str
    role: str
    skills: List[str] = field(default_factory=list)


@dataclass
class AdvisoryRequest:
    workloads: List[WorkloadDigest]
    bottlenecks: List[BottleneckPrediction]
    burnout_risks: List[BurnoutRisk]
    resources: List[RosterEntry]


__all__ = ["WorkloadDigest", "RosterEntry", "AdvisoryRequest"]
