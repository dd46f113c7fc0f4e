"""
Prompt text for rebalance advice requests.
"""

from __future__ import annotations

import json

from core.services.advisory.models import AdvisoryRequest
from core.services.forecasting.serialization import to_payload

SYSTEM_PROMPT = (
    "You are a resource optimization assistant for project management.\n"
    "Analyze the resource workload data, bottlenecks, and burnout risks provided.\n"
    "Generate practical rebalancing suggestions to resolve over-allocations and reduce burnout risk.\n"
    "Each suggestion must have a type (reassign, delay, split, or hire), a description of the change,\n"
    "an estimatedImpact, optional affectedResourceId and affectedTaskId, and a confidence score\n"
    "from 0-100 indicating how effective the suggestion would be.\n"
    'Respond with a JSON object of the form {"suggestions": [...]}.'
)


def build_user_message(request: AdvisoryRequest) -> str:
    def block(value) -> str:
        return json.dumps(to_payload(value), indent=2)

    return (
        "Here is the current resource situation:\n\n"
        f"## Resource Workloads\n{block(request.workloads)}\n\n"
        f"## Bottlenecks Detected\n{block(request.bottlenecks)}\n\n"
        f"## Burnout Risks\n{block(request.burnout_risks)}\n\n"
        f"## Available Resources\n{block(request.resources)}\n\n"
        "Generate 3-5 actionable rebalancing suggestions to address these issues."
    )


__all__ = ["SYSTEM_PROMPT", "build_user_message"]
