from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from core.exceptions import AdvisoryUnavailableError
from core.models import SuggestionType
from core.services.advisory.models import AdvisoryRequest
from core.services.forecasting.models import RebalanceSuggestion


class RebalanceSuggestionSchema(BaseModel):
    """Wire shape of one suggestion; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: SuggestionType
    description: str
    affected_resource_id: Optional[str] = Field(default=None, alias="affectedResourceId")
    affected_task_id: Optional[str] = Field(default=None, alias="affectedTaskId")
    estimated_impact: str = Field(alias="estimatedImpact")
    confidence: float = Field(ge=0, le=100)

    def to_domain(self) -> RebalanceSuggestion:
        return RebalanceSuggestion(
            type=self.type,
            description=self.description,
            estimated_impact=self.estimated_impact,
            confidence=self.confidence,
            affected_resource_id=self.affected_resource_id,
            affected_task_id=self.affected_task_id,
        )


_SUGGESTION_LIST = TypeAdapter(List[RebalanceSuggestionSchema])


def parse_suggestions(raw: Any) -> List[RebalanceSuggestion]:
    """
    Validate a provider response. ``raw`` may be JSON text, a list of suggestion
    objects, or an object wrapping them under ``suggestions``.
    """
    data = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise AdvisoryUnavailableError(
                "Advice provider returned invalid JSON.",
                code="ADVISORY_MALFORMED_RESPONSE",
            ) from exc
    if isinstance(data, dict) and "suggestions" in data:
        data = data["suggestions"]
    if not isinstance(data, list):
        raise AdvisoryUnavailableError(
            "Advice provider response is not a suggestion list.",
            code="ADVISORY_MALFORMED_RESPONSE",
        )
    try:
        parsed = _SUGGESTION_LIST.validate_python(data)
    except SchemaValidationError as exc:
        raise AdvisoryUnavailableError(
            f"Advice provider response failed validation: {exc.error_count()} error(s).",
            code="ADVISORY_MALFORMED_RESPONSE",
        ) from exc
    return [item.to_domain() for item in parsed]


class AdviceProvider(ABC):
    """Source of rebalance suggestions. Failures raise AdvisoryUnavailableError."""

    name: str = "provider"

    def is_available(self) -> bool:
        return True

    @abstractmethod
    def suggest(self, request: AdvisoryRequest) -> List[RebalanceSuggestion]: ...


class NullAdviceProvider(AdviceProvider):
    name = "null"

    def is_available(self) -> bool:
        return False

    def suggest(self, request: AdvisoryRequest) -> List[RebalanceSuggestion]:
        raise AdvisoryUnavailableError(
            "No advice provider is configured.",
            code="ADVISORY_UNCONFIGURED",
        )


__all__ = [
    "RebalanceSuggestionSchema",
    "parse_suggestions",
    "AdviceProvider",
    "NullAdviceProvider",
]
