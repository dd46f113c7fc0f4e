from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.advisory import (
    AdviceProvider,
    NullAdviceProvider,
    RebalanceAdvisoryGateway,
    load_advisory_settings,
)
from core.services.forecasting import ResourceForecastService
from infra.db.repositories import (
    SqlAlchemyAssignmentRepository,
    SqlAlchemyResourceRepository,
    SqlAlchemyScheduleRepository,
    SqlAlchemyTaskRepository,
)

logger = logging.getLogger(__name__)


def build_advice_provider() -> AdviceProvider:
    settings = load_advisory_settings()
    if not settings.enabled:
        return NullAdviceProvider()
    if not settings.api_key:
        logger.warning("Rebalance advice enabled but OPENAI_API_KEY is not set")
        return NullAdviceProvider()
    # Imported here so the openai SDK is only loaded when advice is switched on.
    from core.services.advisory.openai_provider import OpenAIAdviceProvider

    return OpenAIAdviceProvider.from_settings(settings)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    resource_repo: SqlAlchemyResourceRepository
    schedule_repo: SqlAlchemyScheduleRepository
    task_repo: SqlAlchemyTaskRepository
    assignment_repo: SqlAlchemyAssignmentRepository
    advisory_gateway: RebalanceAdvisoryGateway
    forecast_service: ResourceForecastService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "resource_repo": self.resource_repo,
            "schedule_repo": self.schedule_repo,
            "task_repo": self.task_repo,
            "assignment_repo": self.assignment_repo,
            "advisory_gateway": self.advisory_gateway,
            "forecast_service": self.forecast_service,
        }


def build_service_graph(session: Session, advice_provider: AdviceProvider | None = None) -> ServiceGraph:
    settings = load_advisory_settings()
    resource_repo = SqlAlchemyResourceRepository(session)
    schedule_repo = SqlAlchemyScheduleRepository(session)
    task_repo = SqlAlchemyTaskRepository(session)
    assignment_repo = SqlAlchemyAssignmentRepository(session)

    if advice_provider is None:
        advice_provider = build_advice_provider()
        enabled = settings.enabled
    else:
        # An explicitly injected provider is always consulted.
        enabled = True

    advisory_gateway = RebalanceAdvisoryGateway(
        provider=advice_provider,
        enabled=enabled,
        timeout_seconds=settings.timeout_seconds,
    )
    logger.info(
        "Rebalance advice provider: %s (active=%s)",
        advice_provider.name,
        advisory_gateway.is_active(),
    )

    forecast_service = ResourceForecastService(
        resource_repo=resource_repo,
        schedule_repo=schedule_repo,
        task_repo=task_repo,
        assignment_repo=assignment_repo,
        advisory_gateway=advisory_gateway,
    )

    return ServiceGraph(
        session=session,
        resource_repo=resource_repo,
        schedule_repo=schedule_repo,
        task_repo=task_repo,
        assignment_repo=assignment_repo,
        advisory_gateway=advisory_gateway,
        forecast_service=forecast_service,
    )


__all__ = ["ServiceGraph", "build_advice_provider", "build_service_graph"]
