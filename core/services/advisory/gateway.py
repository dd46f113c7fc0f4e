from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, List, Optional, Sequence

from core.exceptions import AdvisoryUnavailableError
from core.models import Resource
from core.services.advisory.models import AdvisoryRequest, RosterEntry, WorkloadDigest
from core.services.advisory.policy import DEFAULT_ADVISORY_TIMEOUT_SECONDS
from core.services.advisory.provider import AdviceProvider, NullAdviceProvider
from core.services.forecasting.models import (
    BottleneckPrediction,
    BurnoutRisk,
    RebalanceSuggestion,
    ResourceWorkload,
)

logger = logging.getLogger(__name__)


def build_advisory_request(
    workloads: List[ResourceWorkload],
    bottlenecks: List[BottleneckPrediction],
    burnout_risks: List[BurnoutRisk],
    resources: List[Resource],
) -> AdvisoryRequest:
    return AdvisoryRequest(
        workloads=[
            WorkloadDigest(
                resource_id=w.resource_id,
                resource_name=w.resource_name,
                role=w.role,
                average_utilization=w.average_utilization,
                is_over_allocated=w.is_over_allocated,
            )
            for w in workloads
        ],
        bottlenecks=list(bottlenecks),
        burnout_risks=list(burnout_risks),
        resources=[
            RosterEntry(id=r.id, name=r.name, role=r.role, skills=list(r.skills or []))
            for r in resources
        ],
    )


class RebalanceAdvisoryGateway:
    """
    Best-effort bridge to an AdviceProvider. Every failure path (disabled,
    unavailable, timeout, malformed output) yields None instead of raising.
    """

    def __init__(
        self,
        provider: AdviceProvider | None = None,
        enabled: bool = True,
        timeout_seconds: float = DEFAULT_ADVISORY_TIMEOUT_SECONDS,
    ):
        self._provider = provider or NullAdviceProvider()
        self._enabled = enabled
        self._timeout = timeout_seconds

    @property
    def provider(self) -> AdviceProvider:
        return self._provider

    def is_active(self) -> bool:
        if not self._enabled:
            return False
        try:
            return bool(self._provider.is_available())
        except Exception:
            logger.warning("Advice provider availability check failed", exc_info=True)
            return False

    def request_suggestions(
        self,
        workloads: List[ResourceWorkload],
        bottlenecks: List[BottleneckPrediction],
        burnout_risks: List[BurnoutRisk],
        resources: Sequence[Resource] | Callable[[], Sequence[Resource]],
    ) -> Optional[List[RebalanceSuggestion]]:
        """
        ``resources`` may be a loader; it is only called once the provider is
        actually going to be consulted.
        """
        if not bottlenecks or not self.is_active():
            return None

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rebalance-advice")
        try:
            roster = list(resources() if callable(resources) else resources)
            request = build_advisory_request(workloads, bottlenecks, burnout_risks, roster)
            future = executor.submit(self._provider.suggest, request)
            suggestions = _checked_suggestions(future.result(timeout=self._timeout))
        except FutureTimeoutError:
            logger.warning(
                "Rebalance advice from %s timed out after %.1fs",
                self._provider.name,
                self._timeout,
            )
            return None
        except AdvisoryUnavailableError as exc:
            logger.warning("Rebalance advice unavailable (%s): %s", exc.code, exc)
            return None
        except Exception:
            logger.warning("Rebalance advice failed unexpectedly", exc_info=True)
            return None
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info("Received %d rebalance suggestion(s)", len(suggestions))
        return suggestions


def _checked_suggestions(raw) -> List[RebalanceSuggestion]:
    if not isinstance(raw, (list, tuple)) or not all(
        isinstance(item, RebalanceSuggestion) for item in raw
    ):
        raise AdvisoryUnavailableError(
            f"Advice provider returned {type(raw).__name__} instead of suggestions.",
            code="ADVISORY_MALFORMED_RESPONSE",
        )
    return list(raw)


__all__ = ["build_advisory_request", "RebalanceAdvisoryGateway"]
