"""
OpenAI-backed advice provider using Chat Completions in JSON mode.
"""

from __future__ import annotations

import logging
from typing import Any, List

from openai import (
    APIConnectionError,
    APIError,
    AuthenticationError,
    OpenAI,
    RateLimitError,
)

from core.exceptions import AdvisoryUnavailableError
from core.services.advisory.models import AdvisoryRequest
from core.services.advisory.policy import (
    DEFAULT_ADVISORY_MAX_TOKENS,
    DEFAULT_ADVISORY_MODEL,
    DEFAULT_ADVISORY_TIMEOUT_SECONDS,
    AdvisorySettings,
)
from core.services.advisory.prompts import SYSTEM_PROMPT, build_user_message
from core.services.advisory.provider import AdviceProvider, parse_suggestions
from core.services.forecasting.models import RebalanceSuggestion

logger = logging.getLogger(__name__)


class OpenAIAdviceProvider(AdviceProvider):
    name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_ADVISORY_MODEL,
        timeout_seconds: float = DEFAULT_ADVISORY_TIMEOUT_SECONDS,
        max_tokens: int = DEFAULT_ADVISORY_MAX_TOKENS,
        client: Any | None = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        if client is not None:
            self.client = client
        elif api_key:
            # Retries would stretch the fixed advisory budget.
            self.client = OpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        else:
            logger.warning("OpenAI API key not configured - rebalance advice will not be available")
            self.client = None

    @classmethod
    def from_settings(cls, settings: AdvisorySettings) -> "OpenAIAdviceProvider":
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            timeout_seconds=settings.timeout_seconds,
            max_tokens=settings.max_tokens,
        )

    def is_available(self) -> bool:
        return self.client is not None

    def suggest(self, request: AdvisoryRequest) -> List[RebalanceSuggestion]:
        if not self.is_available():
            raise AdvisoryUnavailableError(
                "OpenAI client is not configured.",
                code="ADVISORY_UNCONFIGURED",
            )

        logger.info(
            "Requesting rebalance advice from %s (%d bottlenecks, %d burnout risks)",
            self.model,
            len(request.bottlenecks),
            len(request.burnout_risks),
        )
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_message(request)},
                ],
                response_format={"type": "json_object"},
                max_tokens=self.max_tokens,
                temperature=0.3,
            )
        except RateLimitError as e:
            raise AdvisoryUnavailableError(
                f"OpenAI rate limit exceeded: {e}", code="ADVISORY_RATE_LIMITED"
            ) from e
        except AuthenticationError as e:
            raise AdvisoryUnavailableError(
                f"OpenAI authentication failed: {e}", code="ADVISORY_AUTH_FAILED"
            ) from e
        except APIConnectionError as e:
            raise AdvisoryUnavailableError(
                f"OpenAI connection failed: {e}", code="ADVISORY_CONNECTION_FAILED"
            ) from e
        except APIError as e:
            raise AdvisoryUnavailableError(
                f"OpenAI API error: {e}", code="ADVISORY_CALL_FAILED"
            ) from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise AdvisoryUnavailableError(
                "OpenAI returned no choices.", code="ADVISORY_MALFORMED_RESPONSE"
            )
        content = getattr(choices[0].message, "content", None)
        if not content:
            raise AdvisoryUnavailableError(
                "OpenAI returned an empty message.", code="ADVISORY_MALFORMED_RESPONSE"
            )
        return parse_suggestions(content)


__all__ = ["OpenAIAdviceProvider"]
