from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_ADVISORY_MODEL = "gpt-4o-mini"
DEFAULT_ADVISORY_TIMEOUT_SECONDS = 20.0
DEFAULT_ADVISORY_MAX_TOKENS = 2048


@dataclass(frozen=True)
class AdvisorySettings:
    enabled: bool = False
    api_key: str | None = None
    model: str = DEFAULT_ADVISORY_MODEL
    timeout_seconds: float = DEFAULT_ADVISORY_TIMEOUT_SECONDS
    max_tokens: int = DEFAULT_ADVISORY_MAX_TOKENS


def _env_number(name: str, default, cast):
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", name, raw)
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning("Ignoring non-finite or non-positive %s=%r", name, raw)
        return default
    return value


def is_advisory_enabled() -> bool:
    mode = (os.getenv("WFE_ADVISORY_ENABLED", "off") or "").strip().lower()
    return mode in {"1", "on", "true", "yes"}


def load_advisory_settings() -> AdvisorySettings:
    api_key = (os.getenv("OPENAI_API_KEY", "") or "").strip() or None
    model = (os.getenv("WFE_ADVISORY_MODEL", "") or "").strip() or DEFAULT_ADVISORY_MODEL
    return AdvisorySettings(
        enabled=is_advisory_enabled(),
        api_key=api_key,
        model=model,
        timeout_seconds=_env_number(
            "WFE_ADVISORY_TIMEOUT_SECONDS", DEFAULT_ADVISORY_TIMEOUT_SECONDS, float
        ),
        max_tokens=_env_number("WFE_ADVISORY_MAX_TOKENS", DEFAULT_ADVISORY_MAX_TOKENS, int),
    )


__all__ = [
    "AdvisorySettings",
    "DEFAULT_ADVISORY_MODEL",
    "DEFAULT_ADVISORY_TIMEOUT_SECONDS",
    "DEFAULT_ADVISORY_MAX_TOKENS",
    "is_advisory_enabled",
    "load_advisory_settings",
]
