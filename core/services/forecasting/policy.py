from __future__ import annotations

import logging
import os

from core.services.forecasting.horizon import MAX_WEEKS_AHEAD

logger = logging.getLogger(__name__)

DEFAULT_WEEKS_AHEAD = 8


def default_weeks_ahead() -> int:
    raw = (os.getenv("WFE_DEFAULT_WEEKS_AHEAD", "") or "").strip()
    if not raw:
        return DEFAULT_WEEKS_AHEAD
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric WFE_DEFAULT_WEEKS_AHEAD=%r", raw)
        return DEFAULT_WEEKS_AHEAD
    if value <= 0 or value > MAX_WEEKS_AHEAD:
        logger.warning("Ignoring out-of-range WFE_DEFAULT_WEEKS_AHEAD=%s", value)
        return DEFAULT_WEEKS_AHEAD
    return value


__all__ = ["DEFAULT_WEEKS_AHEAD", "default_weeks_ahead"]
