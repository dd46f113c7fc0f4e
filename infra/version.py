from __future__ import annotations

import os

_DEFAULT_APP_VERSION = "0.1.0"


def get_app_version() -> str:
    env_override = (os.getenv("WFE_APP_VERSION") or "").strip()
    if env_override:
        return env_override
    return _DEFAULT_APP_VERSION


__all__ = ["get_app_version"]
