# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "WorkloadForecast"


def _platform_data_root() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Directory holding the forecast database, logs, support events and exports.

    WFE_DATA_DIR wins when set; otherwise the platform data root
    (APPDATA, ~/Library/Application Support or XDG_DATA_HOME) plus APP_NAME.
    """
    override = (os.getenv("WFE_DATA_DIR") or "").strip()
    path = Path(override).expanduser() if override else _platform_data_root() / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path.home() / f".{APP_NAME.lower()}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def default_db_path() -> Path:
    return user_data_dir() / "workload_forecast.db"


def default_export_dir() -> Path:
    path = user_data_dir() / "exports"
    path.mkdir(parents=True, exist_ok=True)
    return path
