"""
Support tooling for forecast runs: trace ids bound per request, secret
redaction, and a JSONL event log that operators can attach to bug reports.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import threading
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Mapping

from infra.path import user_data_dir
from infra.version import get_app_version

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"
MAX_REDACTION_DEPTH = 8

_trace_id_var: ContextVar[str | None] = ContextVar("wfe_trace_id", default=None)

_SENSITIVE_KEYS = re.compile(r"password|token|secret|api_?key|authorization|private_key")
_TEXT_SCRUBBERS = (
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), REDACTED_EMAIL),
    (
        re.compile(r"(?i)\b(password|token|secret|api[_-]?key|authorization)\b\s*[:=]\s*[^\s,;]+"),
        rf"\1={REDACTED}",
    ),
    # OpenAI keys show up verbatim in provider error messages.
    (re.compile(r"\bsk-[A-Za-z0-9_\-]{8,}"), REDACTED),
    (re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._\-~=+/]+"), f"Bearer {REDACTED}"),
)


def create_trace_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"fc-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    return (_trace_id_var.get() or "").strip() or None


@contextmanager
def bind_trace_id(trace_id: str | None) -> Iterator[str]:
    bound = (trace_id or "").strip() or create_trace_id()
    token = _trace_id_var.set(bound)
    try:
        yield bound
    finally:
        _trace_id_var.reset(token)


def redact_text(value: str) -> str:
    text = str(value or "")
    for pattern, replacement in _TEXT_SCRUBBERS:
        text = pattern.sub(replacement, text)
    return text


def redact_value(value: Any, depth: int = 0) -> Any:
    if depth >= MAX_REDACTION_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        out: dict[str, Any] = {}
        for key, item in value.items():
            sensitive = _SENSITIVE_KEYS.search(str(key).lower().replace("-", "_"))
            out[str(key)] = REDACTED if sensitive else redact_value(item, depth + 1)
        return out
    if isinstance(value, (list, tuple)):
        return [redact_value(item, depth + 1) for item in value]
    return redact_text(str(value))


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


class OperationalSupport:
    """Append-only JSONL sink for forecast run and crash events."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        self._events_path = Path(events_path or user_data_dir() / "logs" / "support-events.jsonl")
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        trace = (trace_id or current_trace_id() or create_trace_id()).strip()
        event: dict[str, Any] = {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "event_type": (event_type or "").strip() or "support.event",
            "level": (level or "INFO").strip().upper(),
            "trace_id": trace,
            "message": redact_text(message),
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if data:
            event["data"] = redact_value(data)

        with self._write_lock, self._events_path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(event, ensure_ascii=True, sort_keys=True) + "\n")
        return trace

    def record_forecast(
        self,
        *,
        project_id: str,
        weeks_ahead: int,
        summary: Mapping[str, Any],
        bottleneck_count: int,
        advised: bool,
        caller_id: str | None = None,
    ) -> str:
        return self.emit_event(
            event_type="forecast.completed",
            message=f"Forecast for project {project_id} over {weeks_ahead} weeks",
            data={
                "project_id": project_id,
                "weeks_ahead": weeks_ahead,
                "caller_id": caller_id,
                "summary": dict(summary),
                "bottleneck_count": bottleneck_count,
                "advised": advised,
            },
        )

    def capture_exception(
        self,
        *,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: Any,
        context: str,
        trace_id: str | None = None,
    ) -> str:
        return self.emit_event(
            event_type="app.crash",
            level="ERROR",
            trace_id=trace_id,
            message=f"Unhandled exception in {context}: {exc_value}",
            data={
                "context": context,
                "exception_type": getattr(exc_type, "__name__", str(exc_type)),
                "error_code": getattr(exc_value, "code", None),
                "stacktrace": "".join(traceback.format_exception(exc_type, exc_value, exc_traceback)),
            },
        )

    def iter_events(self) -> Iterator[dict[str, Any]]:
        if not self._events_path.exists():
            return
        with self._events_path.open(encoding="utf-8", errors="ignore") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(event, dict):
                    yield event

    def read_events(self, *, trace_id: str | None = None) -> list[dict[str, Any]]:
        wanted = (trace_id or "").strip()
        return [
            event
            for event in self.iter_events()
            if not wanted or str(event.get("trace_id") or "").strip() == wanted
        ]


_support: OperationalSupport | None = None
_hooks_installed = False


def get_operational_support() -> OperationalSupport:
    global _support
    if _support is None:
        _support = OperationalSupport()
    return _support


def install_global_exception_hooks(support: OperationalSupport | None = None) -> None:
    """Record uncaught exceptions (main thread and workers) before the default hooks run."""
    global _hooks_installed
    if _hooks_installed:
        return
    recorder = support or get_operational_support()

    def record(exc_type, exc_value, exc_tb, context: str) -> None:
        try:
            recorder.capture_exception(
                exc_type=exc_type,
                exc_value=exc_value,
                exc_traceback=exc_tb,
                context=context,
            )
        except OSError:
            logger.debug("Could not record crash event", exc_info=True)

    previous_excepthook = sys.excepthook
    previous_threading_hook = threading.excepthook

    def excepthook(exc_type, exc_value, exc_tb) -> None:
        record(exc_type, exc_value, exc_tb, "main-thread")
        previous_excepthook(exc_type, exc_value, exc_tb)

    def threading_hook(args: Any) -> None:
        name = getattr(args.thread, "name", None) or "worker-thread"
        record(args.exc_type, args.exc_value, args.exc_traceback, f"thread:{name}")
        previous_threading_hook(args)

    sys.excepthook = excepthook
    threading.excepthook = threading_hook
    _hooks_installed = True


__all__ = [
    "OperationalSupport",
    "REDACTED",
    "REDACTED_EMAIL",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
    "install_global_exception_hooks",
    "redact_text",
    "redact_value",
]
