# main.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from core.exceptions import DomainError
from core.reporting.api import generate_capacity_png, generate_forecast_excel, generate_forecast_pdf
from core.services.forecasting import to_payload
from core.services.forecasting.policy import default_weeks_ahead
from infra.db.base import create_session_factory
from infra.logging_config import setup_logging
from infra.operational_support import bind_trace_id, get_operational_support
from infra.path import default_export_dir
from infra.services import build_service_graph

logger = logging.getLogger(__name__)

_EXPORTERS = {
    "xlsx": generate_forecast_excel,
    "pdf": generate_forecast_pdf,
    "png": generate_capacity_png,
}


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resource workload forecasting (bottlenecks, burnout, capacity, skill matching)."
    )
    parser.add_argument("--db", help="SQLAlchemy URL of the collaborator store (default: user data dir)")
    parser.add_argument("--trace-id", help="Trace id to stamp on logs and support events")
    sub = parser.add_subparsers(dest="command", required=True)

    fc = sub.add_parser("forecast", help="Print the bottleneck forecast of a project as JSON")
    fc.add_argument("project_id")
    fc.add_argument("--weeks", type=int, default=None, help="Horizon in weeks (1-52)")
    fc.add_argument("--as-of", type=date.fromisoformat, default=None, help="Reference date (YYYY-MM-DD)")
    fc.add_argument("--caller", default=None, help="Caller id recorded in logs")

    mt = sub.add_parser("match", help="Rank active resources for a task by skill fit")
    mt.add_argument("task_id")
    mt.add_argument("schedule_id")

    ex = sub.add_parser("export", help="Write a forecast report (xlsx, pdf or png)")
    ex.add_argument("project_id")
    ex.add_argument("--format", choices=sorted(_EXPORTERS), default="xlsx")
    ex.add_argument("--output", default=None, help="Output file (default: <data dir>/exports)")
    ex.add_argument("--weeks", type=int, default=None)
    ex.add_argument("--as-of", type=date.fromisoformat, default=None)
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> None:
    session = create_session_factory(args.db)()
    try:
        graph = build_service_graph(session)
        service = graph.forecast_service

        if args.command == "forecast":
            result = service.forecast_bottlenecks(
                args.project_id,
                args.weeks,
                caller_id=args.caller,
                as_of=args.as_of,
            )
            payload = to_payload(result)
            get_operational_support().record_forecast(
                project_id=args.project_id,
                weeks_ahead=args.weeks or default_weeks_ahead(),
                summary=payload["summary"],
                bottleneck_count=len(result.bottlenecks),
                advised=result.rebalance_suggestions is not None,
                caller_id=args.caller,
            )
            print(json.dumps(payload, indent=2))
        elif args.command == "match":
            matches = service.match_resources_to_task(args.task_id, args.schedule_id)
            print(json.dumps(to_payload(matches), indent=2))
        else:
            output = Path(args.output) if args.output else (
                default_export_dir() / f"forecast_{args.project_id}.{args.format}"
            )
            written = _EXPORTERS[args.format](
                service, args.project_id, output, weeks_ahead=args.weeks, as_of=args.as_of
            )
            print(f"Wrote {written}")
    finally:
        session.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    setup_logging()
    with bind_trace_id(args.trace_id):
        try:
            _run(args)
        except DomainError as exc:
            logger.error("%s failed [%s]: %s", args.command, exc.code, exc)
            print(f"{exc.code}: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
