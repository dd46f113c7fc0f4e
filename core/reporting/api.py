"""Reporting API wrappers around forecast renderer classes."""

from pathlib import Path
from datetime import date
from contextlib import suppress

from core.services.forecasting import ResourceForecastService
from core.services.forecasting.policy import default_weeks_ahead
from core.reporting.renderers.capacity import CapacityChartRenderer
from core.reporting.renderers.excel import ExcelForecastRenderer
from core.reporting.renderers.pdf import PdfForecastRenderer
from core.reporting.contexts import (
    ExcelForecastContext,
    ForecastReportContext,
    PdfForecastContext,
)


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def build_forecast_context(
    forecast_service: ResourceForecastService,
    project_id: str,
    weeks_ahead: int | None = None,
    as_of: date | None = None,
) -> ForecastReportContext:
    weeks_ahead = default_weeks_ahead() if weeks_ahead is None else weeks_ahead
    as_of = as_of or date.today()
    result = forecast_service.forecast_bottlenecks(project_id, weeks_ahead, as_of=as_of)
    return ForecastReportContext(
        project_id=project_id,
        weeks_ahead=weeks_ahead,
        as_of=as_of,
        result=result,
        workloads=forecast_service.get_resource_workloads(project_id, weeks_ahead, as_of=as_of),
    )


def generate_capacity_png(
    forecast_service: ResourceForecastService,
    project_id: str,
    output_path: str | Path,
    weeks_ahead: int | None = None,
    as_of: date | None = None,
) -> Path:
    ctx = build_forecast_context(forecast_service, project_id, weeks_ahead, as_of)
    return CapacityChartRenderer().render(ctx.result.capacity_forecast, _ensure_parent(Path(output_path)))


def generate_forecast_excel(
    forecast_service: ResourceForecastService,
    project_id: str,
    output_path: str | Path,
    weeks_ahead: int | None = None,
    as_of: date | None = None,
) -> Path:
    base = build_forecast_context(forecast_service, project_id, weeks_ahead, as_of)
    ctx = ExcelForecastContext(**vars(base))
    return ExcelForecastRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_forecast_pdf(
    forecast_service: ResourceForecastService,
    project_id: str,
    output_path: str | Path,
    temp_dir: str | Path | None = None,
    weeks_ahead: int | None = None,
    as_of: date | None = None,
) -> Path:
    output_path = _ensure_parent(Path(output_path))
    base = build_forecast_context(forecast_service, project_id, weeks_ahead, as_of)

    temp_dir = Path(temp_dir) if temp_dir is not None else output_path.parent / "tmp_reports"
    temp_dir.mkdir(parents=True, exist_ok=True)
    chart_path: Path | None = temp_dir / f"capacity_{project_id}.png"
    try:
        CapacityChartRenderer().render(base.result.capacity_forecast, chart_path)
    except ValueError:
        chart_path = None

    ctx = PdfForecastContext(**vars(base), capacity_png_path=str(chart_path) if chart_path else "")
    try:
        return PdfForecastRenderer().render(ctx, output_path)
    finally:
        _cleanup_temp_artifact(chart_path, temp_dir=temp_dir)


__all__ = [
    "build_forecast_context",
    "generate_capacity_png",
    "generate_forecast_excel",
    "generate_forecast_pdf",
]
