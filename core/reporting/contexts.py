from dataclasses import dataclass
from datetime import date
from typing import List

from core.services.forecasting import ResourceForecastResult, ResourceWorkload


@dataclass
class ForecastReportContext:
    project_id: str
    weeks_ahead: int
    as_of: date
    result: ResourceForecastResult
    workloads: List[ResourceWorkload]


@dataclass
class ExcelForecastContext(ForecastReportContext):
    pass


@dataclass
class PdfForecastContext(ForecastReportContext):
    capacity_png_path: str
