"""Dashboard export pipeline: load every view, then write JSON, HTML and Excel outputs."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, is_dataclass
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, Sequence

import polars as pl

from dashboard.application.dashboard_service import ChartCanvas, ViewState, load_all_views
from dashboard.infrastructure.default_data import DefaultWeeklyDataProvider, WeeklyDataProvider
from dashboard.infrastructure.marketing_api import MarketingDataSource, build_data_source
from dashboard.infrastructure.report_exporter import save_output_workbook, save_summary_html, save_summary_json
from dashboard.settings import DashboardSettings, load_settings

logger = logging.getLogger(__name__)

SUMMARY_JSON_NAME = "summary.json"
DASHBOARD_HTML_NAME = "dashboard.html"
SUMMARY_EXCEL_NAME = "summary.xlsx"


@dataclass(frozen=True)
class PipelineResult:
    views: dict[str, ViewState]
    json_path: Path
    html_path: Path
    excel_path: Path
    excel_saved: bool
    excel_error_message: str
    stage_timings: list[tuple[str, float]]
    total_elapsed: float


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {str(key): _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def build_summary(views: Dict[str, ViewState]) -> dict[str, Any]:
    summary: dict[str, Any] = {"views": {}}
    for name, state in views.items():
        summary["views"][name] = {
            "ok": state.ok,
            "error": state.error,
            "content": _to_jsonable(state.content),
        }
    return summary


def _rows_frame(rows: Sequence[Any]) -> pl.DataFrame:
    return pl.DataFrame([asdict(row) for row in rows])


def build_workbook_sheets(views: Dict[str, ViewState]) -> dict[str, pl.DataFrame]:
    """One sheet per non-empty table; views in an error state contribute nothing."""
    tables: dict[str, Sequence[Any]] = {}

    demographic = views.get("demographic")
    if demographic is not None and demographic.ok and demographic.content is not None:
        tables["gender"] = list(demographic.content.gender_groups.values())
        tables["age_groups"] = list(demographic.content.age_groups.values())
        tables["male_age_groups"] = demographic.content.male_table
        tables["female_age_groups"] = demographic.content.female_table

    device = views.get("device")
    if device is not None and device.ok and device.content is not None:
        tables["devices"] = device.content.devices

    region = views.get("region")
    if region is not None and region.ok and region.content is not None:
        tables["regions"] = region.content.regions

    weekly = views.get("weekly")
    if weekly is not None and weekly.ok and weekly.content is not None:
        tables["weekly"] = weekly.content.weeks

    return {name: _rows_frame(rows) for name, rows in tables.items() if rows}


def run_dashboard_pipeline(
    settings: DashboardSettings | None = None,
    source: MarketingDataSource | None = None,
    weekly_provider: WeeklyDataProvider | None = None,
) -> PipelineResult:
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    settings = settings or load_settings()
    source = source or build_data_source(settings)
    weekly_provider = weekly_provider or DefaultWeeklyDataProvider()
    canvas = ChartCanvas.from_settings(settings)

    output_json_path = settings.output_dir / SUMMARY_JSON_NAME
    output_html_path = settings.output_dir / DASHBOARD_HTML_NAME
    output_excel_path = settings.output_dir / SUMMARY_EXCEL_NAME

    views = load_all_views(source, canvas=canvas, weekly_provider=weekly_provider)
    _mark("load_views")
    failed = [name for name, state in views.items() if not state.ok]
    if failed:
        logger.warning(f"Views in error state: {', '.join(failed)}")

    summary = build_summary(views)
    _mark("build_summary")

    save_summary_json(output_json_path, summary)
    save_summary_html(output_html_path, views)
    _mark("save_json_html")

    sheets = build_workbook_sheets(views)
    if sheets:
        excel_saved, excel_error_message = save_output_workbook(output_excel_path, sheets)
    else:
        excel_saved, excel_error_message = False, "no tabular data to export"
        logger.warning("Excel export skipped: no tabular data")
    _mark("save_excel")

    return PipelineResult(
        views=views,
        json_path=output_json_path,
        html_path=output_html_path,
        excel_path=output_excel_path,
        excel_saved=excel_saved,
        excel_error_message=excel_error_message,
        stage_timings=stage_timings,
        total_elapsed=perf_counter() - pipeline_start,
    )
