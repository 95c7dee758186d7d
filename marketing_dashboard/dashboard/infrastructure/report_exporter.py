"""Infrastructure adapter for dashboard export targets."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import polars as pl

from dashboard.ingestion import write_output_excel
from dashboard.rendering import write_dashboard_html

logger = logging.getLogger(__name__)


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")


def save_summary_html(path: Path, views: Mapping[str, Any]) -> None:
    write_dashboard_html(path, views)


def save_output_workbook(path: Path, sheets: dict[str, pl.DataFrame]) -> tuple[bool, str]:
    try:
        write_output_excel(path, sheets)
    except PermissionError as exc:
        logger.warning(f"Excel export skipped for {path}: {exc}")
        return False, str(exc)
    return True, ""
