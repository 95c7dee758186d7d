"""Marketing payload ingestion and Excel output with Polars-first and openpyxl fallback."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import polars as pl

from dashboard.domain.models import MarketingData

logger = logging.getLogger(__name__)

EXCEL_SHEET_NAME_LIMIT = 31


class MarketingDataError(RuntimeError):
    """Fetching or decoding the marketing dataset failed."""


def parse_marketing_payload(payload: Any) -> MarketingData:
    if not isinstance(payload, Mapping):
        raise MarketingDataError(
            f"Unexpected marketing data payload: expected a JSON object, got {type(payload).__name__}"
        )
    return MarketingData.from_payload(payload)


def parse_marketing_json(text: str) -> MarketingData:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MarketingDataError(f"Invalid marketing data JSON: {exc.msg} (line {exc.lineno})") from exc
    return parse_marketing_payload(payload)


def read_marketing_json(path: Path) -> MarketingData:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MarketingDataError(f"Could not read marketing data file {path}: {exc}") from exc
    return parse_marketing_json(text)


def _import_openpyxl() -> Any:
    try:
        from openpyxl import Workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required for Excel fallback I/O.") from exc
    return Workbook


def _excel_cell_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (int, bool, str)):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return value


def _write_with_polars(path: Path, sheets: Dict[str, pl.DataFrame]) -> bool:
    if not sheets:
        return False

    try:
        from xlsxwriter import Workbook

        with Workbook(str(path)) as workbook:
            for sheet_name, frame in sheets.items():
                frame.write_excel(workbook=workbook, worksheet=str(sheet_name)[:EXCEL_SHEET_NAME_LIMIT])
        return True
    except Exception as exc:
        logger.debug("Polars Excel writer unavailable, falling back to openpyxl: %s", exc)
        return False


def _write_with_openpyxl(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    Workbook = _import_openpyxl()
    workbook = Workbook()
    default_sheet = workbook.active
    workbook.remove(default_sheet)

    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=str(sheet_name)[:EXCEL_SHEET_NAME_LIMIT])
        worksheet.append(frame.columns)
        for row in frame.iter_rows(named=False):
            worksheet.append([_excel_cell_value(value) for value in row])

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)


def write_output_excel(path: str | Path, sheets: Mapping[str, pl.DataFrame]) -> None:
    """Write output Excel with Polars-first and openpyxl fallback."""
    excel_path = Path(path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)
    sheet_map = dict(sheets)

    if _write_with_polars(excel_path, sheet_map):
        return
    _write_with_openpyxl(excel_path, sheet_map)
