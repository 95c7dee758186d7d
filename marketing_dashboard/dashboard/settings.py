"""Environment-driven configuration for the dashboard pipeline."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DATA_PATH = PROJECT_ROOT / "data" / "marketing_data.json"
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "output"
DEFAULT_API_TIMEOUT = 10.0
DEFAULT_CHART_WIDTH = 700.0
DEFAULT_CHART_HEIGHT = 400.0
DEFAULT_CHART_PADDING = 70.0


@dataclass(frozen=True)
class DashboardSettings:
    api_url: str = ""
    data_path: Path = DEFAULT_DATA_PATH
    api_timeout: float = DEFAULT_API_TIMEOUT
    output_dir: Path = DEFAULT_OUTPUT_DIR
    log_level: str = "INFO"
    chart_width: float = DEFAULT_CHART_WIDTH
    chart_height: float = DEFAULT_CHART_HEIGHT
    chart_padding: float = DEFAULT_CHART_PADDING


def _parse_positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


def _parse_log_level(env: Mapping[str, str]) -> str:
    raw = (env.get("DASHBOARD_LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(raw), int):
        raise ValueError(f"Invalid DASHBOARD_LOG_LEVEL: {raw}")
    return raw


def _resolve_path(raw: str | None, default: Path) -> Path:
    if raw is None or raw.strip() == "":
        return default
    path = Path(raw.strip()).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def load_settings(env: Mapping[str, str] | None = None) -> DashboardSettings:
    env = os.environ if env is None else env

    chart_width = _parse_positive_float(env, "DASHBOARD_CHART_WIDTH", DEFAULT_CHART_WIDTH)
    chart_height = _parse_positive_float(env, "DASHBOARD_CHART_HEIGHT", DEFAULT_CHART_HEIGHT)
    chart_padding = _parse_positive_float(env, "DASHBOARD_CHART_PADDING", DEFAULT_CHART_PADDING)
    if chart_padding * 2 >= min(chart_width, chart_height):
        raise ValueError(
            f"DASHBOARD_CHART_PADDING must be less than half of the chart size, got {chart_padding} "
            f"for {chart_width}x{chart_height}"
        )

    return DashboardSettings(
        api_url=(env.get("MARKETING_API_URL") or "").strip(),
        data_path=_resolve_path(env.get("MARKETING_DATA_PATH"), DEFAULT_DATA_PATH),
        api_timeout=_parse_positive_float(env, "MARKETING_API_TIMEOUT", DEFAULT_API_TIMEOUT),
        output_dir=_resolve_path(env.get("DASHBOARD_OUTPUT_DIR"), DEFAULT_OUTPUT_DIR),
        log_level=_parse_log_level(env),
        chart_width=chart_width,
        chart_height=chart_height,
        chart_padding=chart_padding,
    )
