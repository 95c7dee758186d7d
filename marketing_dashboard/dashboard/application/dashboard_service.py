"""Application service that turns one fetched dataset into page-view projections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from dashboard.application.aggregation.grouping import (
    device_metrics,
    flatten_demographics,
    gender_age_table,
    group_by_age_group,
    group_by_gender,
    region_metrics,
    weekly_metrics,
)
from dashboard.application.aggregation.metrics import fmt_currency, fmt_number
from dashboard.application.charts.coordinates import (
    BarChartLayout,
    BubbleMarker,
    LineChartLayout,
    map_bar_chart,
    map_bubbles,
    map_line_chart,
    marker_bounds,
)
from dashboard.domain.models import (
    AggregatedGroup,
    AgeGroupRow,
    DeviceMetrics,
    MarketingData,
    RegionMetrics,
    WeeklyMetrics,
)
from dashboard.infrastructure.default_data import DefaultWeeklyDataProvider, WeeklyDataProvider
from dashboard.infrastructure.marketing_api import MarketingDataSource
from dashboard.ingestion import MarketingDataError
from dashboard.settings import DEFAULT_CHART_HEIGHT, DEFAULT_CHART_PADDING, DEFAULT_CHART_WIDTH, DashboardSettings

logger = logging.getLogger(__name__)

VIEW_NAMES: tuple[str, ...] = ("demographic", "device", "region", "weekly")
DEFAULT_ERROR_MESSAGE = "Failed to fetch data"
CARD_GENDERS: tuple[tuple[str, str], ...] = (("male", "Males"), ("female", "Females"))


@dataclass(frozen=True)
class ChartCanvas:
    width: float = DEFAULT_CHART_WIDTH
    height: float = DEFAULT_CHART_HEIGHT
    padding: float = DEFAULT_CHART_PADDING

    @classmethod
    def from_settings(cls, settings: DashboardSettings) -> "ChartCanvas":
        return cls(width=settings.chart_width, height=settings.chart_height, padding=settings.chart_padding)


@dataclass(frozen=True)
class MetricCard:
    title: str
    value: float
    display: str


@dataclass(frozen=True)
class DemographicView:
    cards: tuple[MetricCard, ...]
    gender_groups: dict[str, AggregatedGroup]
    age_groups: dict[str, AggregatedGroup]
    age_spend_chart: BarChartLayout
    age_revenue_chart: BarChartLayout
    male_table: tuple[AgeGroupRow, ...]
    female_table: tuple[AgeGroupRow, ...]


@dataclass(frozen=True)
class DeviceView:
    devices: tuple[DeviceMetrics, ...]


@dataclass(frozen=True)
class RegionView:
    regions: tuple[RegionMetrics, ...]
    revenue_markers: tuple[BubbleMarker, ...]
    spend_markers: tuple[BubbleMarker, ...]
    bounds: tuple[tuple[float, float], tuple[float, float]] | None


@dataclass(frozen=True)
class WeeklyView:
    weeks: tuple[WeeklyMetrics, ...]
    revenue_chart: LineChartLayout
    spend_chart: LineChartLayout
    used_fallback: bool


@dataclass(frozen=True)
class ViewState:
    """Outcome of loading one page view: either content or an error message."""

    name: str
    content: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _gender_cards(gender_groups: dict[str, AggregatedGroup]) -> tuple[MetricCard, ...]:
    cards: list[MetricCard] = []
    for key, label in CARD_GENDERS:
        group = gender_groups.get(key)
        clicks = float(group.clicks) if group else 0.0
        spend = group.spend_share if group else 0.0
        revenue = group.revenue_share if group else 0.0
        cards.extend(
            [
                MetricCard(title=f"Total Clicks by {label}", value=clicks, display=fmt_number(clicks)),
                MetricCard(title=f"Total Spend by {label}", value=spend, display=fmt_currency(spend)),
                MetricCard(title=f"Total Revenue by {label}", value=revenue, display=fmt_currency(revenue)),
            ]
        )
    return tuple(cards)


def build_demographic_view(data: MarketingData, canvas: ChartCanvas | None = None) -> DemographicView:
    canvas = canvas or ChartCanvas()
    stats = data.marketing_stats
    slices = flatten_demographics(data.campaigns)

    # Totals come from the campaign-level stats, not from the slices.
    gender_groups = group_by_gender(slices, stats.total_spend, stats.total_revenue, total_clicks=stats.total_clicks)
    age_groups = group_by_age_group(slices, stats.total_spend, stats.total_revenue, total_clicks=stats.total_clicks)

    spend_points = [(key, group.spend_share) for key, group in age_groups.items()]
    revenue_points = [(key, group.revenue_share) for key, group in age_groups.items()]
    return DemographicView(
        cards=_gender_cards(gender_groups),
        gender_groups=gender_groups,
        age_groups=age_groups,
        age_spend_chart=map_bar_chart(spend_points, canvas.width, canvas.height, canvas.padding, fmt_currency),
        age_revenue_chart=map_bar_chart(revenue_points, canvas.width, canvas.height, canvas.padding, fmt_currency),
        male_table=tuple(gender_age_table(slices, "male")),
        female_table=tuple(gender_age_table(slices, "female")),
    )


def build_device_view(data: MarketingData) -> DeviceView:
    campaign = data.first_campaign()
    records = campaign.device_performance if campaign else ()
    return DeviceView(devices=tuple(device_metrics(records)))


def build_region_view(data: MarketingData) -> RegionView:
    campaign = data.first_campaign()
    regions = region_metrics(campaign.regional_performance if campaign else ())
    revenue_markers = map_bubbles(regions, "revenue")
    spend_markers = map_bubbles(regions, "spend")
    return RegionView(
        regions=tuple(regions),
        revenue_markers=tuple(revenue_markers),
        spend_markers=tuple(spend_markers),
        bounds=marker_bounds(revenue_markers),
    )


def build_weekly_view(
    data: MarketingData | None,
    weekly_provider: WeeklyDataProvider | None = None,
    canvas: ChartCanvas | None = None,
) -> WeeklyView:
    """Weekly charts; the provider's data is used when ``data`` has no weekly series."""
    canvas = canvas or ChartCanvas()
    used_fallback = data is None or data.weekly_performance is None
    if used_fallback:
        provider = weekly_provider or DefaultWeeklyDataProvider()
        records = provider.weekly()
    else:
        records = list(data.weekly_performance or ())

    weeks = weekly_metrics(records)
    revenue_points = [(week.label, week.revenue) for week in weeks]
    spend_points = [(week.label, week.spend) for week in weeks]
    return WeeklyView(
        weeks=tuple(weeks),
        revenue_chart=map_line_chart(revenue_points, canvas.width, canvas.height, canvas.padding, fmt_currency),
        spend_chart=map_line_chart(spend_points, canvas.width, canvas.height, canvas.padding, fmt_currency),
        used_fallback=used_fallback,
    )


def load_view(
    name: str,
    source: MarketingDataSource,
    canvas: ChartCanvas | None = None,
    weekly_provider: WeeklyDataProvider | None = None,
) -> ViewState:
    """Fetch once and build one view.

    A fetch failure is terminal for the view and becomes its error state. The
    weekly view instead falls back to the provider's data.
    """
    builders: dict[str, Callable[[MarketingData], Any]] = {
        "demographic": lambda data: build_demographic_view(data, canvas),
        "device": build_device_view,
        "region": build_region_view,
        "weekly": lambda data: build_weekly_view(data, weekly_provider, canvas),
    }
    if name not in builders:
        raise ValueError(f"Unknown view: {name}")

    try:
        data = source.fetch()
    except MarketingDataError as exc:
        if name == "weekly":
            logger.warning(f"Weekly view falling back to default data: {exc}")
            return ViewState(name=name, content=build_weekly_view(None, weekly_provider, canvas))
        logger.error(f"Failed to load {name} view: {exc}")
        return ViewState(name=name, error=str(exc) or DEFAULT_ERROR_MESSAGE)

    view = builders[name](data)
    if name == "weekly" and view.used_fallback:
        logger.warning("Weekly view falling back to default data: payload has no weekly_performance")
    return ViewState(name=name, content=view)


def load_all_views(
    source: MarketingDataSource,
    canvas: ChartCanvas | None = None,
    weekly_provider: WeeklyDataProvider | None = None,
) -> dict[str, ViewState]:
    return {name: load_view(name, source, canvas, weekly_provider) for name in VIEW_NAMES}
