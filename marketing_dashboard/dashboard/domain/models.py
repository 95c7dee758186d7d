"""Domain models for the fetched marketing dataset and its derived projections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return number


def _to_int(value: Any, default: int = 0) -> int:
    number = _to_float(value, default=float(default))
    return int(number)


def _to_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def _mapping_rows(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


@dataclass(frozen=True)
class PerformanceRecord:
    impressions: int = 0
    clicks: int = 0
    conversions: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any] | None) -> "PerformanceRecord":
        row = row if isinstance(row, Mapping) else {}
        return cls(
            impressions=_to_int(row.get("impressions")),
            clicks=_to_int(row.get("clicks")),
            conversions=_to_int(row.get("conversions")),
        )


@dataclass(frozen=True)
class DemographicSlice:
    gender: str
    age_group: str
    performance: PerformanceRecord

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DemographicSlice":
        return cls(
            gender=_to_text(row.get("gender")),
            age_group=_to_text(row.get("age_group")),
            performance=PerformanceRecord.from_row(row.get("performance")),
        )


@dataclass(frozen=True)
class DevicePerformance:
    """Per-device totals. Upstream ``ctr``/``conversion_rate`` are ignored."""

    device: str
    impressions: int = 0
    clicks: int = 0
    conversions: int = 0
    spend: float = 0.0
    revenue: float = 0.0
    percentage_of_traffic: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DevicePerformance":
        return cls(
            device=_to_text(row.get("device")),
            impressions=_to_int(row.get("impressions")),
            clicks=_to_int(row.get("clicks")),
            conversions=_to_int(row.get("conversions")),
            spend=_to_float(row.get("spend")),
            revenue=_to_float(row.get("revenue")),
            percentage_of_traffic=_to_float(row.get("percentage_of_traffic")),
        )


@dataclass(frozen=True)
class RegionalPerformance:
    region: str
    country: str
    revenue: float = 0.0
    spend: float = 0.0
    conversions: int = 0
    impressions: int = 0
    clicks: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RegionalPerformance":
        return cls(
            region=_to_text(row.get("region")),
            country=_to_text(row.get("country")),
            revenue=_to_float(row.get("revenue")),
            spend=_to_float(row.get("spend")),
            conversions=_to_int(row.get("conversions")),
            impressions=_to_int(row.get("impressions")),
            clicks=_to_int(row.get("clicks")),
        )


@dataclass(frozen=True)
class WeeklyPerformance:
    week_start: str
    week_end: str
    impressions: int = 0
    clicks: int = 0
    conversions: int = 0
    spend: float = 0.0
    revenue: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WeeklyPerformance":
        return cls(
            week_start=_to_text(row.get("week_start")),
            week_end=_to_text(row.get("week_end")),
            impressions=_to_int(row.get("impressions")),
            clicks=_to_int(row.get("clicks")),
            conversions=_to_int(row.get("conversions")),
            spend=_to_float(row.get("spend")),
            revenue=_to_float(row.get("revenue")),
        )


@dataclass(frozen=True)
class Campaign:
    id: str
    name: str
    demographic_breakdown: tuple[DemographicSlice, ...] = ()
    device_performance: tuple[DevicePerformance, ...] = ()
    regional_performance: tuple[RegionalPerformance, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Campaign":
        return cls(
            id=_to_text(row.get("id")),
            name=_to_text(row.get("name")),
            demographic_breakdown=tuple(
                DemographicSlice.from_row(item) for item in _mapping_rows(row.get("demographic_breakdown"))
            ),
            device_performance=tuple(
                DevicePerformance.from_row(item) for item in _mapping_rows(row.get("device_performance"))
            ),
            regional_performance=tuple(
                RegionalPerformance.from_row(item) for item in _mapping_rows(row.get("regional_performance"))
            ),
        )


@dataclass(frozen=True)
class MarketingStats:
    total_campaigns: int = 0
    active_campaigns: int = 0
    total_impressions: int = 0
    total_clicks: int = 0
    total_conversions: int = 0
    total_spend: float = 0.0
    total_revenue: float = 0.0
    average_ctr: float = 0.0
    average_conversion_rate: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any] | None) -> "MarketingStats":
        row = row if isinstance(row, Mapping) else {}
        return cls(
            total_campaigns=_to_int(row.get("total_campaigns")),
            active_campaigns=_to_int(row.get("active_campaigns")),
            total_impressions=_to_int(row.get("total_impressions")),
            total_clicks=_to_int(row.get("total_clicks")),
            total_conversions=_to_int(row.get("total_conversions")),
            total_spend=_to_float(row.get("total_spend")),
            total_revenue=_to_float(row.get("total_revenue")),
            average_ctr=_to_float(row.get("average_ctr")),
            average_conversion_rate=_to_float(row.get("average_conversion_rate")),
        )


@dataclass(frozen=True)
class MarketingData:
    """One fetched dataset. ``weekly_performance`` is None when the payload omits it."""

    campaigns: tuple[Campaign, ...]
    marketing_stats: MarketingStats
    weekly_performance: tuple[WeeklyPerformance, ...] | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "MarketingData":
        weekly_raw = payload.get("weekly_performance")
        weekly: tuple[WeeklyPerformance, ...] | None = None
        if weekly_raw is not None:
            weekly = tuple(WeeklyPerformance.from_row(item) for item in _mapping_rows(weekly_raw))
        return cls(
            campaigns=tuple(Campaign.from_row(item) for item in _mapping_rows(payload.get("campaigns"))),
            marketing_stats=MarketingStats.from_row(payload.get("marketing_stats")),
            weekly_performance=weekly,
        )

    def first_campaign(self) -> Campaign | None:
        if not self.campaigns:
            return None
        return self.campaigns[0]


@dataclass(frozen=True)
class AggregatedGroup:
    """Summed counts for one grouping key plus click-share allocated spend/revenue."""

    key: str
    clicks: int
    impressions: int
    conversions: int
    spend_share: float
    revenue_share: float


@dataclass(frozen=True)
class AgeGroupRow:
    age_group: str
    impressions: int
    clicks: int
    conversions: int
    ctr: float
    conversion_rate: float


@dataclass(frozen=True)
class DeviceMetrics:
    device: str
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    percentage_of_traffic: float
    ctr: float
    conversion_rate: float


@dataclass(frozen=True)
class RegionMetrics:
    region: str
    country: str
    revenue: float
    spend: float
    conversions: int
    impressions: int
    clicks: int
    ctr: float
    conversion_rate: float
    roas: float


@dataclass(frozen=True)
class WeeklyMetrics:
    week_start: str
    week_end: str
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float
    roas: float

    @property
    def label(self) -> str:
        return f"Week of {self.week_start[5:10]}"


def weekly_from_rows(rows: Sequence[Mapping[str, Any]]) -> list[WeeklyPerformance]:
    return [WeeklyPerformance.from_row(row) for row in rows if isinstance(row, Mapping)]
