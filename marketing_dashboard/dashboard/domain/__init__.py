"""Domain layer package."""

from .models import (
    AggregatedGroup,
    AgeGroupRow,
    Campaign,
    DemographicSlice,
    DeviceMetrics,
    DevicePerformance,
    MarketingData,
    MarketingStats,
    PerformanceRecord,
    RegionalPerformance,
    RegionMetrics,
    WeeklyMetrics,
    WeeklyPerformance,
)
from .regions import DEFAULT_COORDINATES, region_coordinates

__all__ = [
    "AggregatedGroup",
    "AgeGroupRow",
    "Campaign",
    "DemographicSlice",
    "DeviceMetrics",
    "DevicePerformance",
    "MarketingData",
    "MarketingStats",
    "PerformanceRecord",
    "RegionalPerformance",
    "RegionMetrics",
    "WeeklyMetrics",
    "WeeklyPerformance",
    "DEFAULT_COORDINATES",
    "region_coordinates",
]
