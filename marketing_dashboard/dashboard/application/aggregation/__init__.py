"""Aggregation helpers for dashboard views."""

from .grouping import (
    device_metrics,
    flatten_demographics,
    gender_age_table,
    group_by_age_group,
    group_by_gender,
    group_demographics,
    region_metrics,
    weekly_metrics,
)

__all__ = [
    "device_metrics",
    "flatten_demographics",
    "gender_age_table",
    "group_by_age_group",
    "group_by_gender",
    "group_demographics",
    "region_metrics",
    "weekly_metrics",
]
