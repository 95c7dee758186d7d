"""Aggregator: grouped summaries and derived ratios over fetched marketing records.

Grouping is done in two passes. Pass 1 sums counts per normalized key in
first-seen order. Pass 2 allocates campaign-level spend/revenue to each group by
its share of total clicks, which requires the grand total from pass 1.
"""

from __future__ import annotations

from typing import Any, Iterable, Literal, Sequence

import polars as pl

from dashboard.application.aggregation.metrics import (
    conversion_rate_expr,
    ctr_expr,
    roas_expr,
    safe_ratio_expr,
)
from dashboard.domain.models import (
    AggregatedGroup,
    AgeGroupRow,
    Campaign,
    DemographicSlice,
    DeviceMetrics,
    DevicePerformance,
    RegionalPerformance,
    RegionMetrics,
    WeeklyMetrics,
    WeeklyPerformance,
)

GroupDimension = Literal["gender", "age_group"]

COUNT_COLUMNS: list[str] = ["impressions", "clicks", "conversions"]
# Counts are held as floats: upstream totals can exceed the Int64 range.
COUNT_DTYPE = pl.Float64
DEMOGRAPHIC_SCHEMA: dict[str, pl.DataType] = {
    "gender": pl.Utf8,
    "age_group": pl.Utf8,
    "impressions": COUNT_DTYPE,
    "clicks": COUNT_DTYPE,
    "conversions": COUNT_DTYPE,
}
DEVICE_SCHEMA: dict[str, pl.DataType] = {
    "device": pl.Utf8,
    "impressions": COUNT_DTYPE,
    "clicks": COUNT_DTYPE,
    "conversions": COUNT_DTYPE,
    "spend": pl.Float64,
    "revenue": pl.Float64,
    "percentage_of_traffic": pl.Float64,
}
REGION_SCHEMA: dict[str, pl.DataType] = {
    "region": pl.Utf8,
    "country": pl.Utf8,
    "revenue": pl.Float64,
    "spend": pl.Float64,
    "conversions": COUNT_DTYPE,
    "impressions": COUNT_DTYPE,
    "clicks": COUNT_DTYPE,
}
WEEKLY_SCHEMA: dict[str, pl.DataType] = {
    "week_start": pl.Utf8,
    "week_end": pl.Utf8,
    "impressions": COUNT_DTYPE,
    "clicks": COUNT_DTYPE,
    "conversions": COUNT_DTYPE,
    "spend": pl.Float64,
    "revenue": pl.Float64,
}


def _sum_aggregations() -> list[pl.Expr]:
    return [pl.col(column).sum().alias(column) for column in COUNT_COLUMNS]


def _frame(records: Iterable[object], schema: dict[str, pl.DataType]) -> pl.DataFrame:
    items = list(records)
    columns = {name: [getattr(item, name) for item in items] for name in schema}
    for name in COUNT_COLUMNS:
        if name in columns:
            columns[name] = [float(value) for value in columns[name]]
    return pl.DataFrame(columns, schema=schema)


def _with_int_counts(row: dict[str, Any]) -> dict[str, Any]:
    return {**row, **{name: int(row[name]) for name in COUNT_COLUMNS if name in row}}


def _demographic_frame(slices: Iterable[DemographicSlice]) -> pl.DataFrame:
    items = list(slices)
    columns = {
        "gender": [item.gender for item in items],
        "age_group": [item.age_group for item in items],
        "impressions": [float(item.performance.impressions) for item in items],
        "clicks": [float(item.performance.clicks) for item in items],
        "conversions": [float(item.performance.conversions) for item in items],
    }
    return pl.DataFrame(columns, schema=DEMOGRAPHIC_SCHEMA)


def _group_key_expr(dimension: GroupDimension) -> pl.Expr:
    if dimension == "gender":
        return pl.col("gender").str.to_lowercase().alias("group_key")
    if dimension == "age_group":
        return pl.col("age_group").alias("group_key")
    raise ValueError(f"Unsupported grouping dimension: {dimension}")


def _allocation_expr(total_clicks: float, total_amount: float) -> pl.Expr:
    share = safe_ratio_expr(pl.col("clicks").cast(pl.Float64), pl.lit(float(total_clicks)))
    return (share * float(total_amount)).fill_null(0.0)


def flatten_demographics(campaigns: Iterable[Campaign]) -> list[DemographicSlice]:
    """All demographic slices of all campaigns, in campaign order."""
    return [demo for campaign in campaigns for demo in campaign.demographic_breakdown]


def group_demographics(
    slices: Iterable[DemographicSlice],
    dimension: GroupDimension,
    total_spend: float,
    total_revenue: float,
    total_clicks: float | None = None,
) -> dict[str, AggregatedGroup]:
    """Group slices by ``dimension`` and allocate spend/revenue by click share.

    ``total_clicks`` defaults to the clicks summed over ``slices``. When it is
    not positive, every share is 0.
    """
    frame = _demographic_frame(slices).with_columns(_group_key_expr(dimension))

    # Pass 1: per-group sums in first-seen order.
    summed = frame.group_by("group_key", maintain_order=True).agg(_sum_aggregations())
    if total_clicks is None:
        total_clicks = float(frame.get_column("clicks").sum() or 0)

    # Pass 2: shares depend on the grand total, known only after pass 1.
    allocated = summed.with_columns(
        _allocation_expr(total_clicks, total_spend).alias("spend_share"),
        _allocation_expr(total_clicks, total_revenue).alias("revenue_share"),
    )

    groups: dict[str, AggregatedGroup] = {}
    for row in allocated.iter_rows(named=True):
        key = str(row["group_key"])
        groups[key] = AggregatedGroup(
            key=key,
            clicks=int(row["clicks"]),
            impressions=int(row["impressions"]),
            conversions=int(row["conversions"]),
            spend_share=float(row["spend_share"]),
            revenue_share=float(row["revenue_share"]),
        )
    return groups


def group_by_gender(
    slices: Iterable[DemographicSlice],
    total_spend: float,
    total_revenue: float,
    total_clicks: float | None = None,
) -> dict[str, AggregatedGroup]:
    return group_demographics(slices, "gender", total_spend, total_revenue, total_clicks)


def group_by_age_group(
    slices: Iterable[DemographicSlice],
    total_spend: float,
    total_revenue: float,
    total_clicks: float | None = None,
) -> dict[str, AggregatedGroup]:
    return group_demographics(slices, "age_group", total_spend, total_revenue, total_clicks)


def gender_age_table(slices: Iterable[DemographicSlice], gender: str) -> list[AgeGroupRow]:
    """Per-age-group rows for one gender (case-insensitive), in first-seen order."""
    target = str(gender or "").strip().lower()
    frame = _demographic_frame(slices)
    table = (
        frame.filter(pl.col("gender").str.to_lowercase() == pl.lit(target))
        .group_by("age_group", maintain_order=True)
        .agg(_sum_aggregations())
        .with_columns(ctr_expr(), conversion_rate_expr())
    )
    return [
        AgeGroupRow(
            age_group=str(row["age_group"]),
            impressions=int(row["impressions"]),
            clicks=int(row["clicks"]),
            conversions=int(row["conversions"]),
            ctr=float(row["ctr"]),
            conversion_rate=float(row["conversion_rate"]),
        )
        for row in table.iter_rows(named=True)
    ]


def device_metrics(records: Sequence[DevicePerformance]) -> list[DeviceMetrics]:
    frame = _frame(records, DEVICE_SCHEMA).with_columns(ctr_expr(), conversion_rate_expr())
    return [DeviceMetrics(**_with_int_counts(row)) for row in frame.iter_rows(named=True)]


def region_metrics(records: Sequence[RegionalPerformance]) -> list[RegionMetrics]:
    frame = _frame(records, REGION_SCHEMA).with_columns(ctr_expr(), conversion_rate_expr(), roas_expr())
    return [RegionMetrics(**_with_int_counts(row)) for row in frame.iter_rows(named=True)]


def weekly_metrics(records: Sequence[WeeklyPerformance]) -> list[WeeklyMetrics]:
    """Weekly rows sorted by ``week_start``; list index is the chart x position."""
    frame = (
        _frame(records, WEEKLY_SCHEMA)
        .sort("week_start", maintain_order=True)
        .with_columns(ctr_expr(), conversion_rate_expr(), roas_expr())
    )
    return [WeeklyMetrics(**_with_int_counts(row)) for row in frame.iter_rows(named=True)]

