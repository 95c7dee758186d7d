"""Shared numeric/formatting utilities for dashboard projections."""

from __future__ import annotations

from typing import Any, Callable

import polars as pl

ValueFormatter = Callable[[float], str]


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def safe_ratio(num: float, den: float) -> float | None:
    if den <= 0:
        return None
    return num / den


def rate_pct(num: float, den: float) -> float:
    """num/den as a percentage; 0 when the denominator is not positive."""
    ratio = safe_ratio(num, den)
    if ratio is None:
        return 0.0
    return ratio * 100


def ctr(clicks: float, impressions: float) -> float:
    return rate_pct(clicks, impressions)


def conversion_rate(conversions: float, clicks: float) -> float:
    return rate_pct(conversions, clicks)


def roas(revenue: float, spend: float) -> float:
    ratio = safe_ratio(revenue, spend)
    return 0.0 if ratio is None else ratio


def safe_ratio_expr(num: pl.Expr, den: pl.Expr) -> pl.Expr:
    safe_den = pl.when(den > 0).then(den).otherwise(None)
    return num / safe_den


def rate_pct_expr(num: pl.Expr, den: pl.Expr) -> pl.Expr:
    return (safe_ratio_expr(num.cast(pl.Float64), den.cast(pl.Float64)) * 100).fill_null(0.0)


def ctr_expr() -> pl.Expr:
    return rate_pct_expr(pl.col("clicks"), pl.col("impressions")).alias("ctr")


def conversion_rate_expr() -> pl.Expr:
    return rate_pct_expr(pl.col("conversions"), pl.col("clicks")).alias("conversion_rate")


def roas_expr() -> pl.Expr:
    return safe_ratio_expr(pl.col("revenue"), pl.col("spend")).fill_null(0.0).alias("roas")


def fmt_currency(value: float | None) -> str:
    if value is None:
        return "$0.00"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def fmt_pct(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}%"


def fmt_number(value: float | None) -> str:
    if value is None:
        return "0"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"
