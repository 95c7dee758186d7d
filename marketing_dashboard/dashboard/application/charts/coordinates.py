"""Coordinate mapper: numeric series to chart geometry and bubble radii.

Every function here is pure. Degenerate input (empty series, a single point,
an all-zero maximum, identical bubble values) resolves to fixed positions and
radii, never NaN or infinity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from dashboard.application.aggregation.metrics import ValueFormatter, fmt_number, to_float
from dashboard.domain.regions import region_coordinates

GRIDLINE_FRACTIONS: tuple[float, ...] = (0.25, 0.5, 0.75, 1.0)
DEFAULT_MIN_RADIUS = 5.0
DEFAULT_MAX_RADIUS = 25.0
DEFAULT_LABEL_OFFSET = 15.0
BUBBLE_METRICS: tuple[str, ...] = ("revenue", "spend", "conversions")
WEEK_LABEL_PREFIX = "Week of "

ChartPoints = Sequence[tuple[str, float]]
CoordinateLookup = Callable[[str], tuple[float, float]]


@dataclass(frozen=True)
class PlotPoint:
    label: str
    value: float
    x: float
    y: float
    value_label: str = ""


@dataclass(frozen=True)
class Gridline:
    fraction: float
    value: float
    y: float
    label: str


@dataclass(frozen=True)
class AxisLabel:
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class LineChartLayout:
    width: float
    height: float
    padding: float
    max_value: float
    points: tuple[PlotPoint, ...]
    gridlines: tuple[Gridline, ...]
    axis_labels: tuple[AxisLabel, ...]

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def polyline(self) -> str:
        return " ".join(f"{point.x:g},{point.y:g}" for point in self.points)


@dataclass(frozen=True)
class Bar:
    label: str
    value: float
    x: float
    y: float
    width: float
    height: float
    value_label: str


@dataclass(frozen=True)
class BarChartLayout:
    width: float
    height: float
    padding: float
    max_value: float
    bars: tuple[Bar, ...]
    gridlines: tuple[Gridline, ...]
    axis_labels: tuple[AxisLabel, ...]

    @property
    def is_empty(self) -> bool:
        return not self.bars


@dataclass(frozen=True)
class BubbleMarker:
    region: str
    country: str
    lat: float
    lon: float
    metric: str
    value: float
    radius: float


@dataclass(frozen=True)
class ProjectedBubble:
    marker: BubbleMarker
    x: float
    y: float


def _plot_size(width: float, height: float, padding: float) -> tuple[float, float]:
    return max(0.0, width - 2 * padding), max(0.0, height - 2 * padding)


def _y_interval(plot_height: float, max_value: float) -> float:
    # Non-positive maximum collapses every point onto the baseline.
    if max_value <= 0:
        return 0.0
    return plot_height / max_value


def _value_y(value: float, height: float, padding: float, y_interval: float) -> float:
    return height - padding - value * y_interval


def _gridlines(
    max_value: float,
    height: float,
    padding: float,
    y_interval: float,
    format_value: ValueFormatter,
) -> tuple[Gridline, ...]:
    lines: list[Gridline] = []
    for fraction in GRIDLINE_FRACTIONS:
        value = fraction * max_value
        lines.append(
            Gridline(
                fraction=fraction,
                value=value,
                y=_value_y(value, height, padding, y_interval),
                label=format_value(value),
            )
        )
    return tuple(lines)


def axis_label_text(label: str) -> str:
    return str(label).replace(WEEK_LABEL_PREFIX, "")


def x_position(index: int, count: int, padding: float, plot_width: float) -> float:
    """X of point ``index`` out of ``count``; a lone point sits on the left padding."""
    if count < 2:
        return padding
    return padding + index * (plot_width / (count - 1))


def map_line_chart(
    points: ChartPoints,
    width: float,
    height: float,
    padding: float,
    format_value: ValueFormatter = fmt_number,
    label_offset: float = DEFAULT_LABEL_OFFSET,
) -> LineChartLayout:
    values = [to_float(value) for _, value in points]
    plot_width, plot_height = _plot_size(width, height, padding)
    if not values:
        return LineChartLayout(width, height, padding, 0.0, (), (), ())

    max_value = max(values)
    y_interval = _y_interval(plot_height, max_value)
    count = len(values)

    mapped: list[PlotPoint] = []
    labels: list[AxisLabel] = []
    for idx, ((label, _), value) in enumerate(zip(points, values)):
        x = x_position(idx, count, padding, plot_width)
        mapped.append(
            PlotPoint(
                label=str(label),
                value=value,
                x=x,
                y=_value_y(value, height, padding, y_interval),
                value_label=format_value(value),
            )
        )
        labels.append(AxisLabel(text=axis_label_text(label), x=x, y=height - padding + label_offset))

    return LineChartLayout(
        width=width,
        height=height,
        padding=padding,
        max_value=max_value,
        points=tuple(mapped),
        gridlines=_gridlines(max_value, height, padding, y_interval, format_value),
        axis_labels=tuple(labels),
    )


def map_bar_chart(
    points: ChartPoints,
    width: float,
    height: float,
    padding: float,
    format_value: ValueFormatter = fmt_number,
    bar_gap: float = 0.2,
    label_offset: float = DEFAULT_LABEL_OFFSET,
) -> BarChartLayout:
    values = [to_float(value) for _, value in points]
    plot_width, plot_height = _plot_size(width, height, padding)
    if not values:
        return BarChartLayout(width, height, padding, 0.0, (), (), ())

    max_value = max(values)
    y_interval = _y_interval(plot_height, max_value)
    slot = plot_width / len(values)
    bar_width = slot * (1 - min(max(bar_gap, 0.0), 1.0))

    bars: list[Bar] = []
    labels: list[AxisLabel] = []
    for idx, ((label, _), value) in enumerate(zip(points, values)):
        bar_height = max(value, 0.0) * y_interval
        x = padding + idx * slot + (slot - bar_width) / 2
        bars.append(
            Bar(
                label=str(label),
                value=value,
                x=x,
                y=height - padding - bar_height,
                width=bar_width,
                height=bar_height,
                value_label=format_value(value),
            )
        )
        labels.append(AxisLabel(text=axis_label_text(label), x=x + bar_width / 2, y=height - padding + label_offset))

    return BarChartLayout(
        width=width,
        height=height,
        padding=padding,
        max_value=max_value,
        bars=tuple(bars),
        gridlines=_gridlines(max_value, height, padding, y_interval, format_value),
        axis_labels=tuple(labels),
    )


def bubble_radius(
    value: float,
    values: Sequence[float],
    min_radius: float = DEFAULT_MIN_RADIUS,
    max_radius: float = DEFAULT_MAX_RADIUS,
) -> float:
    """Linear min-max scaling of ``value`` onto [min_radius, max_radius].

    Identical (or no) sibling values have no range to scale over; they get the
    mid-range radius.
    """
    if not values:
        return (min_radius + max_radius) / 2
    lo = min(values)
    hi = max(values)
    span = hi - lo
    if span <= 0:
        return (min_radius + max_radius) / 2
    return min_radius + (value - lo) / span * (max_radius - min_radius)


def map_bubbles(
    regions: Sequence[Any],
    metric: str,
    min_radius: float = DEFAULT_MIN_RADIUS,
    max_radius: float = DEFAULT_MAX_RADIUS,
    lookup: CoordinateLookup = region_coordinates,
) -> list[BubbleMarker]:
    if metric not in BUBBLE_METRICS:
        raise ValueError(f"Unsupported bubble metric: {metric}")

    values = [to_float(getattr(item, metric, 0.0)) for item in regions]
    markers: list[BubbleMarker] = []
    for item, value in zip(regions, values):
        lat, lon = lookup(item.region)
        markers.append(
            BubbleMarker(
                region=item.region,
                country=item.country,
                lat=lat,
                lon=lon,
                metric=metric,
                value=value,
                radius=bubble_radius(value, values, min_radius=min_radius, max_radius=max_radius),
            )
        )
    return markers


def marker_bounds(markers: Sequence[BubbleMarker]) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """((south, west), (north, east)) enclosing all markers."""
    if not markers:
        return None
    lats = [marker.lat for marker in markers]
    lons = [marker.lon for marker in markers]
    return (min(lats), min(lons)), (max(lats), max(lons))


def project_markers(
    markers: Sequence[BubbleMarker],
    width: float,
    height: float,
    padding: float,
) -> list[ProjectedBubble]:
    bounds = marker_bounds(markers)
    if bounds is None:
        return []
    (south, west), (north, east) = bounds
    plot_width, plot_height = _plot_size(width, height, padding)

    projected: list[ProjectedBubble] = []
    for marker in markers:
        if east > west:
            x = padding + (marker.lon - west) / (east - west) * plot_width
        else:
            x = padding + plot_width / 2
        if north > south:
            y = height - padding - (marker.lat - south) / (north - south) * plot_height
        else:
            y = padding + plot_height / 2
        projected.append(ProjectedBubble(marker=marker, x=x, y=y))
    return projected
