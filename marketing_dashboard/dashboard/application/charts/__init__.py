"""Chart geometry helpers."""

from .coordinates import (
    BarChartLayout,
    BubbleMarker,
    LineChartLayout,
    bubble_radius,
    map_bar_chart,
    map_bubbles,
    map_line_chart,
    marker_bounds,
    project_markers,
)

__all__ = [
    "BarChartLayout",
    "BubbleMarker",
    "LineChartLayout",
    "bubble_radius",
    "map_bar_chart",
    "map_bubbles",
    "map_line_chart",
    "marker_bounds",
    "project_markers",
]
