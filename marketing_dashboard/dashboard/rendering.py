"""HTML dashboard rendering with inline SVG charts."""

from __future__ import annotations

from datetime import datetime
from html import escape
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from dashboard.application.aggregation.metrics import fmt_currency, fmt_number, fmt_pct
from dashboard.application.charts.coordinates import (
    BarChartLayout,
    BubbleMarker,
    LineChartLayout,
    project_markers,
)

MAP_WIDTH = 520.0
MAP_HEIGHT = 360.0
MAP_PADDING = 40.0
REVENUE_COLOR = "#3b82f6"
SPEND_COLOR = "#ef4444"
LINE_COLOR = "#10b981"
BAR_COLOR = "#6366f1"


def _num(value: float) -> str:
    return f"{value:.2f}"


def _axis_title(title: str) -> str:
    if "Revenue" in title:
        return "Revenue ($)"
    if "Spend" in title:
        return "Spend ($)"
    return "Value"


def _render_gridlines(layout: LineChartLayout | BarChartLayout) -> str:
    parts: list[str] = []
    for line in layout.gridlines:
        parts.append(
            f"<line x1=\"{_num(layout.padding)}\" y1=\"{_num(line.y)}\" "
            f"x2=\"{_num(layout.width - layout.padding)}\" y2=\"{_num(line.y)}\" "
            "stroke=\"#94a3b8\" stroke-dasharray=\"4 4\" />"
            f"<text x=\"{_num(layout.padding - 8)}\" y=\"{_num(line.y + 4)}\" text-anchor=\"end\" "
            f"class=\"tick\">{escape(line.label)}</text>"
        )
    return "".join(parts)


def _render_axis_labels(layout: LineChartLayout | BarChartLayout) -> str:
    return "".join(
        f"<text x=\"{_num(label.x)}\" y=\"{_num(label.y)}\" text-anchor=\"end\" class=\"tick\" "
        f"transform=\"rotate(45, {_num(label.x)}, {_num(label.y)})\">{escape(label.text)}</text>"
        for label in layout.axis_labels
    )


def _render_axes(layout: LineChartLayout | BarChartLayout) -> str:
    base_y = layout.height - layout.padding
    return (
        f"<line x1=\"{_num(layout.padding)}\" y1=\"{_num(layout.padding)}\" "
        f"x2=\"{_num(layout.padding)}\" y2=\"{_num(base_y)}\" stroke=\"#475569\" stroke-width=\"2\" />"
        f"<line x1=\"{_num(layout.padding)}\" y1=\"{_num(base_y)}\" "
        f"x2=\"{_num(layout.width - layout.padding)}\" y2=\"{_num(base_y)}\" stroke=\"#475569\" stroke-width=\"2\" />"
    )


def _svg_open(width: float, height: float) -> str:
    return (
        f"<svg width=\"{_num(width)}\" height=\"{_num(height)}\" viewBox=\"0 0 {_num(width)} {_num(height)}\" "
        "preserveAspectRatio=\"xMidYMid meet\" xmlns=\"http://www.w3.org/2000/svg\">"
    )


def render_line_chart(title: str, layout: LineChartLayout, x_title: str = "Week") -> str:
    if layout.is_empty:
        return f"<section class=\"chart\"><h3>{escape(title)}</h3><p class=\"muted\">No data available.</p></section>"

    circles = "".join(
        f"<circle cx=\"{_num(point.x)}\" cy=\"{_num(point.y)}\" r=\"6\" fill=\"{LINE_COLOR}\" "
        f"stroke=\"#1f2937\" stroke-width=\"2\"><title>{escape(point.label)}: {escape(point.value_label)}</title></circle>"
        for point in layout.points
    )
    mid_y = layout.height / 2
    svg = (
        _svg_open(layout.width, layout.height)
        + _render_gridlines(layout)
        + _render_axes(layout)
        + _render_axis_labels(layout)
        + f"<text x=\"14\" y=\"{_num(mid_y)}\" text-anchor=\"middle\" class=\"axis-title\" "
        f"transform=\"rotate(-90, 14, {_num(mid_y)})\">{escape(_axis_title(title))}</text>"
        + f"<text x=\"{_num(layout.width / 2)}\" y=\"{_num(layout.height - 4)}\" text-anchor=\"middle\" "
        f"class=\"axis-title\">{escape(x_title)}</text>"
        + f"<polyline fill=\"none\" stroke=\"{LINE_COLOR}\" stroke-width=\"3\" points=\"{layout.polyline}\" />"
        + circles
        + "</svg>"
    )
    return f"<section class=\"chart\"><h3>{escape(title)}</h3>{svg}</section>"


def render_bar_chart(title: str, layout: BarChartLayout) -> str:
    if layout.is_empty:
        return f"<section class=\"chart\"><h3>{escape(title)}</h3><p class=\"muted\">No data available.</p></section>"

    bars = "".join(
        f"<rect x=\"{_num(bar.x)}\" y=\"{_num(bar.y)}\" width=\"{_num(bar.width)}\" height=\"{_num(bar.height)}\" "
        f"fill=\"{BAR_COLOR}\" rx=\"3\"><title>{escape(bar.label)}: {escape(bar.value_label)}</title></rect>"
        for bar in layout.bars
    )
    svg = (
        _svg_open(layout.width, layout.height)
        + _render_gridlines(layout)
        + _render_axes(layout)
        + _render_axis_labels(layout)
        + bars
        + "</svg>"
    )
    return f"<section class=\"chart\"><h3>{escape(title)}</h3>{svg}</section>"


def render_bubble_map(title: str, markers: Sequence[BubbleMarker], color: str) -> str:
    if not markers:
        return f"<section class=\"chart\"><h3>{escape(title)}</h3><p class=\"muted\">No regional data available.</p></section>"

    circles: list[str] = []
    for item in project_markers(markers, MAP_WIDTH, MAP_HEIGHT, MAP_PADDING):
        marker = item.marker
        value_text = fmt_number(marker.value) if marker.metric == "conversions" else fmt_currency(marker.value)
        circles.append(
            f"<circle cx=\"{_num(item.x)}\" cy=\"{_num(item.y)}\" r=\"{_num(marker.radius)}\" fill=\"{color}\" "
            f"fill-opacity=\"0.5\" stroke=\"{color}\"><title>{escape(marker.region)}, {escape(marker.country)}: "
            f"{escape(value_text)}</title></circle>"
            f"<text x=\"{_num(item.x + marker.radius + 4)}\" y=\"{_num(item.y + 4)}\" class=\"tick\">"
            f"{escape(marker.region)}</text>"
        )
    svg = _svg_open(MAP_WIDTH, MAP_HEIGHT) + "".join(circles) + "</svg>"
    return f"<section class=\"chart\"><h3>{escape(title)}</h3>{svg}</section>"


def _render_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    head = "".join(f"<th>{escape(header)}</th>" for header in headers)
    body = "".join("<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>" for row in rows)
    if not body:
        body = f"<tr><td colspan=\"{len(headers)}\" class=\"muted\">No data available.</td></tr>"
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def _render_age_table(title: str, rows: Sequence[Any]) -> str:
    table = _render_table(
        ["Age Group", "Impressions", "Clicks", "Conversions", "CTR (%)", "Conversion Rate (%)"],
        (
            [
                row.age_group,
                fmt_number(row.impressions),
                fmt_number(row.clicks),
                fmt_number(row.conversions),
                fmt_pct(row.ctr),
                fmt_pct(row.conversion_rate),
            ]
            for row in rows
        ),
    )
    return f"<section class=\"chart\"><h3>{escape(title)}</h3>{table}</section>"


def _render_demographic(view: Any) -> str:
    cards = "".join(
        f"<div class=\"card\"><div class=\"card-title\">{escape(card.title)}</div>"
        f"<div class=\"card-value\">{escape(card.display)}</div></div>"
        for card in view.cards
    )
    return (
        f"<div class=\"cards\">{cards}</div>"
        "<div class=\"grid\">"
        f"{render_bar_chart('Total Spend by Age Group', view.age_spend_chart)}"
        f"{render_bar_chart('Total Revenue by Age Group', view.age_revenue_chart)}"
        "</div>"
        "<div class=\"grid\">"
        f"{_render_age_table('Campaign Performance by Male Age Groups', view.male_table)}"
        f"{_render_age_table('Campaign Performance by Female Age Groups', view.female_table)}"
        "</div>"
    )


def _render_device(view: Any) -> str:
    if not view.devices:
        return "<p class=\"muted\">No device performance data available.</p>"
    cards: list[str] = []
    for device in view.devices:
        rows = [
            ("Impressions", fmt_number(device.impressions)),
            ("Clicks", fmt_number(device.clicks)),
            ("Conversions", fmt_number(device.conversions)),
            ("CTR", fmt_pct(device.ctr)),
            ("Conversion Rate", fmt_pct(device.conversion_rate)),
            ("Spend", fmt_currency(device.spend)),
            ("Revenue", fmt_currency(device.revenue)),
        ]
        lines = "".join(f"<div class=\"kv\"><span>{escape(k)}:</span><b>{escape(v)}</b></div>" for k, v in rows)
        cards.append(
            f"<div class=\"card\"><div class=\"card-value\">{escape(device.device)}</div>"
            f"<div class=\"card-title\">{escape(fmt_number(device.percentage_of_traffic))}% of traffic</div>"
            f"{lines}</div>"
        )
    return f"<div class=\"cards\">{''.join(cards)}</div>"


def _render_region(view: Any) -> str:
    table = _render_table(
        ["Region", "Country", "Revenue", "Spend", "Conversions", "ROAS", "Revenue Radius", "Spend Radius"],
        (
            [
                region.region,
                region.country,
                fmt_currency(region.revenue),
                fmt_currency(region.spend),
                fmt_number(region.conversions),
                f"{region.roas:.2f}",
                f"{revenue.radius:.1f}",
                f"{spend.radius:.1f}",
            ]
            for region, revenue, spend in zip(view.regions, view.revenue_markers, view.spend_markers)
        ),
    )
    return (
        "<div class=\"grid\">"
        f"{render_bubble_map('Revenue by Region', view.revenue_markers, REVENUE_COLOR)}"
        f"{render_bubble_map('Spend by Region', view.spend_markers, SPEND_COLOR)}"
        "</div>"
        f"<section class=\"chart\"><h3>Regional Markers</h3>{table}</section>"
    )


def _render_weekly(view: Any) -> str:
    notice = ""
    if view.used_fallback:
        notice = "<p class=\"muted\">Showing the default weekly dataset; live weekly data was unavailable.</p>"
    return (
        f"{notice}<div class=\"grid\">"
        f"{render_line_chart('Weekly Revenue Trends', view.revenue_chart)}"
        f"{render_line_chart('Weekly Spend Trends', view.spend_chart)}"
        "</div>"
    )


VIEW_SECTIONS: tuple[tuple[str, str, Any], ...] = (
    ("demographic", "Demographic View", _render_demographic),
    ("device", "Device Performance Analytics", _render_device),
    ("region", "Regional Analytics", _render_region),
    ("weekly", "Weekly Performance", _render_weekly),
)


def render_dashboard_html(views: Mapping[str, Any], generated_at: str | None = None) -> str:
    sections: list[str] = []
    for name, title, renderer in VIEW_SECTIONS:
        state = views.get(name)
        if state is None:
            continue
        if state.error is not None:
            body = f"<p class=\"error\">Error: {escape(state.error)}</p>"
        elif state.content is None:
            body = "<p class=\"error\">Error: No data available</p>"
        else:
            body = renderer(state.content)
        sections.append(f"<section class=\"panel\" id=\"{escape(name)}\"><h2>{escape(title)}</h2>{body}</section>")

    generated_at = generated_at or datetime.now().strftime("%Y-%m-%d %H:%M")
    sections_html = "".join(sections) or "<section class=\"panel\"><p class=\"muted\">No views to display.</p></section>"

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Marketing Dashboard</title>
  <style>
    :root {{
      --bg: #111827;
      --panel: #1f2937;
      --line: #374151;
      --text: #f3f4f6;
      --sub: #9ca3af;
      --error: #f87171;
    }}
    * {{ box-sizing: border-box; }}
    body {{
      margin: 0;
      background: var(--bg);
      color: var(--text);
      font-family: "Segoe UI", sans-serif;
    }}
    .wrap {{
      max-width: 1600px;
      margin: 0 auto;
      padding: 20px;
    }}
    .panel {{
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 14px;
      padding: 14px 18px;
      margin-bottom: 14px;
    }}
    h1 {{ margin: 0 0 8px; font-size: 28px; }}
    .meta, .muted {{ color: var(--sub); font-size: 13px; }}
    .error {{ color: var(--error); }}
    .grid {{
      display: grid;
      grid-template-columns: repeat(2, minmax(320px, 1fr));
      gap: 12px;
      margin-bottom: 8px;
    }}
    .cards {{
      display: grid;
      grid-template-columns: repeat(3, minmax(220px, 1fr));
      gap: 12px;
      margin-bottom: 12px;
    }}
    .card {{
      border: 1px solid var(--line);
      border-radius: 12px;
      padding: 12px;
    }}
    .card-title {{ color: var(--sub); font-size: 13px; }}
    .card-value {{ font-size: 22px; font-weight: 700; }}
    .kv {{ display: flex; justify-content: space-between; font-size: 13px; margin-top: 4px; }}
    .chart svg {{ max-width: 100%; height: auto; }}
    .tick {{ fill: #d1d5db; font-size: 12px; }}
    .axis-title {{ fill: var(--text); font-size: 14px; font-weight: 700; }}
    table {{ width: 100%; border-collapse: collapse; font-size: 12px; }}
    th, td {{ border: 1px solid var(--line); padding: 6px 8px; text-align: left; }}
    th {{ background: #273244; }}
    @media (max-width: 1080px) {{
      .grid, .cards {{ grid-template-columns: 1fr; }}
    }}
  </style>
</head>
<body>
  <div class="wrap">
    <section class="panel">
      <h1>Marketing Dashboard</h1>
      <div class="meta">Generated: {escape(generated_at)}</div>
    </section>
    {sections_html}
  </div>
</body>
</html>
"""


def write_dashboard_html(output_path: Path, views: Mapping[str, Any]) -> None:
    html = render_dashboard_html(views)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
