"""HTML rendering tests."""
from dashboard.application.charts.coordinates import BubbleMarker, map_line_chart
from dashboard.application.dashboard_service import ViewState, load_all_views
from dashboard.rendering import (
    render_bubble_map,
    render_dashboard_html,
    render_line_chart,
    write_dashboard_html,
)


def test_dashboard_contains_every_view(static_source):
    html = render_dashboard_html(load_all_views(static_source), generated_at="2024-12-31 10:00")

    for section_id in ("demographic", "device", "region", "weekly"):
        assert f'id="{section_id}"' in html
    assert "Generated: 2024-12-31 10:00" in html
    assert "Total Clicks by Males" in html
    assert "$375.00" in html
    assert "Campaign Performance by Female Age Groups" in html
    assert "Mobile" in html
    assert "Revenue by Region" in html
    assert "Weekly Revenue Trends" in html
    assert html.count("<svg") >= 4
    assert "default weekly dataset" not in html


def test_error_state_is_rendered_escaped():
    views = {"device": ViewState(name="device", error="<b>boom</b>")}
    html = render_dashboard_html(views, generated_at="now")
    assert 'class="error">Error: &lt;b&gt;boom&lt;/b&gt;' in html
    assert "<b>boom</b>" not in html


def test_fallback_notice(failing_source):
    html = render_dashboard_html(load_all_views(failing_source), generated_at="now")
    assert "default weekly dataset" in html
    assert html.count('class="error"') == 3


def test_line_chart_polyline_and_empty_state():
    layout = map_line_chart([("Week of 10-01", 0), ("Week of 10-08", 10)], 200, 200, 20)
    svg = render_line_chart("Weekly Revenue Trends", layout)
    assert 'points="20,180 180,20"' in svg
    assert "Revenue ($)" in svg
    assert ">10-08<" in svg

    empty = render_line_chart("Weekly Spend Trends", map_line_chart([], 200, 200, 20))
    assert "No data available." in empty
    assert "<svg" not in empty


def test_bubble_map_escapes_region_names():
    marker = BubbleMarker("A&B", "X", 25.0, 50.0, "revenue", 10.0, 15.0)
    svg = render_bubble_map("Revenue by Region", [marker], "#000")
    assert "A&amp;B" in svg
    assert 'r="15.00"' in svg
    assert "No regional data available." in render_bubble_map("Spend by Region", [], "#000")


def test_write_dashboard_html(tmp_path, static_source):
    path = tmp_path / "nested" / "dashboard.html"
    write_dashboard_html(path, load_all_views(static_source))
    assert path.read_text(encoding="utf-8").startswith("<!doctype html>")


def test_line_chart_tooltips_use_layout_formatter():
    layout = map_line_chart([("Week of 10-01", 120), ("Week of 10-08", 80)], 200, 200, 20)
    svg = render_line_chart("Weekly Clicks", layout)
    assert "<title>Week of 10-01: 120</title>" in svg
    assert "$" not in svg
