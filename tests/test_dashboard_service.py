"""
View loading tests.

Each view fetches once and ends either with content or an error message. The
weekly view never errors on fetch failure; it switches to the default dataset.
"""
import pytest

from dashboard.application.dashboard_service import (
    DEFAULT_ERROR_MESSAGE,
    VIEW_NAMES,
    ChartCanvas,
    DemographicView,
    DeviceView,
    RegionView,
    WeeklyView,
    build_demographic_view,
    build_region_view,
    build_weekly_view,
    load_all_views,
    load_view,
)
from dashboard.domain.models import MarketingData
from dashboard.infrastructure.default_data import DEFAULT_WEEKLY_ROWS, DefaultWeeklyDataProvider
from dashboard.infrastructure.marketing_api import FileMarketingDataSource
from dashboard.ingestion import MarketingDataError
from dashboard.settings import DashboardSettings


# ---------------------------------------------------------------------------
# View builders
# ---------------------------------------------------------------------------

class TestDemographicView:
    def test_cards_use_stats_totals(self, marketing_data):
        view = build_demographic_view(marketing_data)
        cards = {card.title: card for card in view.cards}
        assert cards["Total Clicks by Males"].display == "150"
        assert cards["Total Spend by Males"].value == pytest.approx(375.0)
        assert cards["Total Spend by Males"].display == "$375.00"
        assert cards["Total Revenue by Females"].display == "$3,125.00"
        assert len(view.cards) == 6

    def test_age_charts_follow_first_seen_order(self, marketing_data):
        view = build_demographic_view(marketing_data, ChartCanvas(200, 200, 20))
        assert [bar.label for bar in view.age_spend_chart.bars] == ["18-24", "25-34"]
        assert view.age_spend_chart.bars[0].value == pytest.approx(625.0)
        assert view.age_revenue_chart.bars[1].value_label == "$1,875.00"

    def test_gender_tables(self, marketing_data):
        view = build_demographic_view(marketing_data)
        assert [row.age_group for row in view.male_table] == ["18-24", "25-34"]
        assert [row.age_group for row in view.female_table] == ["18-24", "25-34"]

    def test_missing_gender_cards_are_zero(self):
        data = MarketingData.from_payload({"campaigns": [], "marketing_stats": {"total_spend": 100}})
        view = build_demographic_view(data)
        assert all(card.value == 0 for card in view.cards)
        assert view.age_spend_chart.is_empty


def test_region_view_markers_and_bounds(marketing_data):
    view = build_region_view(marketing_data)
    radii = {marker.region: marker.radius for marker in view.revenue_markers}
    assert radii == {"Dubai": 25.0, "Riyadh": 5.0, "Doha": 15.0}
    assert [marker.metric for marker in view.spend_markers] == ["spend"] * 3
    assert view.bounds == ((24.7136, 46.6753), (25.2854, 55.2708))


def test_region_view_without_campaigns():
    view = build_region_view(MarketingData.from_payload({}))
    assert view.regions == ()
    assert view.bounds is None


def test_weekly_view_uses_payload_series(marketing_data):
    view = build_weekly_view(marketing_data, canvas=ChartCanvas(700, 400, 70))
    assert not view.used_fallback
    assert [week.label for week in view.weeks] == ["Week of 10-01", "Week of 10-08"]
    assert view.revenue_chart.points[0].y > view.revenue_chart.points[1].y
    assert view.spend_chart.gridlines[-1].label == "$605.58"


def test_weekly_view_empty_series_is_not_a_fallback():
    view = build_weekly_view(MarketingData.from_payload({"weekly_performance": []}))
    assert not view.used_fallback
    assert view.revenue_chart.is_empty


def test_weekly_view_falls_back_when_series_absent():
    view = build_weekly_view(MarketingData.from_payload({}))
    assert view.used_fallback
    assert len(view.weeks) == len(DEFAULT_WEEKLY_ROWS) == 12
    assert view.weeks[-1].week_start == "2024-12-17"


# ---------------------------------------------------------------------------
# load_view / load_all_views
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "name, view_type",
    [("demographic", DemographicView), ("device", DeviceView), ("region", RegionView), ("weekly", WeeklyView)],
)
def test_load_view_success(static_source, name, view_type):
    state = load_view(name, static_source)
    assert state.ok
    assert state.name == name
    assert isinstance(state.content, view_type)
    assert static_source.calls == 1


@pytest.mark.parametrize("name", ["demographic", "device", "region"])
def test_load_view_fetch_failure_is_error_state(failing_source, name):
    state = load_view(name, failing_source)
    assert not state.ok
    assert state.content is None
    assert state.error == "Failed to fetch data: connection refused"


def test_load_view_empty_error_message_uses_default(source_factory):
    state = load_view("device", source_factory(error=MarketingDataError("")))
    assert state.error == DEFAULT_ERROR_MESSAGE


def test_weekly_view_falls_back_on_fetch_failure(failing_source, caplog):
    with caplog.at_level("WARNING"):
        state = load_view("weekly", failing_source)
    assert state.ok
    assert state.content.used_fallback
    assert len(state.content.weeks) == 12
    assert "falling back" in caplog.text


def test_weekly_view_uses_injected_provider(failing_source):
    provider = DefaultWeeklyDataProvider(rows=DEFAULT_WEEKLY_ROWS[:3])
    state = load_view("weekly", failing_source, weekly_provider=provider)
    assert [week.week_start for week in state.content.weeks] == ["2024-10-01", "2024-10-08", "2024-10-15"]


def test_unexpected_errors_propagate(source_factory):
    with pytest.raises(KeyError):
        load_view("device", source_factory(error=KeyError("boom")))


def test_unknown_view_raises(static_source):
    with pytest.raises(ValueError, match="Unknown view"):
        load_view("funnel", static_source)
    assert static_source.calls == 0


def test_load_all_views_fetches_once_per_view(static_source):
    views = load_all_views(static_source, canvas=ChartCanvas.from_settings(DashboardSettings()))
    assert list(views) == list(VIEW_NAMES)
    assert all(state.ok for state in views.values())
    assert static_source.calls == len(VIEW_NAMES)


def test_load_all_views_with_failing_source(failing_source):
    views = load_all_views(failing_source)
    assert [name for name, state in views.items() if not state.ok] == ["demographic", "device", "region"]
    assert views["weekly"].content.used_fallback


def test_undecodable_data_file_becomes_error_state(tmp_path):
    path = tmp_path / "marketing.json"
    path.write_bytes(b"\xff\xfe")
    source = FileMarketingDataSource(path)

    device = load_view("device", source)
    assert not device.ok
    assert "Could not read marketing data file" in device.error

    weekly = load_view("weekly", source)
    assert weekly.ok
    assert weekly.content.used_fallback
