"""Environment configuration tests."""
import pytest

from dashboard.settings import (
    DEFAULT_DATA_PATH,
    DEFAULT_OUTPUT_DIR,
    PROJECT_ROOT,
    load_settings,
)


def test_defaults():
    settings = load_settings({})
    assert settings.api_url == ""
    assert settings.data_path == DEFAULT_DATA_PATH
    assert settings.output_dir == DEFAULT_OUTPUT_DIR
    assert settings.api_timeout == 10.0
    assert settings.log_level == "INFO"
    assert (settings.chart_width, settings.chart_height, settings.chart_padding) == (700.0, 400.0, 70.0)


def test_overrides(tmp_path):
    settings = load_settings(
        {
            "MARKETING_API_URL": " http://example.test/api ",
            "MARKETING_API_TIMEOUT": "2.5",
            "DASHBOARD_OUTPUT_DIR": str(tmp_path),
            "DASHBOARD_LOG_LEVEL": "debug",
            "DASHBOARD_CHART_WIDTH": "800",
            "DASHBOARD_CHART_HEIGHT": "500",
            "DASHBOARD_CHART_PADDING": "50",
        }
    )
    assert settings.api_url == "http://example.test/api"
    assert settings.api_timeout == 2.5
    assert settings.output_dir == tmp_path
    assert settings.log_level == "DEBUG"
    assert settings.chart_width == 800.0


def test_relative_paths_resolve_against_project_root():
    settings = load_settings({"MARKETING_DATA_PATH": "data/other.json"})
    assert settings.data_path == PROJECT_ROOT / "data" / "other.json"


def test_blank_values_fall_back_to_defaults():
    settings = load_settings({"MARKETING_API_TIMEOUT": "  ", "DASHBOARD_OUTPUT_DIR": ""})
    assert settings.api_timeout == 10.0
    assert settings.output_dir == DEFAULT_OUTPUT_DIR


def test_reads_os_environ(monkeypatch):
    monkeypatch.setenv("MARKETING_API_URL", "http://env.test")
    assert load_settings().api_url == "http://env.test"


@pytest.mark.parametrize(
    "env, message",
    [
        ({"MARKETING_API_TIMEOUT": "soon"}, "Invalid MARKETING_API_TIMEOUT"),
        ({"MARKETING_API_TIMEOUT": "0"}, "must be > 0"),
        ({"DASHBOARD_CHART_WIDTH": "-5"}, "must be > 0"),
        ({"DASHBOARD_LOG_LEVEL": "LOUD"}, "Invalid DASHBOARD_LOG_LEVEL"),
        ({"DASHBOARD_CHART_PADDING": "200"}, "less than half"),
    ],
)
def test_invalid_values_raise(env, message):
    with pytest.raises(ValueError, match=message):
        load_settings(env)
