"""Data source adapter tests. HTTP is faked through the ``session`` argument."""
import json
from pathlib import Path

import pytest
import requests

from dashboard.infrastructure.marketing_api import (
    FileMarketingDataSource,
    HttpMarketingDataSource,
    build_data_source,
)
from dashboard.ingestion import MarketingDataError
from dashboard.settings import DashboardSettings


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=None):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def test_http_source_fetches_and_parses(payload):
    session = FakeSession(response=FakeResponse(payload))
    source = HttpMarketingDataSource("http://example.test/data", timeout=3.0, session=session)

    data = source.fetch()

    assert len(data.campaigns) == 2
    assert session.calls == [
        {"url": "http://example.test/data", "headers": {"Accept": "application/json"}, "timeout": 3.0}
    ]


def test_http_source_connection_error():
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    source = HttpMarketingDataSource("http://example.test/data", session=session)

    with pytest.raises(MarketingDataError, match="Failed to fetch data: connection refused"):
        source.fetch()
    assert len(session.calls) == 1


def test_http_source_error_status():
    source = HttpMarketingDataSource("http://example.test/data", session=FakeSession(response=FakeResponse(status_code=500)))
    with pytest.raises(MarketingDataError, match="500"):
        source.fetch()


def test_http_source_invalid_json():
    response = FakeResponse(json_error=json.JSONDecodeError("Expecting value", "", 0))
    source = HttpMarketingDataSource("http://example.test/data", session=FakeSession(response=response))
    with pytest.raises(MarketingDataError, match="not valid JSON"):
        source.fetch()


def test_http_source_non_object_payload():
    source = HttpMarketingDataSource("http://example.test/data", session=FakeSession(response=FakeResponse([1, 2])))
    with pytest.raises(MarketingDataError, match="expected a JSON object"):
        source.fetch()


def test_http_source_uses_requests_module_without_session(monkeypatch, payload):
    captured = {}

    def fake_get(url, headers=None, timeout=None):
        captured["url"] = url
        return FakeResponse(payload)

    monkeypatch.setattr(requests, "get", fake_get)
    data = HttpMarketingDataSource("http://example.test/data").fetch()
    assert captured["url"] == "http://example.test/data"
    assert data.marketing_stats.total_revenue == 5000.0


def test_file_source(tmp_path, payload):
    path = tmp_path / "marketing.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    data = FileMarketingDataSource(path).fetch()
    assert data.campaigns[0].id == "cmp-1"


def test_file_source_missing(tmp_path):
    with pytest.raises(MarketingDataError):
        FileMarketingDataSource(tmp_path / "nope.json").fetch()


def test_build_data_source_prefers_api_url(tmp_path):
    http_source = build_data_source(DashboardSettings(api_url="http://example.test/api", api_timeout=2.5))
    assert isinstance(http_source, HttpMarketingDataSource)
    assert http_source.timeout == 2.5

    file_source = build_data_source(DashboardSettings(data_path=tmp_path / "x.json"))
    assert isinstance(file_source, FileMarketingDataSource)
    assert file_source.path == Path(tmp_path / "x.json")


def test_bundled_sample_dataset_loads():
    data = FileMarketingDataSource(DashboardSettings().data_path).fetch()
    assert len(data.campaigns) == 2
    assert data.marketing_stats.total_clicks == 10692
    assert len(data.weekly_performance) == 4
