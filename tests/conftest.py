"""Shared fixtures for dashboard tests."""
import copy

import pytest

from dashboard.domain.models import MarketingData
from dashboard.ingestion import MarketingDataError


SAMPLE_PAYLOAD = {
    "campaigns": [
        {
            "id": "cmp-1",
            "name": "Q4 Push",
            "demographic_breakdown": [
                {"gender": "Male", "age_group": "18-24", "performance": {"impressions": 1000, "clicks": 100, "conversions": 10}},
                {"gender": "male", "age_group": "25-34", "performance": {"impressions": 500, "clicks": 50, "conversions": 5}},
                {"gender": "Female", "age_group": "18-24", "performance": {"impressions": 2000, "clicks": 150, "conversions": 30}},
            ],
            "device_performance": [
                {"device": "Mobile", "impressions": 2000, "clicks": 200, "conversions": 20, "spend": 300.0, "revenue": 1500.0, "percentage_of_traffic": 66.7, "ctr": 55.0},
                {"device": "Desktop", "impressions": 1000, "clicks": 100, "conversions": 25, "spend": 200.0, "revenue": 1800.0, "percentage_of_traffic": 33.3},
            ],
            "regional_performance": [
                {"region": "Dubai", "country": "UAE", "revenue": 3000.0, "spend": 600.0, "conversions": 30},
                {"region": "Riyadh", "country": "Saudi Arabia", "revenue": 1000.0, "spend": 250.0, "conversions": 10},
                {"region": "Doha", "country": "Qatar", "revenue": 2000.0, "spend": 400.0, "conversions": 20},
            ],
        },
        {
            "id": "cmp-2",
            "name": "Spring",
            "demographic_breakdown": [
                {"gender": "FEMALE", "age_group": "25-34", "performance": {"impressions": 1500, "clicks": 100, "conversions": 20}},
            ],
        },
    ],
    "marketing_stats": {"total_clicks": 400, "total_spend": 1000.0, "total_revenue": 5000.0},
    "weekly_performance": [
        {"week_start": "2024-10-08", "week_end": "2024-10-14", "impressions": 25919, "clicks": 399, "conversions": 33, "spend": 605.58, "revenue": 13440.26},
        {"week_start": "2024-10-01", "week_end": "2024-10-07", "impressions": 20900, "clicks": 322, "conversions": 27, "spend": 488.31, "revenue": 10837.69},
    ],
}


class StaticSource:
    """Data source returning a fixed dataset, or raising when built with an error."""

    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def marketing_data(payload):
    return MarketingData.from_payload(payload)


@pytest.fixture
def static_source(marketing_data):
    return StaticSource(data=marketing_data)


@pytest.fixture
def failing_source():
    return StaticSource(error=MarketingDataError("Failed to fetch data: connection refused"))


@pytest.fixture
def source_factory():
    return StaticSource
