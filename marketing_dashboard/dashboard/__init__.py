"""Marketing dashboard package."""

from .ingestion import MarketingDataError, parse_marketing_payload, read_marketing_json
from .settings import DashboardSettings, load_settings

__all__ = [
    "MarketingDataError",
    "parse_marketing_payload",
    "read_marketing_json",
    "DashboardSettings",
    "load_settings",
]
