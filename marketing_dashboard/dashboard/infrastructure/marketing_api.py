"""Infrastructure adapters that fetch the marketing dataset."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import requests

from dashboard.domain.models import MarketingData
from dashboard.ingestion import MarketingDataError, parse_marketing_payload, read_marketing_json
from dashboard.settings import DashboardSettings

logger = logging.getLogger(__name__)


class MarketingDataSource(Protocol):
    def fetch(self) -> MarketingData: ...


class HttpMarketingDataSource:
    """Fetch the dataset from a JSON HTTP endpoint. One request per call, no retries."""

    def __init__(self, url: str, timeout: float = 10.0, session: requests.Session | None = None) -> None:
        self.url = url
        self.timeout = timeout
        self._http = session or requests
        self.headers = {"Accept": "application/json"}

    def fetch(self) -> MarketingData:
        logger.info(f"Fetching marketing data from {self.url}")
        try:
            response = self._http.get(self.url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error(f"Marketing data request failed: {exc}")
            raise MarketingDataError(f"Failed to fetch data: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise MarketingDataError(f"Failed to fetch data: response from {self.url} is not valid JSON") from exc

        data = parse_marketing_payload(payload)
        logger.info(f"Fetched {len(data.campaigns)} campaigns")
        return data


class FileMarketingDataSource:
    """Read the dataset from a local JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def fetch(self) -> MarketingData:
        logger.info(f"Loading marketing data from {self.path}")
        data = read_marketing_json(self.path)
        logger.info(f"Loaded {len(data.campaigns)} campaigns")
        return data


def build_data_source(settings: DashboardSettings) -> MarketingDataSource:
    if settings.api_url:
        return HttpMarketingDataSource(settings.api_url, timeout=settings.api_timeout)
    return FileMarketingDataSource(settings.data_path)
