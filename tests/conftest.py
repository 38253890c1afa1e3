import json
from datetime import datetime, timezone

import pytest
import requests

from marine_cli.config import FetcherConfig

NOW = datetime(2025, 10, 6, 9, 30, tzinfo=timezone.utc)


def sample(time, temp=10.0, wind=5.0, pressure=1000.0, wave=1.0, source="noaa"):
    return {
        "time": time,
        "airTemperature": {source: temp},
        "windSpeed": {source: wind},
        "pressure": {source: pressure},
        "waveHeight": {source: wave},
    }


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Returns queued payloads in call order and records each request."""

    def __init__(self, *payloads):
        self.payloads = list(payloads)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        payload = self.payloads.pop(0) if self.payloads else {"hours": []}
        if isinstance(payload, FakeResponse):
            return payload
        if isinstance(payload, requests.RequestException):
            raise payload
        return FakeResponse(payload)


@pytest.fixture
def config(tmp_path):
    return FetcherConfig(
        api_key="test-key",
        output_dir=tmp_path / "public",
        fallback_dir=tmp_path / "fallback",
        log_file=tmp_path / "logs" / "app.log",
    )


@pytest.fixture
def fallbacks(config):
    """Write both fallback files and return their raw bytes."""
    config.fallback_dir.mkdir(parents=True)
    short = json.dumps({"hours": [sample("2025-01-01T00:00:00+00:00", temp=3.0)]}, indent=2)
    daily = json.dumps({"days": [{"date": "2025-01-01", "tempAvg": 3.0, "windAvg": 4.0,
                                  "pressureAvg": 990.0, "waveAvg": 0.5}]}, indent=2)
    config.short_range_fallback.write_text(short)
    config.daily_fallback.write_text(daily)
    return {"short": short.encode(), "daily": daily.encode()}
