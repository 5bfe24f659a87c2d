"""Shared test fixtures."""

import json
from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml

from weatherboard.config.defaults import DEFAULT_CITIES
from weatherboard.config.schema import DashboardConfig
from weatherboard.models.weather import Locator
from weatherboard.preferences import UnitPreferenceStore
from weatherboard.storage.database import connect, ensure_schema

DAY0 = date(2026, 2, 10)


def _condition(description: str, icon: str) -> list[dict]:
    return [{"id": 800, "main": description.title(), "description": description, "icon": icon}]


class FakeWeatherClient:
    """Stands in for OpenWeatherClient in controller and app tests.

    `responses` maps a locator description (city name or "lat,lon") to a
    (current, forecast) pair, an exception to raise, or a callable taking the
    unit and returning either of those.
    """

    def __init__(self, responses: dict, api_key: str = "test-key"):
        self.responses = responses
        self.api_key = api_key
        self.calls: list[tuple[Locator, str]] = []

    async def fetch_bundle(self, locator: Locator, units) -> tuple[dict, dict]:
        self.calls.append((locator, str(units)))
        value = self.responses.get(locator.describe())
        if value is None:
            raise KeyError(f"no fake response for {locator.describe()}")
        if callable(value) and not isinstance(value, tuple):
            value = value(str(units))
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def make_current():
    def _make(
        name: str = "London",
        country: str | None = "GB",
        temp: float = 14.62,
        description: str = "broken clouds",
        icon: str = "04d",
    ) -> dict:
        data = {
            "weather": _condition(description, icon),
            "main": {"temp": temp, "temp_min": temp - 1, "temp_max": temp + 1},
            "name": name,
            "cod": 200,
        }
        if country is not None:
            data["sys"] = {"country": country}
        return data

    return _make


@pytest.fixture
def make_forecast():
    """Forecast response with 8 entries per day starting at `start` 00:00.

    Day d (0-based) has raw mins from base-0.5+d and maxes up to base+7.5+d,
    so rounded summaries are (base+d, base+8+d). The 12:00 entry is
    'clear sky'/01d, every other entry 'few clouds'/02d.
    """

    def _make(start: date = DAY0, days: int = 5, base: float = 10.0) -> dict:
        entries = []
        for d in range(days):
            day = start + timedelta(days=d)
            for step, hour in enumerate(range(0, 24, 3)):
                t = base + d + step
                midday = hour == 12
                entries.append({
                    "dt_txt": f"{day.isoformat()} {hour:02d}:00:00",
                    "main": {"temp": t, "temp_min": t - 0.5, "temp_max": t + 0.5},
                    "weather": _condition(
                        "clear sky" if midday else "few clouds",
                        "01d" if midday else "02d",
                    ),
                })
        return {"cod": "200", "cnt": len(entries), "list": entries}

    return _make


@pytest.fixture
def fake_client():
    return FakeWeatherClient


@pytest.fixture
def default_config() -> DashboardConfig:
    """Return default DashboardConfig with default cities."""
    return DashboardConfig(cities=DEFAULT_CITIES)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"timeout_seconds": 5},
        "geolocation": {"timeout_ms": 4000},
        "preferences": {"default_units": "metric"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def store(db_path: Path):
    conn = connect(db_path)
    ensure_schema(conn)
    yield UnitPreferenceStore(conn)
    conn.close()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def london_current(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_current_london.json") as f:
        return json.load(f)
