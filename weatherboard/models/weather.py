"""OpenWeatherMap current-conditions and forecast data models."""

from dataclasses import dataclass, field

from weatherboard.models.common import UnitPreference

CURRENT_LOCATION_NAME = "Current Location"


@dataclass(frozen=True)
class CityLocator:
    name: str

    def query_params(self) -> dict[str, str]:
        return {"q": self.name}

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class CoordLocator:
    lat: float
    lon: float

    def query_params(self) -> dict[str, str]:
        return {"lat": str(self.lat), "lon": str(self.lon)}

    def describe(self) -> str:
        return f"{self.lat:.4f},{self.lon:.4f}"


Locator = CityLocator | CoordLocator


@dataclass(frozen=True)
class Condition:
    description: str
    icon: str


@dataclass(frozen=True)
class WeatherSample:
    location_name: str
    country_code: str | None
    current_temp: float
    condition: Condition


@dataclass(frozen=True)
class ForecastSample:
    timestamp_text: str  # "YYYY-MM-DD HH:MM:SS"
    min_temp: float
    max_temp: float
    condition: Condition


@dataclass(frozen=True)
class DailySummary:
    date: str  # YYYY-MM-DD
    min_temp: int
    max_temp: int
    condition: Condition


@dataclass(frozen=True)
class DisplayCard:
    weather: WeatherSample
    hi: int | None
    lo: int | None
    forecast: list[DailySummary]

    @classmethod
    def compose(
        cls, weather: WeatherSample, forecast: list[DailySummary]
    ) -> "DisplayCard":
        """Hi/lo come from the first summary when there is one."""
        first = forecast[0] if forecast else None
        return cls(
            weather=weather,
            hi=first.max_temp if first else None,
            lo=first.min_temp if first else None,
            forecast=list(forecast),
        )


@dataclass
class DashboardState:
    units: UnitPreference = UnitPreference.METRIC
    last_searched_city: str | None = None
    last_coordinates: tuple[float, float] | None = None
    region_status: dict[str, str] = field(default_factory=dict)


def condition_from_json(raw: dict) -> Condition:
    """Upstream returns a list of conditions; the first one is primary."""
    first = raw["weather"][0]
    return Condition(description=first["description"], icon=first["icon"])


def weather_sample_from_json(raw: dict, fallback_name: str = "") -> WeatherSample:
    """Build a WeatherSample from a /weather response.

    Shape errors (KeyError, IndexError, TypeError) propagate to the caller.
    """
    sys_block = raw.get("sys") or {}
    return WeatherSample(
        location_name=raw.get("name") or fallback_name,
        country_code=sys_block.get("country") or None,
        current_temp=raw["main"]["temp"],
        condition=condition_from_json(raw),
    )


def forecast_samples_from_json(raw: dict) -> list[ForecastSample]:
    """Build the 3-hourly sample list from a /forecast response."""
    return [
        ForecastSample(
            timestamp_text=item["dt_txt"],
            min_temp=item["main"]["temp_min"],
            max_temp=item["main"]["temp_max"],
            condition=condition_from_json(item),
        )
        for item in raw["list"]
    ]
