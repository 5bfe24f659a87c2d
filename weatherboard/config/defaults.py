"""Default predefined city list, as OpenWeatherMap `q` queries."""

from weatherboard.config.schema import CityConfig

DEFAULT_CITIES: list[CityConfig] = [
    CityConfig(name="New York, US"),
    CityConfig(name="London, GB"),
    CityConfig(name="Tokyo, JP"),
    CityConfig(name="Sydney, AU"),
    CityConfig(name="Paris, FR"),
    CityConfig(name="Toronto, CA"),
    CityConfig(name="Dubai, AE"),
    CityConfig(name="Singapore"),
]
