"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weatherboard.models.common import UnitPreference

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
ICON_BASE_URL = "https://openweathermap.org/img/wn"


class CityConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1)
    enabled: bool = True


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPENWEATHER_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class IconConfig(BaseModel):
    model_config = {"extra": "forbid"}

    large_url_template: str = ICON_BASE_URL + "/{icon}@2x.png"
    small_url_template: str = ICON_BASE_URL + "/{icon}.png"

    def large(self, icon: str) -> str:
        return self.large_url_template.format(icon=icon)

    def small(self, icon: str) -> str:
        return self.small_url_template.format(icon=icon)


class GeolocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_ms: int = Field(default=8000, ge=0)
    maximum_age_ms: int = Field(default=300000, ge=0)
    enable_high_accuracy: bool = False
    # Fixed position for headless use; the browser reports one otherwise
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)


class PreferencesConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_units: UnitPreference = UnitPreference.METRIC


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    icons: IconConfig = IconConfig()
    geolocation: GeolocationConfig = GeolocationConfig()
    preferences: PreferencesConfig = PreferencesConfig()
    server: ServerConfig = ServerConfig()
    cities: list[CityConfig] = []

    def enabled_cities(self) -> list[str]:
        return [c.name for c in self.cities if c.enabled]
