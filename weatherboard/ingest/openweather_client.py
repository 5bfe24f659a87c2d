"""OpenWeatherMap client for current conditions and 5-day/3-hour forecasts."""

import asyncio
import logging

import httpx

from weatherboard.config.schema import OPENWEATHER_BASE_URL
from weatherboard.errors import ConfigurationError, NotFoundError, UpstreamError
from weatherboard.models.common import UnitPreference
from weatherboard.models.weather import Locator

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weatherboard/0.1.0"


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

    def build_params(self, locator: Locator, units: UnitPreference) -> dict[str, str]:
        """Query parameters for either endpoint.

        Raises ConfigurationError when no credential is configured.
        """
        if not self.api_key:
            raise ConfigurationError("Missing OpenWeather API key")
        params = locator.query_params()
        params["appid"] = self.api_key
        params["units"] = UnitPreference(units).value
        return params

    async def fetch_current(self, locator: Locator, units: UnitPreference) -> dict:
        """Fetch current conditions for a city name or coordinate pair."""
        return await self._get_json("weather", locator, units)

    async def fetch_forecast(self, locator: Locator, units: UnitPreference) -> dict:
        """Fetch the 5-day forecast in 3-hour steps."""
        return await self._get_json("forecast", locator, units)

    async def fetch_bundle(
        self, locator: Locator, units: UnitPreference
    ) -> tuple[dict, dict]:
        """Fetch current conditions and forecast concurrently.

        Fails as a whole if either request fails.
        """
        current, forecast = await asyncio.gather(
            self.fetch_current(locator, units),
            self.fetch_forecast(locator, units),
        )
        return current, forecast

    async def _get_json(
        self, endpoint: str, locator: Locator, units: UnitPreference
    ) -> dict:
        params = self.build_params(locator, units)
        url = f"{self.base_url}/{endpoint}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url, params=params, headers=headers)

        if resp.status_code == 404:
            logger.info("OpenWeather %s: no match for %s", endpoint, locator.describe())
            raise NotFoundError(resp.status_code, resp.text)
        if not resp.is_success:
            logger.error(
                "OpenWeather %s returned %d for %s",
                endpoint, resp.status_code, locator.describe(),
            )
            raise UpstreamError(resp.status_code, resp.text)
        return resp.json()
