"""View controller: predefined grid, geolocation slot and search result.

Each region moves through loading -> success | error/empty. Unit changes
re-run the render step of every region that has a known identifier; they do
not re-validate input or change a region's state. In-flight requests are
never cancelled, so a slow response can overwrite a newer one.
"""

import asyncio
import logging

from weatherboard.config.schema import DashboardConfig
from weatherboard.errors import ConfigurationError, GeolocationError, NotFoundError
from weatherboard.forecast.aggregator import display_card_from_json
from weatherboard.ingest.geolocation import PositionSource
from weatherboard.ingest.openweather_client import OpenWeatherClient
from weatherboard.models.common import RegionStatus, UnitPreference
from weatherboard.models.weather import (
    CURRENT_LOCATION_NAME,
    CityLocator,
    CoordLocator,
    DashboardState,
    Locator,
)
from weatherboard.preferences import UnitPreferenceStore
from weatherboard.render.card import build_card, build_loader
from weatherboard.render.node import Node
from weatherboard.view import surface as slots
from weatherboard.view.surface import Surface

logger = logging.getLogger(__name__)

PREDEFINED = "predefined"
GEOLOCATION = "geolocation"
SEARCH = "search"

EMPTY_SEARCH_TEXT = "Please enter a city name."
CITY_NOT_FOUND_TEXT = "City not found. Please check the name and try again."
PREDEFINED_FAILED_TEXT = "Failed to load predefined cities. Please try again later."
MISSING_KEY_TEXT = (
    "Missing OpenWeather API key. "
    "Set OPENWEATHER_API_KEY or api.api_key in the config."
)


class DashboardController:
    def __init__(
        self,
        config: DashboardConfig,
        client: OpenWeatherClient,
        store: UnitPreferenceStore,
        surface: Surface | None = None,
        positions: PositionSource | None = None,
    ):
        self.config = config
        self.client = client
        self.store = store
        self.surface = surface or Surface(store.get())
        if positions is None:
            geo = config.geolocation
            fixed = None
            if geo.latitude is not None and geo.longitude is not None:
                fixed = (geo.latitude, geo.longitude)
            positions = PositionSource(fixed=fixed)
        self.positions = positions
        self.state = DashboardState(
            units=store.get(),
            region_status={
                PREDEFINED: RegionStatus.IDLE,
                GEOLOCATION: RegionStatus.IDLE,
                SEARCH: RegionStatus.IDLE,
            },
        )
        self._pending: set[asyncio.Task] = set()
        self._config_error_reported = False
        self.store.subscribe(self._on_units_changed)

    # ── Card pipeline ───────────────────────────────────────────

    async def load_card(self, locator: Locator) -> Node:
        """Fetch current + forecast together, aggregate, and render one card."""
        current, forecast = await self.client.fetch_bundle(locator, self.store.get())
        fallback = CURRENT_LOCATION_NAME if isinstance(locator, CoordLocator) else ""
        card = display_card_from_json(current, forecast, fallback_name=fallback)
        return build_card(card, self.store.get(), self.config.icons)

    # ── Regions ─────────────────────────────────────────────────

    async def boot(self) -> None:
        self.surface.set_unit_toggle(self.store.get())
        await asyncio.gather(self.render_predefined(), self.locate())

    async def render_predefined(self) -> None:
        grid = self.surface[slots.CITIES]
        loading = self.surface[slots.CITIES_LOADING]
        grid.clear()
        loading.show()
        self._set_status(PREDEFINED, RegionStatus.LOADING)
        try:
            cards = await asyncio.gather(
                *(self._load_city_or_none(name) for name in self.config.enabled_cities())
            )
            # Overlapping renders replace each other's cards, never add to them
            rendered = [card for card in cards if card is not None]
            grid.fill(rendered)
            self._set_status(PREDEFINED, RegionStatus.SUCCESS)
            logger.info("Rendered %d/%d predefined cities", len(rendered), len(cards))
        except Exception:
            logger.exception("Failed to load predefined cities")
            self.show_banner(PREDEFINED_FAILED_TEXT)
            self._set_status(PREDEFINED, RegionStatus.ERROR)
        finally:
            loading.hide()

    async def locate(self) -> bool:
        """One-shot geolocation read, then render the location card.

        Failures are logged and the region stays empty.
        """
        geo = self.config.geolocation
        loading = self.surface[slots.LOCATION_LOADING]
        loading.show()
        self._set_status(GEOLOCATION, RegionStatus.LOADING)
        try:
            position = await self.positions.current_position(
                geo.timeout_ms, geo.maximum_age_ms
            )
        except GeolocationError as e:
            logger.warning("Geolocation unavailable: %s", e)
            loading.hide()
            self._set_status(GEOLOCATION, RegionStatus.EMPTY)
            return False
        return await self.render_location(position.latitude, position.longitude)

    async def render_location(self, lat: float, lon: float) -> bool:
        container = self.surface[slots.LOCATION]
        loading = self.surface[slots.LOCATION_LOADING]
        container.clear()
        loading.show()
        self._set_status(GEOLOCATION, RegionStatus.LOADING)
        try:
            card = await self.load_card(CoordLocator(lat, lon))
        except ConfigurationError as e:
            self._report_configuration_error(e)
            self._set_status(GEOLOCATION, RegionStatus.EMPTY)
            return False
        except Exception as e:
            logger.warning("Geolocation weather unavailable: %s", e)
            self._set_status(GEOLOCATION, RegionStatus.EMPTY)
            return False
        finally:
            loading.hide()

        container.replace(card)
        self.state.last_coordinates = (lat, lon)
        self._set_status(GEOLOCATION, RegionStatus.SUCCESS)
        return True

    async def submit_search(self, text: str | None) -> bool:
        """Validate the search box input and render the result."""
        city = (text or "").strip()
        if not city:
            self.surface[slots.SEARCH_ERROR].show(EMPTY_SEARCH_TEXT)
            return False
        return await self.render_search(city)

    async def render_search(self, city: str) -> bool:
        error = self.surface[slots.SEARCH_ERROR]
        result = self.surface[slots.SEARCH_RESULT]
        error.hide()
        self.surface[slots.SEARCH_EMPTY].hide()
        result.replace(build_loader())
        self._set_status(SEARCH, RegionStatus.LOADING)
        try:
            card = await self.load_card(CityLocator(city))
        except NotFoundError:
            logger.info("No match for search %r", city)
            self._search_failed()
            return False
        except ConfigurationError as e:
            self._report_configuration_error(e)
            self._search_failed()
            return False
        except Exception:
            logger.exception("Search for %r failed", city)
            self._search_failed()
            return False

        result.replace(card)
        self.state.last_searched_city = city
        self._set_status(SEARCH, RegionStatus.SUCCESS)
        return True

    def _search_failed(self) -> None:
        self.surface[slots.SEARCH_RESULT].clear()
        self.surface[slots.SEARCH_ERROR].show(CITY_NOT_FOUND_TEXT)
        self.state.last_searched_city = None
        self._set_status(SEARCH, RegionStatus.ERROR)

    async def _load_city_or_none(self, name: str) -> Node | None:
        try:
            return await self.load_card(CityLocator(name))
        except ConfigurationError as e:
            self._report_configuration_error(e)
            return None
        except Exception as e:
            logger.warning("Skipping %s: %s", name, e)
            return None

    # ── Units ───────────────────────────────────────────────────

    async def set_units(self, value: object) -> bool:
        """Toggle units and wait for the re-renders it triggers."""
        accepted = self.store.set(value)
        await self.settle()
        return accepted

    async def settle(self) -> None:
        """Wait until every scheduled re-render has finished."""
        while True:
            pending = [t for t in self._pending if not t.done()]
            if not pending:
                break
            await asyncio.gather(*pending)

    def _on_units_changed(self, units: UnitPreference) -> None:
        self.state.units = units
        self.surface.set_unit_toggle(units)

        loop = asyncio.get_running_loop()
        self._schedule(loop, self.render_predefined())
        if self.state.last_searched_city:
            self._schedule(loop, self.render_search(self.state.last_searched_city))
        if self.state.last_coordinates:
            self._schedule(loop, self.render_location(*self.state.last_coordinates))

    def _schedule(self, loop: asyncio.AbstractEventLoop, coro) -> None:
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    # ── Errors / status ─────────────────────────────────────────

    def show_banner(self, message: str) -> None:
        self.surface[slots.BANNER].show(message)

    def _report_configuration_error(self, err: ConfigurationError) -> None:
        if self._config_error_reported:
            return
        self._config_error_reported = True
        logger.error("Configuration error: %s", err)
        self.show_banner(MISSING_KEY_TEXT)

    def _set_status(self, region: str, status: RegionStatus) -> None:
        self.state.region_status[region] = status

    def snapshot(self) -> dict:
        coords = self.state.last_coordinates
        return {
            "units": self.state.units.value,
            "last_searched_city": self.state.last_searched_city,
            "last_coordinates": list(coords) if coords else None,
            "regions": {k: str(v) for k, v in self.state.region_status.items()},
            "banner": None
            if self.surface[slots.BANNER].hidden
            else self.surface[slots.BANNER].text,
        }
