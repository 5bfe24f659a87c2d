"""Weather Dashboard: FastAPI app serving the rendered page and controls."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, Field

from weatherboard.config.loader import load_config, resolve_api_key
from weatherboard.config.schema import DashboardConfig
from weatherboard.errors import GeolocationError
from weatherboard.ingest.openweather_client import OpenWeatherClient
from weatherboard.models.common import parse_units
from weatherboard.preferences import UnitPreferenceStore
from weatherboard.render.html import render_page
from weatherboard.storage.database import connect, ensure_schema
from weatherboard.view.controller import DashboardController

logger = logging.getLogger(__name__)

DB_PATH = Path("data") / "weatherboard.db"
GEOLOCATION_ERROR_CODES = (
    GeolocationError.PERMISSION_DENIED,
    GeolocationError.POSITION_UNAVAILABLE,
    GeolocationError.TIMEOUT,
)


class LocationReport(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class LocationFailure(BaseModel):
    code: str = GeolocationError.POSITION_UNAVAILABLE
    message: str = ""


def open_store(config: DashboardConfig, db_path: str | Path) -> UnitPreferenceStore:
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = connect(db_path, check_same_thread=False)
    ensure_schema(conn)
    return UnitPreferenceStore(conn, default=config.preferences.default_units)


def create_app(
    config: DashboardConfig | None = None,
    db_path: str | Path = DB_PATH,
    client: OpenWeatherClient | None = None,
    store: UnitPreferenceStore | None = None,
    boot_on_startup: bool = True,
) -> FastAPI:
    if config is None:
        config = load_config()
    if client is None:
        client = OpenWeatherClient(
            api_key=resolve_api_key(config),
            base_url=config.api.base_url,
            timeout=config.api.timeout_seconds,
        )
    owns_store = store is None
    if store is None:
        store = open_store(config, db_path)

    controller = DashboardController(config, client, store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        boot_task = None
        if boot_on_startup:
            # The page is served while the grid and the location fix are loading
            boot_task = asyncio.create_task(controller.boot())
        logger.info(
            "Weather dashboard ready: %d cities, units=%s",
            len(config.enabled_cities()), store.get().value,
        )
        yield
        if boot_task is not None:
            boot_task.cancel()
            with suppress(asyncio.CancelledError):
                await boot_task
        if owns_store:
            store.conn.close()

    app = FastAPI(title="Weather Dashboard", version="0.1.0", lifespan=lifespan)
    app.state.controller = controller

    def page() -> HTMLResponse:
        return HTMLResponse(render_page(controller.surface, config.geolocation))

    # ── Page ────────────────────────────────────────────────────

    @app.get("/", response_class=HTMLResponse)
    async def serve_dashboard():
        return page()

    @app.get("/search", response_class=HTMLResponse)
    async def search(city: str = ""):
        await controller.submit_search(city)
        return page()

    # ── Controls ────────────────────────────────────────────────

    @app.post("/units/{units}")
    async def set_units(units: str):
        if parse_units(units) is None:
            raise HTTPException(404, f"Unknown units: {units}")
        await controller.set_units(units)
        return RedirectResponse("/", status_code=303)

    @app.post("/refresh")
    async def refresh():
        await controller.render_predefined()
        return RedirectResponse("/", status_code=303)

    @app.post("/location")
    async def report_location(report: LocationReport):
        controller.positions.report(report.latitude, report.longitude)
        ok = await controller.locate()
        return {"status": "success" if ok else "empty"}

    @app.post("/location/error")
    async def report_location_error(failure: LocationFailure):
        code = failure.code
        if code not in GEOLOCATION_ERROR_CODES:
            code = GeolocationError.POSITION_UNAVAILABLE
        controller.positions.fail(code, failure.message)
        await controller.locate()
        return {"status": "empty"}

    # ── Data endpoints ──────────────────────────────────────────

    @app.get("/api/state")
    async def get_state():
        """Units, remembered identifiers and per-region status."""
        return controller.snapshot()

    @app.get("/api/health")
    async def get_health():
        """Quick health check."""
        return {
            "api_key_configured": bool(client.api_key),
            "units": store.get().value,
            "cities": len(config.enabled_cities()),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    cfg = load_config()
    uvicorn.run(create_app(cfg), host=cfg.server.host, port=cfg.server.port)
