"""CLI entry point for the weather dashboard."""

import argparse
import asyncio
import logging
from pathlib import Path

from weatherboard.config.loader import get_config_value, load_config, resolve_api_key
from weatherboard.errors import ConfigurationError, NotFoundError, UpstreamError
from weatherboard.forecast.aggregator import display_card_from_json
from weatherboard.ingest.openweather_client import OpenWeatherClient
from weatherboard.models.common import UnitPreference
from weatherboard.models.weather import CityLocator
from weatherboard.preferences import UnitPreferenceStore
from weatherboard.reporting.formatters import format_card_json, format_card_text
from weatherboard.storage.database import connect, ensure_schema

DEFAULT_CONFIG = "config/weatherboard.yaml"
DEFAULT_DB = "data/weatherboard.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherboard",
        description="Weather dashboard for a fixed city list, search and geolocation",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the dashboard web server")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # show
    show_p = sub.add_parser("show", help="Print the card for one city")
    show_p.add_argument("city", help="City name, e.g. 'Paris, FR'")
    show_p.add_argument(
        "--units", choices=[u.value for u in UnitPreference], default=None,
        help="Override the stored unit preference",
    )
    show_p.add_argument("--json", action="store_true", help="Emit JSON")

    # units
    units_p = sub.add_parser("units", help="Show or set the stored unit preference")
    units_p.add_argument(
        "value", nargs="?", choices=[u.value for u in UnitPreference]
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. geolocation.timeout_ms")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "units":
        return _cmd_units(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from weatherboard.dashboard import create_app

    app = create_app(config, db_path=args.db)
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _open_store(config, args) -> UnitPreferenceStore:
    Path(args.db).parent.mkdir(parents=True, exist_ok=True)
    conn = connect(args.db)
    ensure_schema(conn)
    return UnitPreferenceStore(conn, default=config.preferences.default_units)


def _cmd_show(config, args) -> int:
    if args.units:
        units = UnitPreference(args.units)
    else:
        store = _open_store(config, args)
        units = store.get()
        store.conn.close()

    client = OpenWeatherClient(
        api_key=resolve_api_key(config),
        base_url=config.api.base_url,
        timeout=config.api.timeout_seconds,
    )
    try:
        current, forecast = asyncio.run(
            client.fetch_bundle(CityLocator(args.city), units)
        )
    except ConfigurationError:
        print("Error: missing OpenWeather API key (set OPENWEATHER_API_KEY)")
        return 1
    except NotFoundError:
        print(f"City not found: {args.city}")
        return 1
    except UpstreamError as e:
        print(f"Error: weather API returned {e.status_code}")
        return 1

    card = display_card_from_json(current, forecast)
    if args.json:
        print(format_card_json(card, units))
    else:
        print(format_card_text(card, units))
    return 0


def _cmd_units(config, args) -> int:
    store = _open_store(config, args)
    if args.value:
        store.set(args.value)
    print(f"Units: {store.get().value}")
    store.conn.close()
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(f"{args.key} = {get_config_value(config, args.key)}")
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1
