"""YAML config loader with credential resolution and dotted-key lookup."""

import os
from pathlib import Path
from typing import Any

import yaml

from weatherboard.config.defaults import DEFAULT_CITIES
from weatherboard.config.schema import DashboardConfig

API_KEY_ENV = "OPENWEATHER_API_KEY"


def load_config(path: str | Path | None = None) -> DashboardConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the defaults. If no cities are specified,
    injects DEFAULT_CITIES.
    """
    raw: dict = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    if "cities" not in raw or not raw["cities"]:
        raw["cities"] = [c.model_dump() for c in DEFAULT_CITIES]

    return DashboardConfig(**raw)


def resolve_api_key(config: DashboardConfig, environ: dict | None = None) -> str:
    """Config value wins; otherwise fall back to OPENWEATHER_API_KEY."""
    if config.api.api_key:
        return config.api.api_key
    if environ is None:
        environ = dict(os.environ)
    return environ.get(API_KEY_ENV, "").strip()


def get_config_value(config: DashboardConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'geolocation.timeout_ms'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
