"""Common types and helpers shared across models."""

import math
from datetime import UTC, date, datetime
from enum import StrEnum


class UnitPreference(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def symbol(self) -> str:
        return "°C" if self is UnitPreference.METRIC else "°F"


class RegionStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
    EMPTY = "empty"


def parse_units(value: object) -> UnitPreference | None:
    """Return the matching UnitPreference, or None for anything else."""
    try:
        return UnitPreference(value)
    except ValueError:
        return None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return math.floor(value + 0.5)


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def today_iso() -> str:
    """Current local date as YYYY-MM-DD."""
    return date.today().isoformat()


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
