"""One-shot geolocation reads with a bounded wait and a staleness tolerance."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from weatherboard.errors import GeolocationError
from weatherboard.models.common import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float
    captured_at: datetime


def is_position_stale(
    position: Position, maximum_age_ms: int, now: datetime | None = None
) -> bool:
    """Check if a fix is older than the accepted maximum age."""
    if now is None:
        now = utc_now()
    age_ms = (now - position.captured_at).total_seconds() * 1000
    return age_ms > maximum_age_ms


class PositionSource:
    """Holds the latest fix reported by the browser (or configured up front).

    `current_position` returns a fresh-enough fix immediately, raises the last
    reported failure, or waits for the next report up to the timeout.
    """

    def __init__(self, fixed: tuple[float, float] | None = None):
        self._position: Position | None = None
        self._error: GeolocationError | None = None
        self._reported = asyncio.Event()
        self._fixed: Position | None = None
        if fixed is not None:
            self._fixed = Position(fixed[0], fixed[1], utc_now())

    def report(self, latitude: float, longitude: float) -> Position:
        self._position = Position(latitude, longitude, utc_now())
        self._error = None
        self._reported.set()
        return self._position

    def fail(self, code: str, message: str = "") -> None:
        self._position = None
        self._error = GeolocationError(code, message)
        self._reported.set()

    async def current_position(self, timeout_ms: int, maximum_age_ms: int) -> Position:
        if self._fixed is not None:
            return self._fixed
        if self._position is not None and not is_position_stale(
            self._position, maximum_age_ms
        ):
            return self._position
        if self._error is not None:
            raise self._error

        self._reported.clear()
        try:
            await asyncio.wait_for(self._reported.wait(), timeout=timeout_ms / 1000)
        except TimeoutError:
            raise GeolocationError(
                GeolocationError.TIMEOUT, f"no fix within {timeout_ms}ms"
            ) from None

        if self._error is not None:
            raise self._error
        if self._position is None:
            raise GeolocationError(
                GeolocationError.POSITION_UNAVAILABLE, "report carried no position"
            )
        return self._position
