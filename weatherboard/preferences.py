"""Unit preference store: persisted metric/imperial choice with subscribers."""

import logging
import sqlite3
from collections.abc import Callable

from weatherboard.models.common import UnitPreference, parse_units
from weatherboard.storage import preference_repo

logger = logging.getLogger(__name__)

UNITS_KEY = "units"

Subscriber = Callable[[UnitPreference], None]


class UnitPreferenceStore:
    def __init__(
        self,
        conn: sqlite3.Connection,
        default: UnitPreference = UnitPreference.METRIC,
    ):
        self.conn = conn
        self._subscribers: list[Subscriber] = []
        stored = parse_units(preference_repo.get_preference(conn, UNITS_KEY))
        self._units = stored if stored is not None else UnitPreference(default)

    def get(self) -> UnitPreference:
        return self._units

    def set(self, value: object) -> bool:
        """Persist a new unit and notify subscribers.

        Anything other than 'metric' or 'imperial' is ignored. Returns
        whether the value was accepted.
        """
        units = parse_units(value)
        if units is None:
            logger.debug("Ignoring invalid unit preference %r", value)
            return False
        self._units = units
        preference_repo.set_preference(self.conn, UNITS_KEY, units.value)
        logger.info("Units set to %s", units.value)
        for callback in list(self._subscribers):
            callback(units)
        return True

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback invoked synchronously on every change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
