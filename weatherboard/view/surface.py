"""Named insertion points the view controller writes into."""

from dataclasses import dataclass, field

from weatherboard.models.common import UnitPreference
from weatherboard.render.node import Node

CITIES = "cities"
CITIES_LOADING = "cities_loading"
LOCATION = "location"
LOCATION_LOADING = "location_loading"
SEARCH_RESULT = "search_result"
SEARCH_ERROR = "search_error"
SEARCH_EMPTY = "search_empty"
BANNER = "banner"

SEARCH_EMPTY_TEXT = "Search for a city to see its current weather and forecast."
LOADING_TEXT = "Loading..."


@dataclass
class Slot:
    name: str
    hidden: bool = False
    text: str = ""
    children: list[Node] = field(default_factory=list)

    def show(self, text: str | None = None) -> None:
        if text is not None:
            self.text = text
        self.hidden = False

    def hide(self) -> None:
        self.hidden = True

    def clear(self) -> None:
        self.children = []

    def fill(self, nodes: list[Node]) -> None:
        self.children = list(nodes)

    def replace(self, node: Node) -> None:
        self.children = [node]


class Surface:
    """Page state: slot contents, visibility, and the unit toggle."""

    def __init__(self, units: UnitPreference = UnitPreference.METRIC):
        self.slots: dict[str, Slot] = {
            CITIES: Slot(CITIES),
            CITIES_LOADING: Slot(CITIES_LOADING, hidden=True, text=LOADING_TEXT),
            LOCATION: Slot(LOCATION),
            LOCATION_LOADING: Slot(LOCATION_LOADING, hidden=True, text=LOADING_TEXT),
            SEARCH_RESULT: Slot(SEARCH_RESULT),
            SEARCH_ERROR: Slot(SEARCH_ERROR, hidden=True),
            SEARCH_EMPTY: Slot(SEARCH_EMPTY, text=SEARCH_EMPTY_TEXT),
            BANNER: Slot(BANNER, hidden=True),
        }
        self.unit_pressed: dict[UnitPreference, bool] = {}
        self.set_unit_toggle(units)

    def __getitem__(self, name: str) -> Slot:
        return self.slots[name]

    def set_unit_toggle(self, units: UnitPreference) -> None:
        """Mirror aria-pressed on the °C/°F buttons."""
        for option in UnitPreference:
            self.unit_pressed[option] = option == units
