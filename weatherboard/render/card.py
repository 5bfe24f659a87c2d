"""Card renderer: DisplayCard -> Node tree. No I/O, no dashboard state."""

from datetime import datetime

from weatherboard.config.schema import IconConfig
from weatherboard.models.common import UnitPreference, is_number, round_half_up
from weatherboard.models.weather import DailySummary, DisplayCard
from weatherboard.render.node import Node, el


def card_title(card: DisplayCard) -> str:
    w = card.weather
    return f"{w.location_name}, {w.country_code}" if w.country_code else w.location_name


def format_day_name(date_str: str) -> str:
    """Short weekday name for a YYYY-MM-DD date, e.g. 'Tue'."""
    return datetime.strptime(date_str, "%Y-%m-%d").strftime("%a")


def format_hi_lo(card: DisplayCard, units: UnitPreference) -> str | None:
    """'H: 21°C • L: 12°C', or None unless both bounds are numbers."""
    if not (is_number(card.hi) and is_number(card.lo)):
        return None
    symbol = units.symbol
    return f"H: {round_half_up(card.hi)}{symbol} • L: {round_half_up(card.lo)}{symbol}"


def build_card(
    card: DisplayCard, units: UnitPreference, icons: IconConfig | None = None
) -> Node:
    """Build the visual unit for one location.

    The unit symbol comes from `units` at render time, so a unit change
    needs a re-render to show up.
    """
    if icons is None:
        icons = IconConfig()
    units = UnitPreference(units)
    symbol = units.symbol
    w = card.weather
    description = w.condition.description

    header = el(
        "div",
        el(
            "div",
            el("h3", card_title(card), class_="city-name"),
            el("div", description, class_="condition"),
        ),
        el(
            "div",
            el("div", f"{round_half_up(w.current_temp)}{symbol}", class_="temp"),
            el("img", class_="icon", alt=description, src=icons.large(w.condition.icon)),
            class_="card-header-right",
        ),
        class_="card-header",
    )

    body = el(
        "div",
        el("div", format_hi_lo(card, units), class_="hi-lo"),
        el(
            "div",
            *(_forecast_day(day, symbol, icons) for day in card.forecast),
            class_="forecast",
        ),
        class_="card-body",
    )

    return el("article", header, body, class_="card")


def _forecast_day(day: DailySummary, symbol: str, icons: IconConfig) -> Node:
    return el(
        "div",
        el("div", format_day_name(day.date), class_="name"),
        el(
            "img",
            class_="f-icon",
            alt=day.condition.description,
            src=icons.small(day.condition.icon),
        ),
        el(
            "div",
            el("span", f"{day.max_temp}{symbol}", class_="range-hi"),
            " / ",
            el("span", f"{day.min_temp}{symbol}", class_="range-lo"),
            class_="range",
        ),
        class_="forecast-day",
    )


def build_loader() -> Node:
    return el("div", class_="loader", aria_hidden="true")
