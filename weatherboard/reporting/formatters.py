"""Plain-text and JSON renditions of a display card."""

import json

from weatherboard.models.common import UnitPreference, is_number, round_half_up
from weatherboard.models.weather import DisplayCard
from weatherboard.render.card import card_title, format_day_name, format_hi_lo


def format_card_text(card: DisplayCard, units: UnitPreference) -> str:
    """Terminal card: title, condition, temperature, hi/lo and the 3-day strip."""
    units = UnitPreference(units)
    symbol = units.symbol
    w = card.weather
    lines = [
        f"=== {card_title(card)} ===",
        f"{w.condition.description} | {round_half_up(w.current_temp)}{symbol}",
    ]
    hi_lo = format_hi_lo(card, units)
    if hi_lo:
        lines.append(hi_lo)
    for day in card.forecast:
        lines.append(
            f"  {format_day_name(day.date)} {day.date}: "
            f"{day.max_temp}{symbol} / {day.min_temp}{symbol} "
            f"({day.condition.description})"
        )
    return "\n".join(lines)


def format_card_json(card: DisplayCard, units: UnitPreference) -> str:
    """JSON card for programmatic consumption."""
    w = card.weather
    data = {
        "title": card_title(card),
        "units": UnitPreference(units).value,
        "temp": round_half_up(w.current_temp),
        "condition": w.condition.description,
        "icon": w.condition.icon,
        "hi": round_half_up(card.hi) if is_number(card.hi) else None,
        "lo": round_half_up(card.lo) if is_number(card.lo) else None,
        "forecast": [
            {
                "date": day.date,
                "max": day.max_temp,
                "min": day.min_temp,
                "condition": day.condition.description,
                "icon": day.condition.icon,
            }
            for day in card.forecast
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
