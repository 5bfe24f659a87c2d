"""Reduce 3-hourly forecast samples to daily summaries."""

from weatherboard.models.common import round_half_up, today_iso
from weatherboard.models.weather import (
    DailySummary,
    DisplayCard,
    ForecastSample,
    forecast_samples_from_json,
    weather_sample_from_json,
)

FORECAST_DAYS = 3
MIDDAY_MARKER = "12:00:00"


def aggregate_daily(
    samples: list[ForecastSample],
    today: str | None = None,
    days: int = FORECAST_DAYS,
) -> list[DailySummary]:
    """Summarize the first `days` calendar dates strictly after `today`.

    Dates are the text before the first space of each timestamp, so the
    upstream timezone convention is kept as-is. YYYY-MM-DD strings compare
    chronologically.
    """
    if today is None:
        today = today_iso()

    by_date: dict[str, list[ForecastSample]] = {}
    for sample in samples:
        by_date.setdefault(_sample_date(sample), []).append(sample)

    future = sorted(d for d in by_date if d > today)[:days]
    return [_summarize(d, by_date[d]) for d in future]


def pick_representative(group: list[ForecastSample]) -> ForecastSample:
    """The midday sample if present, else the middle one."""
    for sample in group:
        if MIDDAY_MARKER in sample.timestamp_text:
            return sample
    return group[len(group) // 2]


def _summarize(day: str, group: list[ForecastSample]) -> DailySummary:
    return DailySummary(
        date=day,
        min_temp=round_half_up(min(s.min_temp for s in group)),
        max_temp=round_half_up(max(s.max_temp for s in group)),
        condition=pick_representative(group).condition,
    )


def _sample_date(sample: ForecastSample) -> str:
    return sample.timestamp_text.split(" ")[0]


def display_card_from_json(
    current: dict, forecast: dict, fallback_name: str = "", today: str | None = None
) -> DisplayCard:
    """Decode both responses and compose the card the renderer draws."""
    weather = weather_sample_from_json(current, fallback_name=fallback_name)
    summaries = aggregate_daily(forecast_samples_from_json(forecast), today=today)
    return DisplayCard.compose(weather, summaries)
