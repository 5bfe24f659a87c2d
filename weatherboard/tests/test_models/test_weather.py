"""Tests for weather models and response decoding."""

import pytest

from weatherboard.models.common import UnitPreference, is_number, parse_units, round_half_up
from weatherboard.models.weather import (
    CityLocator,
    Condition,
    CoordLocator,
    DailySummary,
    DisplayCard,
    forecast_samples_from_json,
    weather_sample_from_json,
)


class TestLocators:
    def test_city_params(self):
        assert CityLocator("Paris, FR").query_params() == {"q": "Paris, FR"}

    def test_coord_params(self):
        assert CoordLocator(51.5, -0.12).query_params() == {"lat": "51.5", "lon": "-0.12"}


class TestUnitPreference:
    def test_symbols(self):
        assert UnitPreference.METRIC.symbol == "°C"
        assert UnitPreference.IMPERIAL.symbol == "°F"

    def test_parse_valid(self):
        assert parse_units("imperial") == UnitPreference.IMPERIAL

    @pytest.mark.parametrize("value", ["kelvin", "", None, 1, "METRIC"])
    def test_parse_invalid(self, value):
        assert parse_units(value) is None


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(2.49) == 2

    def test_is_number(self):
        assert is_number(3)
        assert is_number(-1.5)
        assert not is_number(None)
        assert not is_number(True)
        assert not is_number("3")


class TestWeatherSample:
    def test_from_fixture(self, london_current):
        sample = weather_sample_from_json(london_current)
        assert sample.location_name == "London"
        assert sample.country_code == "GB"
        assert sample.current_temp == 14.62
        assert sample.condition == Condition("broken clouds", "04d")

    def test_missing_country(self, make_current):
        sample = weather_sample_from_json(make_current(country=None))
        assert sample.country_code is None

    def test_fallback_name(self, make_current):
        sample = weather_sample_from_json(make_current(name=""), fallback_name="Current Location")
        assert sample.location_name == "Current Location"

    def test_malformed_propagates(self):
        with pytest.raises(KeyError):
            weather_sample_from_json({"name": "X", "weather": [{"description": "d", "icon": "i"}]})


class TestForecastSamples:
    def test_decodes_entries(self, make_forecast):
        samples = forecast_samples_from_json(make_forecast(days=1))
        assert len(samples) == 8
        assert samples[0].timestamp_text == "2026-02-10 00:00:00"
        assert samples[4].condition.description == "clear sky"

    def test_missing_list(self):
        with pytest.raises(KeyError):
            forecast_samples_from_json({"cod": "200"})


class TestDisplayCard:
    def test_compose_without_forecast(self, london_current):
        card = DisplayCard.compose(weather_sample_from_json(london_current), [])
        assert card.hi is None and card.lo is None

    def test_compose_with_forecast(self, london_current):
        day = DailySummary("2026-02-11", 3, 9, Condition("rain", "10d"))
        card = DisplayCard.compose(weather_sample_from_json(london_current), [day])
        assert (card.hi, card.lo) == (9, 3)
