"""Tests for presentation-time rounding, unit conversion and labels."""

from datetime import date, datetime

import pytest

from wxcal.render.formatters import (
    day_title,
    format_precipitation,
    format_probability,
    format_temperature,
    format_wind,
    hour_label,
    legend_text,
    mm_to_inches,
    month_label,
    weather_emoji,
)


class TestPrecipitation:
    def test_half_inch(self):
        assert mm_to_inches(12.7) == "0.50"
        assert format_precipitation(12.7) == "0.50 in"

    def test_zero(self):
        assert format_precipitation(0.0) == "0.00 in"

    def test_two_decimals(self):
        assert mm_to_inches(25.4) == "1.00"
        assert mm_to_inches(3.0) == "0.12"

    def test_missing(self):
        assert mm_to_inches(None) is None
        assert format_precipitation(None) == "– in"


class TestTemperature:
    @pytest.mark.parametrize(
        "value,expected",
        [(18.5, "19°"), (18.49, "18°"), (-0.5, "0°"), (-1.5, "-1°"), (-1.6, "-2°"), (0.0, "0°")],
    )
    def test_rounds_half_up(self, value, expected):
        assert format_temperature(value) == expected

    def test_missing(self):
        assert format_temperature(None) == "–"


class TestHourLabel:
    @pytest.mark.parametrize(
        "stamp,expected",
        [
            ("2025-08-14T13:00", "1p"),
            ("2025-08-14T00:00", "12a"),
            ("2025-08-14T12:00", "12p"),
            ("2025-08-14T09:00", "9a"),
            ("2025-08-14T23:00", "11p"),
        ],
    )
    def test_labels(self, stamp, expected):
        assert hour_label(stamp) == expected

    def test_datetime_input(self):
        assert hour_label(datetime(2025, 8, 14, 13)) == "1p"


class TestMisc:
    def test_emoji(self):
        assert weather_emoji(0) == "☀️"
        assert weather_emoji(96) == "⛈️🧊"
        assert weather_emoji(None) == "·"

    def test_probability_and_wind(self):
        assert format_probability(None) == "0%"
        assert format_probability(65) == "65%"
        assert format_wind(12.5) == "13"
        assert format_wind(None) == "0"

    def test_legend(self):
        text = legend_text()
        assert text.startswith("☀️ Clear")
        assert "🌫️ Fog" in text

    def test_month_label(self):
        assert month_label(2026, 10) == "October 2026"

    def test_day_title(self):
        assert day_title(date(2026, 10, 20)) == "Tuesday, Oct 20"
        assert day_title("2026-10-20") == "Tuesday, Oct 20"
