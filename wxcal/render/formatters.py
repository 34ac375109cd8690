"""Value formatters. Rounding and unit conversion happen here and only here."""

import math
from datetime import date, datetime
from typing import Any

from wxcal.calendar.weather_codes import WeatherCategory, WeatherCodeTable, classify

MM_PER_INCH = 25.4
MISSING = "–"

CATEGORY_EMOJI: dict[WeatherCategory, str] = {
    WeatherCategory.CLEAR: "☀️",
    WeatherCategory.MOSTLY_CLEAR: "🌤️",
    WeatherCategory.PARTLY_CLOUDY: "⛅",
    WeatherCategory.CLOUDY: "☁️",
    WeatherCategory.FOG: "🌫️",
    WeatherCategory.LIGHT_RAIN_SHOWERS: "🌦️",
    WeatherCategory.RAIN: "🌧️",
    WeatherCategory.FREEZING_RAIN: "🌧️🧊",
    WeatherCategory.SNOW: "❄️",
    WeatherCategory.HEAVY_SNOW: "🌨️",
    WeatherCategory.THUNDERSTORM: "⛈️",
    WeatherCategory.THUNDERSTORM_WITH_HAIL: "⛈️🧊",
    WeatherCategory.UNKNOWN: "·",
}

LEGEND: list[tuple[WeatherCategory, str]] = [
    (WeatherCategory.CLEAR, "Clear"),
    (WeatherCategory.MOSTLY_CLEAR, "Mostly clear"),
    (WeatherCategory.PARTLY_CLOUDY, "Partly"),
    (WeatherCategory.CLOUDY, "Cloudy"),
    (WeatherCategory.RAIN, "Rain"),
    (WeatherCategory.LIGHT_RAIN_SHOWERS, "Showers"),
    (WeatherCategory.THUNDERSTORM, "Storm"),
    (WeatherCategory.SNOW, "Snow"),
    (WeatherCategory.FOG, "Fog"),
]


def weather_emoji(code: Any, table: WeatherCodeTable | None = None) -> str:
    return CATEGORY_EMOJI[classify(code, table)]


def legend_text() -> str:
    return " • ".join(f"{CATEGORY_EMOJI[c]} {label}" for c, label in LEGEND)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_temperature(value: float | None) -> str:
    if value is None:
        return MISSING
    return f"{round_half_up(value)}°"


def mm_to_inches(mm: float | None) -> str | None:
    """Millimetres to inches with two decimals, e.g. 12.7 -> "0.50"."""
    if mm is None:
        return None
    return f"{mm / MM_PER_INCH:.2f}"


def format_precipitation(mm: float | None) -> str:
    inches = mm_to_inches(mm)
    return f"{inches if inches is not None else MISSING} in"


def format_probability(value: float | None) -> str:
    return f"{round_half_up(value or 0)}%"


def format_wind(value: float | None) -> str:
    return str(round_half_up(value or 0))


def hour_label(when: datetime | str) -> str:
    """12-hour label: 13:00 -> "1p", 00:00 -> "12a"."""
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    hour = when.hour
    suffix = "p" if hour >= 12 else "a"
    hour %= 12
    if hour == 0:
        hour = 12
    return f"{hour}{suffix}"


def month_label(year: int, month: int) -> str:
    return datetime(year, month, 1).strftime("%B %Y")


def day_title(when: date | str) -> str:
    """Long day heading, e.g. "Friday, Aug 14"."""
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    return f"{when:%A}, {when:%b} {when.day}"
