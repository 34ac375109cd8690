"""WMO weather code classification."""

from collections.abc import Iterable
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wxcal.config.schema import WeatherCodeRule


class WeatherCategory(StrEnum):
    CLEAR = "clear"
    MOSTLY_CLEAR = "mostly-clear"
    PARTLY_CLOUDY = "partly-cloudy"
    CLOUDY = "cloudy"
    FOG = "fog"
    LIGHT_RAIN_SHOWERS = "light-rain-showers"
    RAIN = "rain"
    FREEZING_RAIN = "freezing-rain"
    SNOW = "snow"
    HEAVY_SNOW = "heavy-snow"
    THUNDERSTORM = "thunderstorm"
    THUNDERSTORM_WITH_HAIL = "thunderstorm-with-hail"
    UNKNOWN = "unknown"


class WeatherCodeTable:
    """Lookup table built from configured code rules.

    Codes not covered by any rule classify as ``UNKNOWN``.
    """

    def __init__(self, rules: Iterable["WeatherCodeRule"]):
        self._by_code: dict[int, WeatherCategory] = {}
        for rule in rules:
            for code in rule.expand():
                self._by_code[code] = rule.category

    def classify(self, code: Any) -> WeatherCategory:
        normalized = _normalize_code(code)
        if normalized is None:
            return WeatherCategory.UNKNOWN
        return self._by_code.get(normalized, WeatherCategory.UNKNOWN)

    def __len__(self) -> int:
        return len(self._by_code)


@lru_cache(maxsize=1)
def default_table() -> WeatherCodeTable:
    from wxcal.config.defaults import DEFAULT_WEATHER_CODE_RULES

    return WeatherCodeTable(DEFAULT_WEATHER_CODE_RULES)


def classify(code: Any, table: WeatherCodeTable | None = None) -> WeatherCategory:
    """Classify a weather code; never raises."""
    if table is None:
        table = default_table()
    return table.classify(code)


def _normalize_code(code: Any) -> int | None:
    # JSON may hand us 3.0 for 3; bools are not codes
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, float) and code.is_integer():
        return int(code)
    return None
