"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

from wxcal.calendar.weather_codes import WeatherCategory, WeatherCodeTable

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_USER_AGENT = "wxcal/0.1.0"


class TemperatureUnit(StrEnum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    language: str = "en"
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float | None = Field(default=None, gt=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    # Open-Meteo serves 16 days including today
    horizon_days: int = Field(default=15, ge=0, le=15)
    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_city: str = "New York"


class WeatherCodeRule(BaseModel):
    """Maps individual codes and inclusive ``[low, high]`` ranges to a category."""

    model_config = {"extra": "forbid"}

    category: WeatherCategory
    codes: list[int] = []
    ranges: list[tuple[int, int]] = []

    @field_validator("ranges")
    @classmethod
    def _ranges_ordered(cls, v: list[tuple[int, int]]) -> list[tuple[int, int]]:
        for low, high in v:
            if low > high:
                raise ValueError(f"range low {low} is above high {high}")
        return v

    @model_validator(mode="after")
    def _not_empty(self) -> "WeatherCodeRule":
        if not self.codes and not self.ranges:
            raise ValueError(f"rule for {self.category} matches no codes")
        if self.category == WeatherCategory.UNKNOWN:
            raise ValueError("unknown is the fallback category and cannot be mapped")
        return self

    def matches(self, code: int) -> bool:
        if code in self.codes:
            return True
        return any(low <= code <= high for low, high in self.ranges)

    def expand(self) -> set[int]:
        covered = set(self.codes)
        for low, high in self.ranges:
            covered.update(range(low, high + 1))
        return covered


def _default_rules() -> list[WeatherCodeRule]:
    from wxcal.config.defaults import DEFAULT_WEATHER_CODE_RULES

    return [rule.model_copy() for rule in DEFAULT_WEATHER_CODE_RULES]


class CalendarConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    forecast: ForecastConfig = ForecastConfig()
    display: DisplayConfig = DisplayConfig()
    weather_codes: list[WeatherCodeRule] = Field(default_factory=_default_rules)

    @field_validator("weather_codes")
    @classmethod
    def _no_overlap(cls, v: list[WeatherCodeRule]) -> list[WeatherCodeRule]:
        seen: dict[int, WeatherCategory] = {}
        for rule in v:
            for code in rule.expand():
                if code in seen and seen[code] != rule.category:
                    raise ValueError(
                        f"code {code} mapped to both {seen[code]} and {rule.category}"
                    )
                seen[code] = rule.category
        return v

    def code_table(self) -> WeatherCodeTable:
        return WeatherCodeTable(self.weather_codes)
