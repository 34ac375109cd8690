"""Geocoding and Open-Meteo forecast data models."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType

from wxcal.calendar.window import DateWindow


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    label: str


@dataclass(frozen=True)
class DailyForecastEntry:
    date: str  # YYYY-MM-DD
    weather_code: int | None
    temperature_max: float | None
    temperature_min: float | None
    precipitation_mm: float | None


@dataclass(frozen=True)
class DailyForecast:
    """All daily entries for one location and request window.

    Read-only; a new fetch produces a new instance rather than updating
    this one.
    """

    window: DateWindow
    entries: Mapping[str, DailyForecastEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, day: date | str) -> DailyForecastEntry | None:
        key = day if isinstance(day, str) else day.isoformat()
        return self.entries.get(key)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DailyForecastEntry]:
        return iter(self.entries.values())


@dataclass(frozen=True)
class HourlyForecastEntry:
    time: datetime  # provider-local, naive
    weather_code: int | None
    temperature: float | None
    precipitation_probability: float | None
    wind_speed: float | None


@dataclass(frozen=True)
class HourlyForecast:
    date: str  # YYYY-MM-DD
    hours: tuple[HourlyForecastEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.hours)

    def __iter__(self) -> Iterator[HourlyForecastEntry]:
        return iter(self.hours)
