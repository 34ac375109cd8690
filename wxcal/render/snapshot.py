"""Presentation input: a frozen copy of everything a renderer may read."""

from dataclasses import dataclass
from datetime import date

from wxcal.calendar.grid import month_grid
from wxcal.calendar.weather_codes import WeatherCategory, WeatherCodeTable
from wxcal.calendar.window import DateWindow
from wxcal.lifecycle.controller import QueryStatus
from wxcal.models.forecast import DailyForecast, DailyForecastEntry, HourlyForecast, Location
from wxcal.models.view import ViewState
from wxcal.render.formatters import CATEGORY_EMOJI, weather_emoji
from wxcal.session import CalendarSession


@dataclass(frozen=True)
class CellView:
    date: date
    in_month: bool
    entry: DailyForecastEntry | None
    emoji: str

    @property
    def selectable(self) -> bool:
        return self.entry is not None


@dataclass(frozen=True)
class Hint:
    text: str
    is_error: bool = False


@dataclass(frozen=True)
class CalendarSnapshot:
    view: ViewState
    window: DateWindow
    geocode_status: QueryStatus
    daily_status: QueryStatus
    hourly_status: QueryStatus
    location: Location | None = None
    forecast: DailyForecast | None = None
    hours: HourlyForecast | None = None

    @classmethod
    def from_session(cls, session: CalendarSession) -> "CalendarSnapshot":
        return cls(
            view=session.view,
            window=session.window,
            geocode_status=session.geocode.status,
            daily_status=session.daily.status,
            hourly_status=session.hourly.status,
            location=session.location,
            forecast=session.forecast,
            hours=session.hours,
        )

    @property
    def no_forecast(self) -> bool:
        return self.daily_status == QueryStatus.EMPTY or (
            self.daily_status == QueryStatus.READY and not self.forecast
        )

    @property
    def day_open(self) -> bool:
        """The day sheet shows only for a selected day that has daily data."""
        selected = self.view.selected_date
        return (
            selected is not None
            and self.location is not None
            and self.forecast is not None
            and self.forecast.get(selected) is not None
        )

    def cells(self, table: WeatherCodeTable | None = None) -> list[list[CellView]]:
        rows = []
        for week in month_grid(self.view.year, self.view.month):
            row = []
            for cell in week:
                entry = self.forecast.get(cell.date) if self.forecast else None
                emoji = (
                    weather_emoji(entry.weather_code, table)
                    if entry is not None
                    else CATEGORY_EMOJI[WeatherCategory.UNKNOWN]
                )
                row.append(CellView(cell.date, cell.in_month, entry, emoji))
            rows.append(row)
        return rows

    def hints(self) -> list[Hint]:
        hints = []
        city = self.view.city
        if self.geocode_status == QueryStatus.LOADING:
            hints.append(Hint(f"Finding “{city}”…"))
        elif self.geocode_status == QueryStatus.EMPTY:
            hints.append(Hint("City not found. Try another name.", is_error=True))
        elif self.geocode_status == QueryStatus.ERROR:
            hints.append(Hint("Geocoding failed. Check your connection.", is_error=True))

        if self.daily_status == QueryStatus.LOADING:
            hints.append(Hint("Loading forecast…"))
        elif self.daily_status == QueryStatus.ERROR:
            hints.append(Hint("Forecast request failed.", is_error=True))
        elif self.no_forecast:
            hints.append(
                Hint(
                    "No forecast available for the full month (free API covers "
                    "~16 days). Try the current/next two weeks or navigate months."
                )
            )

        if self.location is not None:
            hints.append(
                Hint(
                    f"📍 {self.location.label} • Request window: "
                    f"{self.window.describe()}"
                )
            )
        return hints

    def hourly_hint(self) -> Hint | None:
        if self.hourly_status == QueryStatus.LOADING:
            return Hint("Loading hourly…")
        if self.hourly_status in (QueryStatus.EMPTY, QueryStatus.ERROR):
            return Hint("No hourly data.")
        if self.hourly_status == QueryStatus.READY and not self.hours:
            return Hint("No hourly data.")
        return None
