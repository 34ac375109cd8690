"""Calendar session: a view state plus the geocode -> daily -> hourly query chain."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from wxcal.calendar.grid import GridCell, month_grid
from wxcal.calendar.window import DateWindow, forecast_window
from wxcal.config.schema import CalendarConfig
from wxcal.ingest.open_meteo_client import OpenMeteoClient
from wxcal.lifecycle.controller import QueryController, QueryStatus
from wxcal.models.common import local_today
from wxcal.models.forecast import DailyForecast, HourlyForecast, Location
from wxcal.models.view import ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyRequest:
    latitude: float
    longitude: float
    window: DateWindow


@dataclass(frozen=True)
class HourlyRequest:
    latitude: float
    longitude: float
    date: date


class CalendarSession:
    """Holds the current ViewState and keeps the three queries in step with it.

    Must be created and driven from inside a running event loop. Inputs for
    the daily and hourly queries are derived from the view and the current
    geocode result, so they go idle whenever no location is resolved.
    """

    def __init__(
        self,
        client: OpenMeteoClient,
        config: CalendarConfig | None = None,
        view: ViewState | None = None,
        today: Callable[[], date] = local_today,
    ):
        self.client = client
        self.config = config or CalendarConfig()
        self._today = today
        self._view = view or ViewState.for_today(
            today(), self.config.display.default_city
        )

        self.geocode: QueryController[str, Location] = QueryController(
            "geocode", self._fetch_location, on_change=self._on_query_change
        )
        self.daily: QueryController[DailyRequest, DailyForecast] = QueryController(
            "daily", self._fetch_daily, on_change=self._on_query_change
        )
        self.hourly: QueryController[HourlyRequest, HourlyForecast] = QueryController(
            "hourly", self._fetch_hourly, on_change=self._on_query_change
        )
        self._sync()

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def today(self) -> date:
        return self._today()

    @property
    def location(self) -> Location | None:
        if self.geocode.status != QueryStatus.READY:
            return None
        return self.geocode.data

    @property
    def window(self) -> DateWindow:
        return forecast_window(
            self._view.year,
            self._view.month,
            self.today,
            self.config.forecast.horizon_days,
        )

    @property
    def forecast(self) -> DailyForecast | None:
        if self.daily.status != QueryStatus.READY:
            return None
        return self.daily.data

    @property
    def hours(self) -> HourlyForecast | None:
        if self.hourly.status != QueryStatus.READY:
            return None
        return self.hourly.data

    def grid(self) -> list[list[GridCell]]:
        return month_grid(self._view.year, self._view.month)

    # ── View transitions ────────────────────────────────────────────

    def set_view(self, view: ViewState) -> None:
        self._view = view
        self._sync()

    def search(self, city_text: str) -> None:
        self.set_view(self._view.with_city(city_text))

    def change_month(self, delta: int) -> None:
        self.set_view(self._view.with_month_offset(delta))

    def select_date(self, day: date) -> bool:
        """Open the day sheet. Only days that carry daily data are selectable."""
        forecast = self.forecast
        if forecast is None or forecast.get(day) is None:
            return False
        self.set_view(self._view.select(day))
        return True

    def close_day(self) -> None:
        self.set_view(self._view.clear_selection())

    async def settle(self) -> None:
        """Wait until no query has an outstanding current call."""
        while True:
            pending = [q for q in self._queries() if q.is_pending]
            if not pending:
                return
            await asyncio.gather(*(q.wait() for q in pending))

    async def aclose(self) -> None:
        for query in self._queries():
            await query.aclose()

    # ── Internals ───────────────────────────────────────────────────

    def _queries(self) -> tuple[QueryController, ...]:
        return (self.geocode, self.daily, self.hourly)

    def _on_query_change(self, query: QueryController) -> None:
        if query is self.geocode:
            self._sync()

    def _sync(self) -> None:
        self.geocode.update(self._view.city or None)

        location = self.location
        if location is None:
            self.daily.update(None)
            self.hourly.update(None)
            return

        self.daily.update(
            DailyRequest(location.latitude, location.longitude, self.window)
        )
        selected = self._view.selected_date
        self.hourly.update(
            HourlyRequest(location.latitude, location.longitude, selected)
            if selected is not None
            else None
        )

    async def _fetch_location(self, city: str) -> Location:
        return await self.client.geocode(city)

    async def _fetch_daily(self, request: DailyRequest) -> DailyForecast:
        return await self.client.get_daily(
            request.latitude, request.longitude, request.window
        )

    async def _fetch_hourly(self, request: HourlyRequest) -> HourlyForecast:
        return await self.client.get_hourly(
            request.latitude, request.longitude, request.date
        )
