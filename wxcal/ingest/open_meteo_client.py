"""Open-Meteo geocoding and forecast client.

One request per call; no retries and no caching.
"""

import logging
from datetime import date, datetime
from typing import Any

import httpx

from wxcal.calendar.window import DateWindow, to_ymd
from wxcal.config.schema import ApiConfig, TemperatureUnit
from wxcal.ingest.errors import EmptyResult, NotFound, TransportOrServerError
from wxcal.models.forecast import (
    DailyForecast,
    DailyForecastEntry,
    HourlyForecast,
    HourlyForecastEntry,
    Location,
)

logger = logging.getLogger(__name__)

DAILY_FIELDS = "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum"
HOURLY_FIELDS = "weather_code,temperature_2m,precipitation_probability,wind_speed_10m"


class OpenMeteoClient:
    def __init__(
        self,
        api: ApiConfig | None = None,
        temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS,
        http: httpx.AsyncClient | None = None,
    ):
        self.api = api or ApiConfig()
        self.temperature_unit = temperature_unit
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            headers={"User-Agent": self.api.user_agent},
            timeout=self.api.timeout_seconds,
        )

    async def __aenter__(self) -> "OpenMeteoClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def geocode(self, name: str) -> Location:
        """Resolve a free-text place name to the first matching location.

        Raises NotFound when the provider has no match.
        """
        params = {
            "name": name,
            "count": "1",
            "language": self.api.language,
            "format": "json",
        }
        raw = await self._get_json(self.api.geocoding_url, params, "geocode")
        location = parse_geocode(raw)
        if location is None:
            logger.info("No geocoding match for %r", name)
            raise NotFound(f"no match for {name!r}")
        return location

    async def get_daily(
        self, latitude: float, longitude: float, window: DateWindow
    ) -> DailyForecast:
        """Fetch per-day forecasts for every date in ``window``.

        An empty window is never sent to the provider.
        """
        if window.is_empty:
            raise EmptyResult("request window is outside the forecast horizon")
        params = self._forecast_params(latitude, longitude, window.start, window.end)
        params["daily"] = DAILY_FIELDS
        raw = await self._get_json(self.api.forecast_url, params, "daily forecast")
        forecast = parse_daily(raw, window)
        if forecast is None or not forecast.entries:
            raise EmptyResult(f"no daily data for {window.describe()}")
        return forecast

    async def get_hourly(
        self, latitude: float, longitude: float, day: date
    ) -> HourlyForecast:
        params = self._forecast_params(latitude, longitude, day, day)
        params["hourly"] = HOURLY_FIELDS
        raw = await self._get_json(self.api.forecast_url, params, "hourly forecast")
        forecast = parse_hourly(raw, to_ymd(day))
        if forecast is None or not forecast.hours:
            raise EmptyResult(f"no hourly data for {to_ymd(day)}")
        return forecast

    def _forecast_params(
        self, latitude: float, longitude: float, start: date, end: date
    ) -> dict[str, str]:
        params = {
            "latitude": str(latitude),
            "longitude": str(longitude),
            "timezone": "auto",
            "start_date": to_ymd(start),
            "end_date": to_ymd(end),
        }
        if self.temperature_unit != TemperatureUnit.CELSIUS:
            params["temperature_unit"] = self.temperature_unit.value
        return params

    async def _get_json(self, url: str, params: dict[str, str], what: str) -> dict:
        try:
            resp = await self._http.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("Open-Meteo %s request failed: %s", what, e)
            raise TransportOrServerError(f"{what} request failed: {e}") from e
        if resp.status_code >= 400:
            logger.warning(
                "Open-Meteo %s returned %d: %s", what, resp.status_code, resp.text
            )
            raise TransportOrServerError(
                f"{what} returned HTTP {resp.status_code}", resp.status_code
            )
        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Open-Meteo %s sent a non-JSON body", what)
            raise TransportOrServerError(f"{what} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise EmptyResult(f"{what} returned an unexpected payload")
        return data


def parse_geocode(raw: dict) -> Location | None:
    """Build a Location from the first geocoding result, if any."""
    results = raw.get("results") or []
    if not results:
        return None
    first = results[0]
    try:
        latitude = float(first["latitude"])
        longitude = float(first["longitude"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Geocoding result without usable coordinates: %s", first)
        return None
    name = first.get("name") or ""
    region = first.get("admin1") or first.get("country_code") or ""
    label = f"{name}, {region}" if name and region else (name or region)
    return Location(latitude=latitude, longitude=longitude, label=label.strip())


def parse_daily(raw: dict, window: DateWindow) -> DailyForecast | None:
    daily = raw.get("daily") or {}
    times = daily.get("time")
    if not times:
        return None
    codes = _series(daily, "weather_code", "weathercode")
    highs = _series(daily, "temperature_2m_max")
    lows = _series(daily, "temperature_2m_min")
    precip = _series(daily, "precipitation_sum")

    entries: dict[str, DailyForecastEntry] = {}
    for i, iso in enumerate(times):
        entries[iso] = DailyForecastEntry(
            date=iso,
            weather_code=_int_at(codes, i),
            temperature_max=_float_at(highs, i),
            temperature_min=_float_at(lows, i),
            precipitation_mm=_float_at(precip, i),
        )
    return DailyForecast(window=window, entries=entries)


def parse_hourly(raw: dict, day: str) -> HourlyForecast | None:
    hourly = raw.get("hourly") or {}
    times = hourly.get("time")
    if not times:
        return None
    codes = _series(hourly, "weather_code", "weathercode")
    temps = _series(hourly, "temperature_2m")
    pops = _series(hourly, "precipitation_probability")
    winds = _series(hourly, "wind_speed_10m")

    hours = []
    for i, stamp in enumerate(times):
        try:
            when = datetime.fromisoformat(stamp)
        except (TypeError, ValueError):
            logger.warning("Skipping hourly row with bad timestamp %r", stamp)
            continue
        hours.append(
            HourlyForecastEntry(
                time=when,
                weather_code=_int_at(codes, i),
                temperature=_float_at(temps, i),
                precipitation_probability=_float_at(pops, i),
                wind_speed=_float_at(winds, i),
            )
        )
    hours.sort(key=lambda h: h.time)
    return HourlyForecast(date=day, hours=tuple(hours))


def _series(block: dict, *keys: str) -> list[Any]:
    for key in keys:
        values = block.get(key)
        if values is not None:
            return values
    return []


def _float_at(values: list[Any], i: int) -> float | None:
    try:
        value = values[i]
    except IndexError:
        return None
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int_at(values: list[Any], i: int) -> int | None:
    value = _float_at(values, i)
    if value is None or not value.is_integer():
        return None
    return int(value)
