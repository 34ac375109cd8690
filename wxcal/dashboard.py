"""Browser calendar: FastAPI app serving server-rendered HTML plus JSON endpoints.

Usage:
    uvicorn wxcal.dashboard:app --port 8777
    WXCAL_CONFIG=configs/default.yaml python -m wxcal.dashboard
"""

import logging
import os
from datetime import date

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse

from wxcal.calendar.grid import MAX_YEAR, MIN_YEAR
from wxcal.config.loader import load_config
from wxcal.config.schema import CalendarConfig
from wxcal.ingest.open_meteo_client import OpenMeteoClient
from wxcal.models.common import local_today, utc_now_iso
from wxcal.models.view import ViewState
from wxcal.render.html import render_page
from wxcal.render.snapshot import CalendarSnapshot
from wxcal.session import CalendarSession

logger = logging.getLogger(__name__)

CONFIG_PATH = os.environ.get("WXCAL_CONFIG")

app = FastAPI(title="Emoji Weather Calendar", version="0.1.0")
app.state.config = load_config(CONFIG_PATH)


def _config() -> CalendarConfig:
    return app.state.config


def _view(city: str | None, year: int | None, month: int | None) -> ViewState:
    config = _config()
    today = local_today()
    try:
        return ViewState(
            year=year if year is not None else today.year,
            month=month if month is not None else today.month,
            city=(city if city is not None else config.display.default_city).strip(),
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _client(config: CalendarConfig) -> OpenMeteoClient:
    return OpenMeteoClient(config.api, config.forecast.temperature_unit)


async def _snapshot(view: ViewState, selected: date | None) -> CalendarSnapshot:
    config = _config()
    async with _client(config) as client:
        session = CalendarSession(client, config, view)
        try:
            await session.settle()
            if selected is not None and session.select_date(selected):
                await session.settle()
            return CalendarSnapshot.from_session(session)
        finally:
            await session.aclose()


# ── Data endpoints ──────────────────────────────────────────────


@app.get("/api/calendar")
async def get_calendar(
    city: str | None = None,
    year: int | None = Query(default=None, ge=MIN_YEAR, le=MAX_YEAR),
    month: int | None = Query(default=None, ge=1, le=12),
):
    """Month grid with daily data, statuses and hints."""
    snap = await _snapshot(_view(city, year, month), None)
    table = _config().code_table()
    return {
        "view": snap.view.model_dump(mode="json"),
        "status": {"geocode": snap.geocode_status, "daily": snap.daily_status},
        "location": _location_json(snap),
        "window": _window_json(snap),
        "hints": [{"text": h.text, "error": h.is_error} for h in snap.hints()],
        "weeks": [
            [
                {
                    "date": cell.date.isoformat(),
                    "in_month": cell.in_month,
                    "emoji": cell.emoji,
                    "category": table.classify(cell.entry.weather_code)
                    if cell.entry
                    else None,
                    "weather_code": cell.entry.weather_code if cell.entry else None,
                    "temperature_max": cell.entry.temperature_max if cell.entry else None,
                    "temperature_min": cell.entry.temperature_min if cell.entry else None,
                    "precipitation_mm": cell.entry.precipitation_mm if cell.entry else None,
                }
                for cell in week
            ]
            for week in snap.cells(table)
        ],
    }


@app.get("/api/day")
async def get_day(day: date = Query(alias="date"), city: str | None = None):
    """Hourly detail for one day; 404 when the day has no daily data."""
    snap = await _snapshot(_view(city, day.year, day.month), day)
    if not snap.day_open:
        raise HTTPException(status_code=404, detail=f"No forecast for {day.isoformat()}")
    table = _config().code_table()
    return {
        "date": day.isoformat(),
        "location": _location_json(snap),
        "status": snap.hourly_status,
        "hours": [
            {
                "time": h.time.isoformat(),
                "weather_code": h.weather_code,
                "category": table.classify(h.weather_code),
                "temperature": h.temperature,
                "precipitation_probability": h.precipitation_probability,
                "wind_speed": h.wind_speed,
            }
            for h in (snap.hours or ())
        ],
    }


@app.get("/api/config")
def get_config():
    return _config().model_dump(mode="json")


@app.get("/api/health")
def get_health():
    config = _config()
    return {
        "status": "ok",
        "horizon_days": config.forecast.horizon_days,
        "weather_code_rules": len(config.weather_codes),
        "timestamp": utc_now_iso(),
    }


# ── Serve calendar ──────────────────────────────────────────────


@app.get("/", response_class=HTMLResponse)
async def serve_calendar(
    city: str | None = None,
    year: int | None = Query(default=None, ge=MIN_YEAR, le=MAX_YEAR),
    month: int | None = Query(default=None, ge=1, le=12),
    day: date | None = Query(default=None, alias="date"),
):
    snap = await _snapshot(_view(city, year, month), day)
    return HTMLResponse(render_page(snap, _config().code_table()))


def _location_json(snap: CalendarSnapshot) -> dict | None:
    if snap.location is None:
        return None
    return {
        "latitude": snap.location.latitude,
        "longitude": snap.location.longitude,
        "label": snap.location.label,
    }


def _window_json(snap: CalendarSnapshot) -> dict:
    return {
        "start": snap.window.start.isoformat(),
        "end": snap.window.end.isoformat(),
        "empty": snap.window.is_empty,
        "days": len(snap.window),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8777)
