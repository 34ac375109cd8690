"""Server-side HTML for the browser calendar.

All navigation is plain links and a GET form, so the page is a pure
function of the view state carried in the query string.
"""

from html import escape
from urllib.parse import urlencode

from pydantic import ValidationError

from wxcal.calendar.grid import DAY_ABBR
from wxcal.calendar.weather_codes import WeatherCodeTable
from wxcal.models.view import ViewState
from wxcal.render.formatters import (
    day_title,
    format_precipitation,
    format_probability,
    format_temperature,
    format_wind,
    hour_label,
    legend_text,
    month_label,
    weather_emoji,
)
from wxcal.render.snapshot import CalendarSnapshot, CellView

STYLE = """
body{font-family:system-ui,sans-serif;margin:1.5rem;max-width:60rem}
.toolbar{display:flex;gap:1rem;align-items:center;flex-wrap:wrap}
.grid{display:grid;grid-template-columns:repeat(7,1fr);gap:4px}
.dow{font-weight:600;text-align:center}
.cell{border:1px solid #ddd;border-radius:6px;padding:4px;min-height:5rem;color:inherit;text-decoration:none}
.cell.dim{opacity:.45}
.cell-head{display:flex;justify-content:space-between}
.hi{font-weight:600;margin-right:.4rem}.muted{color:#999}
.hint{color:#555}.error{color:#b00}
.modal{position:fixed;inset:0;background:rgba(0,0,0,.35);display:flex;align-items:center;justify-content:center}
.sheet{background:#fff;border-radius:10px;padding:1rem;max-width:90vw;overflow-x:auto}
.hour-row{display:flex;gap:6px}.hour-card{text-align:center;min-width:3.5rem}
"""


def view_url(view: ViewState) -> str:
    return "/?" + urlencode(view.to_query())


def render_page(snap: CalendarSnapshot, table: WeatherCodeTable | None = None) -> str:
    view = snap.view
    title = month_label(view.year, view.month)

    parts = [
        "<!doctype html>",
        '<html lang="en"><head><meta charset="utf-8">',
        f"<title>{escape(title)} · Emoji Weather Calendar</title>",
        f"<style>{STYLE}</style></head><body>",
        '<header class="toolbar"><h1>Emoji Weather Calendar</h1>',
        _month_link(view, -1, "◀️"),
        f'<div class="month">{escape(title)}</div>',
        _month_link(view, 1, "▶️"),
        '<form class="loc" method="get" action="/">',
        f'<input name="city" placeholder="Search city…" value="{escape(view.city)}">',
        f'<input type="hidden" name="year" value="{view.year}">',
        f'<input type="hidden" name="month" value="{view.month}">',
        '<button type="submit">Search</button></form></header>',
        f'<div class="legend">{escape(legend_text())}</div>',
    ]
    for hint in snap.hints():
        css = "error" if hint.is_error else "hint"
        parts.append(f'<p class="{css}">{escape(hint.text)}</p>')

    parts.append('<section class="grid">')
    parts.extend(f'<div class="dow">{d}</div>' for d in DAY_ABBR)
    for week in snap.cells(table):
        parts.extend(_cell(cell, view) for cell in week)
    parts.append("</section>")

    if snap.day_open:
        parts.append(_day_sheet(snap, table))
    parts.append("</body></html>")
    return "\n".join(parts)


def _month_link(view: ViewState, delta: int, label: str) -> str:
    try:
        target = view.with_month_offset(delta).clear_selection()
    except ValidationError:
        return f'<span class="muted">{label}</span>'
    return f'<a href="{escape(view_url(target))}">{label}</a>'


def _cell(cell: CellView, view: ViewState) -> str:
    css = "cell" if cell.in_month else "cell dim"
    head = (
        f'<div class="cell-head"><span class="date">{cell.date.day}</span>'
        f'<span class="emoji" aria-label="weather">{cell.emoji}</span></div>'
    )
    if cell.entry is None:
        return f'<div class="{css}">{head}<div class="stats muted">No data</div></div>'
    stats = (
        '<div class="stats"><div class="temps">'
        f'<span class="hi">{format_temperature(cell.entry.temperature_max)}</span>'
        f'<span class="lo">{format_temperature(cell.entry.temperature_min)}</span></div>'
        f'<div class="precip">💧 {format_precipitation(cell.entry.precipitation_mm)}</div></div>'
    )
    href = escape(view_url(view.select(cell.date)))
    return f'<a class="{css}" href="{href}">{head}{stats}</a>'


def _day_sheet(snap: CalendarSnapshot, table: WeatherCodeTable | None) -> str:
    if snap.view.selected_date is None:
        return ""
    close = escape(view_url(snap.view.clear_selection()))
    label = snap.location.label if snap.location else ""
    parts = [
        '<div class="modal"><div class="sheet"><div class="sheet-head">',
        f'<div class="sheet-title">{escape(day_title(snap.view.selected_date))}</div>',
        f'<div class="sheet-sub">{escape(label)}</div>',
        f'<a class="close" href="{close}">✕</a></div>',
    ]
    hint = snap.hourly_hint()
    if hint is not None:
        parts.append(f'<div class="hint">{escape(hint.text)}</div>')
    if snap.hours:
        parts.append('<div class="hour-row">')
        for h in snap.hours:
            parts.append(
                '<div class="hour-card">'
                f'<div class="hour">{hour_label(h.time)}</div>'
                f'<div class="big-emoji">{weather_emoji(h.weather_code, table)}</div>'
                f'<div class="temp">{format_temperature(h.temperature)}</div>'
                f'<div class="meta">💧 {format_probability(h.precipitation_probability)}</div>'
                f'<div class="meta">💨 {format_wind(h.wind_speed)}</div></div>'
            )
        parts.append("</div>")
    parts.append("</div></div>")
    return "\n".join(parts)
