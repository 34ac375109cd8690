"""Plain text month grid and day sheet for the terminal."""

from wxcal.calendar.grid import DAY_ABBR
from wxcal.calendar.weather_codes import WeatherCodeTable
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

CELL_WIDTH = 12


def render_month(snap: CalendarSnapshot, table: WeatherCodeTable | None = None) -> str:
    lines = [
        f"=== {month_label(snap.view.year, snap.view.month)} ===",
        legend_text(),
    ]
    for hint in snap.hints():
        prefix = "! " if hint.is_error else ""
        lines.append(f"{prefix}{hint.text}")
    lines.append("")
    lines.append("".join(d.ljust(CELL_WIDTH) for d in DAY_ABBR).rstrip())

    for week in snap.cells(table):
        lines.append(_row(week, _head))
        lines.append(_row(week, _temps))
        lines.append(_row(week, _precip))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_day(snap: CalendarSnapshot, table: WeatherCodeTable | None = None) -> str:
    selected = snap.view.selected_date
    if selected is None:
        return ""
    lines = [f"=== {day_title(selected)} ==="]
    if snap.location is not None:
        lines.append(snap.location.label)
    hint = snap.hourly_hint()
    if hint is not None:
        lines.append(hint.text)
    if snap.hours:
        for h in snap.hours:
            lines.append(
                f"{hour_label(h.time):>4}  {weather_emoji(h.weather_code, table)}  "
                f"{format_temperature(h.temperature):>4}  "
                f"💧 {format_probability(h.precipitation_probability):>4}  "
                f"💨 {format_wind(h.wind_speed)}"
            )
    return "\n".join(lines) + "\n"


def _row(week: list[CellView], part) -> str:
    return "".join(_fit(part(cell)) for cell in week).rstrip()


def _fit(text: str) -> str:
    return text.ljust(CELL_WIDTH)


def _head(cell: CellView) -> str:
    # Out-of-month days are bracketed in place of dimming
    day = str(cell.date.day) if cell.in_month else f"({cell.date.day})"
    return f"{day} {cell.emoji}"


def _temps(cell: CellView) -> str:
    if cell.entry is None:
        return "No data"
    return (
        f"{format_temperature(cell.entry.temperature_max)} "
        f"{format_temperature(cell.entry.temperature_min)}"
    )


def _precip(cell: CellView) -> str:
    if cell.entry is None:
        return ""
    return f"💧{format_precipitation(cell.entry.precipitation_mm)}"
