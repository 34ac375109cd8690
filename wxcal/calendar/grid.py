"""Pure month-grid calculations, no rendering."""

from dataclasses import dataclass
from datetime import date, timedelta

WEEKS = 6
# Years whose every 6-week grid stays inside the range of datetime.date
MIN_YEAR = 2
MAX_YEAR = 9998
DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class GridCell:
    date: date
    in_month: bool


def grid_start(year: int, month: int) -> date:
    """The Sunday on or before the 1st of the month."""
    first = date(year, month, 1)
    # weekday(): Monday=0 .. Sunday=6
    return first - timedelta(days=(first.weekday() + 1) % 7)


def month_grid(year: int, month: int) -> list[list[GridCell]]:
    """Return a 6x7 grid of cells, weeks starting on Sunday.

    Always 6 rows so the calendar height stays constant; leading and
    trailing days from adjacent months are flagged ``in_month=False``.
    """
    start = grid_start(year, month)
    grid: list[list[GridCell]] = []
    for week in range(WEEKS):
        row = []
        for weekday in range(7):
            day = start + timedelta(days=week * 7 + weekday)
            row.append(GridCell(date=day, in_month=(day.year, day.month) == (year, month)))
        grid.append(row)
    return grid


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return (year, month) moved by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
