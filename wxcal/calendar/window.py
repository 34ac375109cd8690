"""Forecast request window: the displayed month clamped to the provider horizon."""

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta

DEFAULT_HORIZON_DAYS = 15


@dataclass(frozen=True)
class DateWindow:
    """Closed date range ``[start, end]``. Empty when ``start > end``."""

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def __bool__(self) -> bool:
        return not self.is_empty

    def __len__(self) -> int:
        if self.is_empty:
            return 0
        return (self.end - self.start).days + 1

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date) or self.is_empty:
            return False
        return self.start <= day <= self.end

    def __iter__(self) -> Iterator[date]:
        for offset in range(len(self)):
            yield self.start + timedelta(days=offset)

    def describe(self) -> str:
        return f"{to_ymd(self.start)} → {to_ymd(self.end)}"


def to_ymd(d: date) -> str:
    """Format from the local calendar fields, never a UTC-shifted instant."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def horizon_bounds(today: date, horizon_days: int = DEFAULT_HORIZON_DAYS) -> tuple[date, date]:
    """Inclusive horizon: 15 days ahead gives a 16-day span."""
    if horizon_days < 0:
        raise ValueError(f"horizon_days must be >= 0, got {horizon_days}")
    return today, today + timedelta(days=horizon_days)


def forecast_window(
    year: int,
    month: int,
    today: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> DateWindow:
    """Intersect the month ``year-month`` with the horizon starting at ``today``.

    The result may be empty (month entirely past, or beyond the horizon);
    callers must not issue a request for an empty window.
    """
    month_start, month_end = month_bounds(year, month)
    horizon_start, horizon_end = horizon_bounds(today, horizon_days)
    return DateWindow(
        start=max(month_start, horizon_start),
        end=min(month_end, horizon_end),
    )
