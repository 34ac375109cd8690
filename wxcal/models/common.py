"""Common helpers shared across models."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def local_today() -> date:
    """Today from the local calendar, which is what the grid is drawn in."""
    return date.today()


def parse_ymd(value: str) -> date:
    """Parse ``YYYY-MM-DD``; raises ValueError on anything else."""
    if len(value) != 10:
        raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
    return date.fromisoformat(value)


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into (year, month)."""
    try:
        year_s, month_s = value.split("-")
        year, month = int(year_s), int(month_s)
    except ValueError as e:
        raise ValueError(f"expected YYYY-MM, got {value!r}") from e
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range in {value!r}")
    return year, month
