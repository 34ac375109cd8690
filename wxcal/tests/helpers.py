"""Test helpers shared across test packages."""

import json
from datetime import date, timedelta
from pathlib import Path

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


def daily_payload(start: date, end: date, code: int = 2) -> dict:
    """Open-Meteo style daily block covering every date in [start, end]."""
    days = []
    d = start
    while d <= end:
        days.append(d.isoformat())
        d += timedelta(days=1)
    return {
        "daily": {
            "time": days,
            "weather_code": [code] * len(days),
            "temperature_2m_max": [20.0] * len(days),
            "temperature_2m_min": [10.0] * len(days),
            "precipitation_sum": [12.7] * len(days),
        }
    }
