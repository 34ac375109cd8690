"""Tests for CLI commands."""

from datetime import date
from pathlib import Path

import httpx
import respx

from wxcal.cli import main
from wxcal.config.schema import FORECAST_URL, GEOCODING_URL
from wxcal.tests.helpers import daily_payload, load_fixture

TODAY = ["--today", "2026-10-19"]


def _forecast_response(request: httpx.Request) -> httpx.Response:
    params = request.url.params
    if "hourly" in params:
        return httpx.Response(200, json=load_fixture("forecast_hourly_oct20.json"))
    start = date.fromisoformat(params["start_date"])
    end = date.fromisoformat(params["end_date"])
    return httpx.Response(200, json=daily_payload(start, end))


def _mock_open_meteo(geocode_fixture: str = "geocode_new_york.json"):
    geo = respx.get(GEOCODING_URL).mock(
        return_value=httpx.Response(200, json=load_fixture(geocode_fixture))
    )
    forecast = respx.get(FORECAST_URL).mock(side_effect=_forecast_response)
    return geo, forecast


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_config_show(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        captured = capsys.readouterr()
        assert "horizon_days" in captured.out
        assert "thunderstorm-with-hail" in captured.out

    def test_config_get(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path), "config", "get", "forecast.horizon_days"])
        assert result == 0
        assert capsys.readouterr().out.strip() == "10"

        result = main(["--config", str(config_yaml_path), "config", "get", "display.default_city"])
        assert result == 0
        assert capsys.readouterr().out.strip() == "Chicago"

    def test_config_get_unknown_key(self, capsys):
        result = main(["config", "get", "forecast.nope"])
        assert result == 1
        assert "not found" in capsys.readouterr().out

    def test_invalid_config_returns_2(self, tmp_path: Path, capsys):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("forecast:\n  horizon_days: 40\n")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 2
        assert capsys.readouterr().out.startswith("Error:")

    def test_bad_month_returns_2(self, capsys):
        result = main(["month", "--month", "2026-13", *TODAY])
        assert result == 2
        assert "month out of range" in capsys.readouterr().out

    def test_unsupported_year_returns_2(self, capsys):
        result = main(["month", "--month", "9999-12", *TODAY])
        assert result == 2
        assert capsys.readouterr().out.startswith("Error:")


class TestMonthCommand:
    @respx.mock
    def test_current_month(self, capsys):
        geo, forecast = _mock_open_meteo()
        result = main(["month", "--city", "New York", "--month", "2026-10", *TODAY])
        assert result == 0

        out = capsys.readouterr().out
        assert out.startswith("=== October 2026 ===")
        assert "📍 New York, New York • Request window: 2026-10-19 → 2026-10-31" in out
        assert "19 ⛅" in out
        assert "20° 10°" in out
        assert "💧0.50 in" in out
        assert geo.call_count == 1
        assert forecast.call_count == 1

    @respx.mock
    def test_month_beyond_horizon(self, capsys):
        _, forecast = _mock_open_meteo()
        result = main(["month", "--month", "2027-01", *TODAY])
        assert result == 0

        out = capsys.readouterr().out
        assert "=== January 2027 ===" in out
        assert "No forecast available for the full month" in out
        assert not forecast.called

    @respx.mock
    def test_city_not_found_returns_1(self, capsys):
        _, forecast = _mock_open_meteo("geocode_no_match.json")
        result = main(["month", "--city", "Springfield", *TODAY])
        assert result == 1
        assert "! City not found. Try another name." in capsys.readouterr().out
        assert not forecast.called


class TestDayCommand:
    @respx.mock
    def test_day_with_hourly(self, capsys):
        _, forecast = _mock_open_meteo()
        result = main(["day", "--date", "2026-10-20", *TODAY])
        assert result == 0

        out = capsys.readouterr().out
        assert "=== Tuesday, Oct 20 ===" in out
        assert "12a" in out
        assert "1p" in out
        hourly = [c for c in forecast.calls if "hourly" in c.request.url.params]
        assert len(hourly) == 1

    @respx.mock
    def test_day_outside_window(self, capsys):
        _, forecast = _mock_open_meteo()
        result = main(["day", "--date", "2026-10-05", *TODAY])
        assert result == 0
        assert "No daily data for 2026-10-05; nothing to show." in capsys.readouterr().out
        assert all("hourly" not in c.request.url.params for c in forecast.calls)

    def test_bad_date_returns_2(self, capsys):
        result = main(["day", "--date", "20-10-2026", *TODAY])
        assert result == 2
