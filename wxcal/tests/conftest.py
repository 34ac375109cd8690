"""Shared test fixtures."""

from datetime import date
from pathlib import Path

import pytest
import yaml

from wxcal.config.schema import CalendarConfig
from wxcal.tests.helpers import FIXTURE_DIR


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def default_config() -> CalendarConfig:
    return CalendarConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "forecast": {"horizon_days": 10},
        "display": {"default_city": "Chicago"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def today() -> date:
    return date(2026, 10, 19)
