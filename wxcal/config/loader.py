"""YAML config loader with dotted-key lookup."""

import logging
from pathlib import Path
from typing import Any

import yaml

from wxcal.config.schema import CalendarConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None = None) -> CalendarConfig:
    """Load and validate config from a YAML file.

    With no path, returns the built-in defaults. An empty file is the same
    as the defaults; a missing ``weather_codes`` section keeps the default
    WMO table.
    """
    if path is None:
        return CalendarConfig()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level must be a mapping")

    config = CalendarConfig(**raw)
    logger.debug("Loaded config from %s", path)
    return config


def get_config_value(config: CalendarConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'forecast.horizon_days'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part) and not callable(getattr(obj, part)):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
