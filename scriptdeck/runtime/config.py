"""JSON config loading for the flat, read-only component configuration.

Components see configuration as an immutable ``str -> str`` mapping handed out
once at startup. Loading is defensive: a missing or malformed file yields an
empty mapping.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from platformdirs import user_config_dir

APP_NAME = "scriptdeck"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def _coerce_value(value: object) -> str | None:
    """Flatten a JSON scalar to text; nested values are rejected."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def load_config(path: Path | None = None) -> dict[str, str]:
    """Load the JSON config object as a flat text mapping.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object. Non-scalar values are dropped.
    """
    config_path = path if path is not None else DEFAULT_CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}

    flat: dict[str, str] = {}
    for key, value in data.items():
        coerced = _coerce_value(value)
        if coerced is not None:
            flat[str(key)] = coerced
    return flat


def freeze_config(values: Mapping[str, str]) -> Mapping[str, str]:
    """Return a read-only snapshot of ``values``."""
    return MappingProxyType(dict(values))


def config_rate(config: Mapping[str, str], key: str, default: float) -> float:
    """Read a positive rate in Hz, falling back to ``default`` when invalid."""
    raw = config.get(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if value <= 0 or not math.isfinite(value):
        return default
    return value


__all__ = [
    "APP_NAME",
    "DEFAULT_CONFIG_PATH",
    "config_rate",
    "freeze_config",
    "load_config",
]
