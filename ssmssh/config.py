"""JSON config helpers.

Supplies defaults for theme, aws CLI path, lookup deadlines, list window
height, and log file. All access is defensive: malformed or missing config
falls back to built-in defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "ssmssh"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class SelectorConfig:
    theme: str | None = None
    aws_cli: str = "aws"
    discovery_region: str = "us-west-2"
    list_timeout: float = 15.0
    preview_timeout: float = 5.0
    window_rows: int = 20
    log_file: Path | None = None


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _positive_number(data: dict[str, object], key: str) -> float | None:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return float(value)


def _positive_int(data: dict[str, object], key: str) -> int | None:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_selector_config() -> SelectorConfig:
    """Return config values merged over defaults; invalid entries are ignored."""
    data = load_config()
    defaults = SelectorConfig()
    log_file = _string(data, "log_file")
    return SelectorConfig(
        theme=_string(data, "theme"),
        aws_cli=_string(data, "aws_cli") or defaults.aws_cli,
        discovery_region=_string(data, "discovery_region") or defaults.discovery_region,
        list_timeout=_positive_number(data, "list_timeout") or defaults.list_timeout,
        preview_timeout=_positive_number(data, "preview_timeout") or defaults.preview_timeout,
        window_rows=_positive_int(data, "window_rows") or defaults.window_rows,
        log_file=Path(log_file).expanduser() if log_file else None,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "SelectorConfig",
    "load_config",
    "load_selector_config",
]
