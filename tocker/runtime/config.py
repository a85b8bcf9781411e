"""Persistent JSON config helpers.

Stores the container executable, command timeout, theme and log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from ..executor import DEFAULT_EXECUTABLE, DEFAULT_TIMEOUT_SECONDS

APP_NAME = "tocker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings, built once at startup."""

    executable: str = DEFAULT_EXECUTABLE
    command_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    theme: str = "default"
    log_level: str = "INFO"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_executable(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _coerce_timeout(value: object) -> float | None:
    """Accept positive ints/floats; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return float(value)


def _coerce_theme(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip().lower()
    return stripped if stripped else None


def _coerce_log_level(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    upper = value.strip().upper()
    return upper if upper in LOG_LEVELS else None


def load_settings() -> Settings:
    """Build ``Settings`` from the config file, ignoring invalid keys one by one."""
    data = load_config()
    settings = Settings()
    executable = _coerce_executable(data.get("executable"))
    if executable is not None:
        settings = replace(settings, executable=executable)
    timeout = _coerce_timeout(data.get("command_timeout_seconds"))
    if timeout is not None:
        settings = replace(settings, command_timeout_seconds=timeout)
    theme = _coerce_theme(data.get("theme"))
    if theme is not None:
        settings = replace(settings, theme=theme)
    log_level = _coerce_log_level(data.get("log_level"))
    if log_level is not None:
        settings = replace(settings, log_level=log_level)
    return settings


def apply_overrides(
    settings: Settings,
    *,
    executable: str | None = None,
    timeout: float | None = None,
    theme: str | None = None,
    log_level: str | None = None,
) -> Settings:
    """Layer command-line values over file settings; ``None`` keeps the file value."""
    changes: dict[str, object] = {}
    if executable is not None:
        changes["executable"] = executable
    if timeout is not None:
        changes["command_timeout_seconds"] = float(timeout)
    if theme is not None:
        changes["theme"] = theme
    if log_level is not None:
        changes["log_level"] = log_level.upper()
    return replace(settings, **changes)
