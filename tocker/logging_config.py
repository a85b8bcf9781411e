"""Loguru setup.

The TUI owns stdout/stderr while it runs, so the default stderr sink is
removed and records go to a rotating file in the platform log directory.
"""

from __future__ import annotations

from pathlib import Path

import platformdirs
from loguru import logger

APP_NAME = "tocker"
LOG_FILENAME = "tocker.log"


def default_log_dir() -> Path:
    # Linux: ~/.local/state/tocker/log/  macOS: ~/Library/Logs/tocker/
    return Path(platformdirs.user_log_dir(appname=APP_NAME, appauthor=False))


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> Path:
    """Route loguru records to ``<log_dir>/tocker.log`` and return that path."""
    target_dir = log_dir if log_dir is not None else default_log_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / LOG_FILENAME

    logger.remove()
    logger.add(
        str(log_path),
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        rotation="5 MB",
        retention=5,
        encoding="utf-8",
    )
    return log_path
