"""Command-line front door for tocker.

Parses CLI options, layers them over the config file, probes the container
daemon, and only then hands the terminal to the interactive session.
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from .errors import DaemonUnreachable
from .executor import probe_daemon
from .logging_config import setup_logging
from .runtime import run_app
from .runtime.config import LOG_LEVELS, apply_overrides, load_settings
from .ui_theme import available_theme_names

EXIT_NOT_A_TTY = 2
EXIT_DAEMON_UNREACHABLE = 3


def _positive_float(value: str) -> float:
    """argparse type for positive numeric values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tocker",
        description="Keyboard-driven terminal front end for docker images, containers and volumes.",
    )
    parser.add_argument("--executable", default=None, help="Container tool to run (default: docker).")
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds to wait for each command before reporting a failure.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Minimum level written to the log file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, verify the daemon, and run the interactive session."""
    args = build_parser().parse_args(argv)
    settings = apply_overrides(
        load_settings(),
        executable=args.executable,
        timeout=args.timeout,
        theme=args.theme,
        log_level=args.log_level,
    )
    log_path = setup_logging(settings.log_level)
    logger.info("Starting with {} (log: {})", settings, log_path)

    if not sys.stdin.isatty():
        print("tocker: stdin is not a terminal", file=sys.stderr)
        raise SystemExit(EXIT_NOT_A_TTY)

    try:
        probe_daemon(settings.executable)
    except DaemonUnreachable as exc:
        logger.error("Daemon unreachable: {}", exc)
        print(f"tocker: {exc}", file=sys.stderr)
        raise SystemExit(EXIT_DAEMON_UNREACHABLE) from exc

    try:
        run_app(settings, no_color=args.no_color)
    except Exception:
        logger.exception("Session aborted")
        raise


if __name__ == "__main__":
    main()
