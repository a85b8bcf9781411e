"""Main interactive session loop.

Brackets the state machine with raw mode so the terminal is restored on
every exit path: QUIT, end of input, and unexpected exceptions alike.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from ..errors import QuitRequested
from ..terminal import TerminalController
from .machine import InteractionMachine


def run_session(
    machine: InteractionMachine,
    terminal: TerminalController,
    redraw: Callable[[], None],
) -> None:
    """Run cycles inside raw mode until the user quits or input ends."""
    with terminal.raw_mode():
        redraw()
        try:
            machine.run()
        except QuitRequested as exc:
            logger.info("Session ended{}", f": {exc}" if str(exc) else "")
