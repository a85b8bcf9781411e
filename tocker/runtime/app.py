"""Session composition: wires reader, state machine, renderer and terminal."""

from __future__ import annotations

import sys

from ..commands import default_authorization_table
from ..errors import QuitRequested
from ..executor import CommandRunner
from ..input import KeyReader, default_keybindings
from ..input.keys import KeyEvent
from ..render import build_frame_lines, paint_frame
from ..state import SessionState
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .config import Settings
from .loop import run_session
from .machine import InteractionMachine


def build_machine(
    settings: Settings,
    reader: KeyReader,
    state: SessionState,
    redraw,
) -> InteractionMachine:
    """Build the state machine with fresh binding and authorization tables."""

    def next_key() -> KeyEvent:
        key = reader.read_key()
        if key is None:
            raise QuitRequested("end of input")
        return key

    return InteractionMachine(
        bindings=default_keybindings(),
        table=default_authorization_table(),
        runner=CommandRunner(settings.executable, settings.command_timeout_seconds),
        next_key=next_key,
        state=state,
        redraw=redraw,
    )


def run_app(settings: Settings, no_color: bool = False) -> None:
    """Run an interactive session on the process's stdin/stdout."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    theme = resolve_theme(settings.theme, no_color=no_color)
    terminal = TerminalController(stdin_fd, stdout_fd)
    state = SessionState()

    def redraw() -> None:
        width, height = terminal.size()
        paint_frame(build_frame_lines(state, width, height, theme), stdout_fd)

    machine = build_machine(settings, KeyReader(stdin_fd), state, redraw)
    run_session(machine, terminal, redraw)
