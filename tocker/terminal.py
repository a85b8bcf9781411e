"""Raw-mode and alternate-screen handling for one interactive session."""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l\x1b[H\x1b[2J"
LEAVE_SCREEN = b"\x1b[0m\x1b[?25h\x1b[?1049l"
FALLBACK_SIZE = (80, 24)


class TerminalController:
    """Switch the controlling terminal into raw mode and back.

    The line discipline in effect at construction time is what gets restored.
    """

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._original_attrs = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        # Screen first: the cursor must be visible again before cooked mode returns.
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._original_attrs)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``."""
        columns, rows = shutil.get_terminal_size(FALLBACK_SIZE)
        return columns, rows

    @contextlib.contextmanager
    def raw_mode(self):
        """Hold raw mode for the ``with`` body, restoring it on any exit."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
