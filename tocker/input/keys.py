"""Structural key events shared by the reader and the keybinding registry.

A key is a logical code plus modifier flags. Equality is exact on both, so
``Ctrl+C`` and ``c`` are different keys.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class KeyModifiers(enum.Flag):
    NONE = 0
    CONTROL = enum.auto()
    ALT = enum.auto()


# Named codes for non-printable keys; printable keys use the character itself.
UP = "Up"
DOWN = "Down"
LEFT = "Left"
RIGHT = "Right"
ENTER = "Enter"
ESC = "Esc"
BACKSPACE = "Backspace"
TAB = "Tab"


@dataclass(frozen=True)
class KeyEvent:
    """One key press: ``code`` is a character or one of the named codes."""

    code: str
    modifiers: KeyModifiers = KeyModifiers.NONE

    @classmethod
    def char(cls, ch: str) -> KeyEvent:
        return cls(ch, KeyModifiers.NONE)

    @classmethod
    def ctrl(cls, ch: str) -> KeyEvent:
        return cls(ch, KeyModifiers.CONTROL)

    def is_printable(self) -> bool:
        """Return whether this key inserts text in a line editor."""
        return self.modifiers == KeyModifiers.NONE and len(self.code) == 1 and self.code.isprintable()

    def label(self) -> str:
        """Human-readable key name for status messages."""
        prefix = ""
        if self.modifiers & KeyModifiers.CONTROL:
            prefix += "Ctrl+"
        if self.modifiers & KeyModifiers.ALT:
            prefix += "Alt+"
        code = "Space" if self.code == " " else self.code
        return f"{prefix}{code}"
