"""Input-layer public API for key decoding and keybinding resolution.

Exports are split between low-level terminal decoding (``KeyReader``) and the
context-aware registry used by the state machine.
"""

from .key_registry import (
    UNBOUND,
    Context,
    GlobalAction,
    KeyBindings,
    ListAction,
    Resolution,
    default_keybindings,
)
from .keys import KeyEvent, KeyModifiers
from .reader import ESC_SEQUENCE_TIMEOUT_MS, KeyReader

__all__ = [
    "KeyReader",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyEvent",
    "KeyModifiers",
    "Context",
    "GlobalAction",
    "ListAction",
    "KeyBindings",
    "Resolution",
    "UNBOUND",
    "default_keybindings",
]
