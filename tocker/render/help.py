"""Hint and help text for the command-hint region.

Plain strings only; styling is applied by the frame renderer.
"""

from __future__ import annotations

INITIAL_HINT = "Available commands:\n press 'i' = image, 'c' = container, 'v' = volume."
TARGET_HINT = (
    "Select targets:\n 'j'/Up, 'k'/Down = move, 'space' = select, 'enter' = confirm, 'ctrl+c'/'esc' = cancel"
)
HELP_TEXT = (
    "[c/i/v] = container/image/volume;\n"
    " [ctrl+q] = quit; [ctrl+c]/[esc] = cancel action; [ctrl+l] = clear content; [ctrl+h] = help"
)
TEXT_INPUT_PREFIX = "Target for {command}: "


def text_input_hint(command_token: str, buffer: str) -> str:
    """Hint shown while the user types a free-text target."""
    return f"{TEXT_INPUT_PREFIX.format(command=command_token)}{buffer}_\n 'enter' = confirm, 'esc' = cancel"


def running_hint(command_line: str) -> str:
    return f"Running: {command_line}\n please wait..."
