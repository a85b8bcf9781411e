"""Frame rendering for the two-region terminal view.

The list region takes 90% of the rows and the command-hint region the rest.
``build_frame_lines`` is a pure view of the session state; ``paint_frame``
writes a composed frame to the terminal.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from ..ansi import clip_ansi_line, pad_to_width, sanitize_text
from ..ui_theme import DEFAULT_THEME, UITheme

if TYPE_CHECKING:
    from ..selection import RowList
    from ..state import SessionState

LIST_REGION_RATIO = 0.9
MIN_HINT_ROWS = 3
CURSOR_MARKER = "> "
TOGGLED_MARKER = "* "
BLANK_MARKER = "  "


def split_regions(height: int) -> tuple[int, int]:
    """Return ``(list_rows, hint_rows)`` for a terminal ``height`` rows tall."""
    height = max(1, height)
    list_rows = int(height * LIST_REGION_RATIO)
    hint_rows = max(MIN_HINT_ROWS, height - list_rows)
    list_rows = max(0, height - hint_rows)
    return list_rows, min(hint_rows, height)


def scroll_start(cursor: int, total: int, visible: int) -> int:
    """Smallest scroll offset that keeps ``cursor`` inside ``visible`` rows."""
    if visible <= 0 or total <= visible:
        return 0
    start = max(0, cursor - visible + 1)
    return min(start, total - visible)


def _styled_row(text: str, style: str, theme: UITheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


def build_list_lines(rows: RowList, width: int, visible: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Render ``visible`` lines of the row list, scrolled to the cursor."""
    out: list[str] = []
    start = scroll_start(rows.cursor, len(rows), visible)
    for idx in range(start, min(len(rows), start + visible)):
        row = rows[idx]
        is_cursor = idx == rows.cursor and idx != 0
        if row.toggled:
            marker = TOGGLED_MARKER
        else:
            marker = CURSOR_MARKER if is_cursor else BLANK_MARKER
        if is_cursor:
            style = theme.cursor
        elif row.toggled:
            style = theme.toggled
        else:
            style = theme.header if idx == 0 else ""
        text = pad_to_width(marker + sanitize_text(row.text), width)
        out.append(_styled_row(text, style, theme))
    while len(out) < visible:
        out.append(" " * width)
    return out


def build_hint_lines(hint: str, width: int, rows: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Render the hint region: a divider followed by the hint text lines."""
    if rows <= 0:
        return []
    out = [_styled_row("─" * width, theme.border, theme)]
    for line in hint.splitlines()[: rows - 1]:
        out.append(_styled_row(pad_to_width(line, width), theme.hint, theme))
    while len(out) < rows:
        out.append(" " * width)
    return out


def build_frame_lines(state: SessionState, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Compose the full frame for ``state`` as exactly ``height`` lines."""
    width = max(1, width)
    list_rows, hint_rows = split_regions(height)
    lines = build_list_lines(state.rows, width, list_rows, theme)
    lines.extend(build_hint_lines(state.hint, width, hint_rows, theme))
    return [clip_ansi_line(line, width) + (theme.reset if "\033" in line else "") for line in lines[: max(1, height)]]


def paint_frame(lines: list[str], fd: int | None = None) -> None:
    """Write a composed frame from the top-left corner of the screen."""
    out = "\033[H\033[J" + "\r\n".join(lines)
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, out.encode("utf-8", errors="replace"))
