"""Cell-width helpers for styled terminal lines.

Rows are wrapped in SGR sequences before painting, so every measurement here
skips escape sequences and counts terminal cells rather than characters.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_WIDTH = 8


def cell_width(ch: str, column: int = 0) -> int:
    """Cells taken by ``ch`` when printed at ``column``."""
    if ch == "\t":
        return TAB_WIDTH - column % TAB_WIDTH
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _segments(text: str) -> Iterator[tuple[bool, str]]:
    """Split ``text`` into ``(is_escape, chunk)`` pairs, in order."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > pos:
            yield False, text[pos : match.start()]
        yield True, match.group(0)
        pos = match.end()
    if pos < len(text):
        yield False, text[pos:]


def display_width(text: str) -> int:
    width = 0
    for is_escape, chunk in _segments(text):
        if is_escape:
            continue
        for ch in chunk:
            width += cell_width(ch, width)
    return width


def sanitize_text(text: str) -> str:
    """Drop escapes and control characters that would break the frame layout."""
    return "".join(ch for ch in ANSI_ESCAPE_RE.sub("", text) if ch == "\t" or ch.isprintable())


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` to ``max_cols`` cells, keeping escapes that precede the cut.

    Tabs become spaces. A wide character that would straddle the edge is
    dropped whole.
    """
    if max_cols <= 0:
        return ""
    pieces: list[str] = []
    used = 0
    for is_escape, chunk in _segments(text):
        if is_escape:
            pieces.append(chunk)
            continue
        for ch in chunk:
            width = cell_width(ch, used)
            if used + width > max_cols:
                return "".join(pieces)
            pieces.append(" " * width if ch == "\t" else ch)
            used += width
    return "".join(pieces)


def pad_to_width(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` cells and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))
