"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` values.
Handles ESC-sequence timing, control-key combos, and multi-byte UTF-8.
"""

from __future__ import annotations

import os
import select

from ..errors import InvalidEventSource
from . import keys
from .keys import KeyEvent

ESC_SEQUENCE_TIMEOUT_MS = 25
_CSI_MAX_BYTES = 64

_ARROWS = {
    b"A": keys.UP,
    b"B": keys.DOWN,
    b"C": keys.RIGHT,
    b"D": keys.LEFT,
}


def _utf8_sequence_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if lead >> 5 == 0b110:
        return 2
    if lead >> 4 == 0b1110:
        return 3
    if lead >> 3 == 0b11110:
        return 4
    return 1


class KeyReader:
    """Blocking key source over a raw-mode file descriptor."""

    def __init__(self, fd: int, esc_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.fd = fd
        self.esc_timeout_ms = esc_timeout_ms
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def _read_byte(self) -> bytes:
        if self._pending:
            return self._pending.pop(0)
        return os.read(self.fd, 1)

    def read_key(self) -> KeyEvent | None:
        """Block for the next key. Returns ``None`` at end of input.

        Raises ``InvalidEventSource`` for byte sequences that are not key
        presses (mouse reports, unknown escape sequences, broken UTF-8).
        """
        ch = self._read_byte()
        if not ch:
            return None

        if ch in {b"\r", b"\n"}:
            return KeyEvent(keys.ENTER)
        if ch == b"\t":
            return KeyEvent(keys.TAB)
        if ch == b"\x7f":
            return KeyEvent(keys.BACKSPACE)
        if ch == b"\x1b":
            return self._read_escape()

        code = ch[0]
        if code == 0:
            return KeyEvent.ctrl(" ")
        if code < 0x20:
            # Ctrl+A .. Ctrl+Z arrive as 0x01 .. 0x1a.
            return KeyEvent.ctrl(chr(code + 0x60))

        length = _utf8_sequence_length(code)
        raw = ch
        for _ in range(length - 1):
            nxt = self._read_ready_byte(self.esc_timeout_ms)
            if nxt is None:
                break
            raw += nxt
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEventSource(f"Undecodable input bytes {raw!r}") from exc
        return KeyEvent.char(text)

    def _read_escape(self) -> KeyEvent:
        seq = self._read_ready_byte(self.esc_timeout_ms)
        if seq is None:
            return KeyEvent(keys.ESC)
        if seq not in {b"[", b"O"}:
            # Lone Esc followed by a regular key: keep that key for the next read.
            self._pending.append(seq)
            return KeyEvent(keys.ESC)

        final = self._read_ready_byte(self.esc_timeout_ms)
        if final is None:
            return KeyEvent(keys.ESC)
        if final in _ARROWS:
            return KeyEvent(_ARROWS[final])

        # Swallow the rest of an unsupported CSI sequence (mouse, function keys).
        consumed = 0
        while not (0x40 <= final[0] <= 0x7E) or final in {b"[", b"<"}:
            final = self._read_ready_byte(self.esc_timeout_ms)
            consumed += 1
            if final is None or consumed > _CSI_MAX_BYTES:
                break
        raise InvalidEventSource("Press a valid key")
