"""Row list with a wrap-around cursor and per-row toggles.

Row 0 is the header of the external tool's table output. It occupies the
cursor's minimum position but is never toggled, and once the list holds
more than one row, navigation cycles through rows ``1 .. len-1`` only.
Status rows (error messages appended after a failed step) are shown but
never land under the cursor or count as selected.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

HEADER_INDEX = 0


@dataclass
class Row:
    text: str
    toggled: bool = False
    status: bool = False


@dataclass
class RowList:
    rows: list[Row] = field(default_factory=list)
    cursor: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> RowList:
        return cls(rows=[Row(line) for line in lines])

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def replace(self, lines: Iterable[str]) -> None:
        """Swap in fresh content and park the cursor on the header."""
        self.rows = [Row(line) for line in lines]
        self.cursor = 0

    def clear(self) -> None:
        self.rows = []
        self.cursor = 0

    def append_status(self, message: str) -> None:
        """Append a one-line status message (errors, hints) to the list."""
        self.rows.append(Row(" ".join(message.splitlines()).strip(), status=True))

    def _step(self, delta: int) -> None:
        """Move by ``delta`` over rows ``1 .. len-1``, wrapping and skipping status rows."""
        if len(self.rows) <= 1:
            return
        last = len(self.rows) - 1
        for _ in range(last):
            self.cursor += delta
            if self.cursor > last:
                self.cursor = 1
            elif self.cursor <= HEADER_INDEX:
                self.cursor = last
            if not self.rows[self.cursor].status:
                return

    def move_up(self) -> None:
        """Advance the cursor, wrapping from the last row back to row 1."""
        self._step(1)

    def move_down(self) -> None:
        """Step the cursor back, wrapping from row 1 (or the header) to the last row."""
        self._step(-1)

    def toggle(self) -> None:
        """Flip the toggle flag at the cursor; the header never toggles."""
        if not self.rows or self.cursor == HEADER_INDEX:
            return
        if self.cursor >= len(self.rows):
            return
        row = self.rows[self.cursor]
        if row.status:
            return
        row.toggled = not row.toggled

    def clear_toggles(self) -> None:
        for row in self.rows:
            row.toggled = False

    def reset_cursor(self) -> None:
        self.cursor = 0

    def toggled_rows(self) -> list[Row]:
        return [row for idx, row in enumerate(self.rows) if idx != HEADER_INDEX and row.toggled and not row.status]
