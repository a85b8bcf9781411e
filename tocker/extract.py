"""Target extraction from tabular command output.

The external tool prints a header such as ``CONTAINER ID   IMAGE ...`` or
``REPOSITORY TAG IMAGE ID ...``. Splitting on whitespace breaks two-word
column labels apart, so the identifier column is the token just before the
one containing ``ID``.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from .selection import Row

ID_MARKER = "ID"


def identifier_column(header: str) -> int | None:
    """Return the identifier column index for ``header``, or ``None`` if absent.

    The last ``ID``-bearing token wins; a marker in the first token maps to 0.
    """
    column: int | None = None
    for idx, token in enumerate(header.split()):
        if ID_MARKER in token:
            column = max(0, idx - 1)
    return column


def extract_target(rows: Sequence[Row]) -> str:
    """Join the identifier column of every toggled non-header, non-status row."""
    if not rows:
        return ""

    column = identifier_column(rows[0].text)
    if column is None:
        # TODO: let the authorization table name the identifier column per kind
        # (volume listings have no ID column and fall back to DRIVER).
        logger.warning("No '{}' column in header {!r}; using column 0", ID_MARKER, rows[0].text)
        column = 0

    parts: list[str] = []
    for row in rows[1:]:
        if not row.toggled or row.status:
            continue
        tokens = row.text.split()
        if column < len(tokens):
            parts.append(tokens[column])
    return " ".join(parts).strip()
