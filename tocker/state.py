from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .commands import ResourceCommand, ResourceKind
from .render.help import INITIAL_HINT
from .selection import RowList


class Moment(enum.Enum):
    AWAITING_KIND = "kind"
    AWAITING_COMMAND = "command"
    AWAITING_TARGET = "target"


@dataclass
class SessionState:
    rows: RowList = field(default_factory=RowList)
    hint: str = INITIAL_HINT
    moment: Moment = Moment.AWAITING_KIND
    kind: ResourceKind | None = None
    command: ResourceCommand | None = None
    text_input: str = ""
