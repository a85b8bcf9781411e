"""Keybinding registry: four immutable lookup contexts.

Global overrides are always consulted before the context table, so cancel,
quit, help and clear keys interrupt any step. A miss in both yields the
``UNBOUND`` sentinel rather than an exception.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Union

from ..commands import ResourceCommand, ResourceKind
from . import keys
from .keys import KeyEvent


class Context(enum.Enum):
    KIND = "kind"
    COMMAND = "command"
    LIST = "list"
    GLOBAL = "global"


class GlobalAction(enum.Enum):
    CANCEL = "cancel"
    QUIT = "quit"
    HELP = "help"
    CLEAN = "clean"


class ListAction(enum.Enum):
    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    CANCEL = "cancel"


Action = Union[ResourceKind, ResourceCommand, ListAction, GlobalAction]


class _Unbound:
    """Falsy marker for a key no table knows about."""

    def __repr__(self) -> str:
        return "UNBOUND"

    def __bool__(self) -> bool:
        return False


UNBOUND = _Unbound()


@dataclass(frozen=True)
class Resolution:
    """A bound key: the context that matched and its action."""

    context: Context
    action: Action

    @property
    def is_global(self) -> bool:
        return self.context is Context.GLOBAL


def _freeze(pairs: Iterable[tuple[KeyEvent, Action]]) -> Mapping[KeyEvent, Action]:
    return MappingProxyType(dict(pairs))


@dataclass(frozen=True)
class KeyBindings:
    """Immutable key → action tables for every context."""

    kind: Mapping[KeyEvent, ResourceKind]
    command: Mapping[KeyEvent, ResourceCommand]
    list_navigation: Mapping[KeyEvent, ListAction]
    global_overrides: Mapping[KeyEvent, GlobalAction]

    def _table(self, context: Context) -> Mapping[KeyEvent, Action]:
        if context is Context.KIND:
            return self.kind
        if context is Context.COMMAND:
            return self.command
        if context is Context.LIST:
            return self.list_navigation
        return self.global_overrides

    def resolve_global(self, key: KeyEvent) -> Resolution | _Unbound:
        """Look ``key`` up in the global override table only."""
        action = self.global_overrides.get(key)
        if action is None:
            return UNBOUND
        return Resolution(Context.GLOBAL, action)

    def resolve(self, context: Context, key: KeyEvent) -> Resolution | _Unbound:
        """Resolve ``key`` in ``context``, giving global overrides precedence."""
        resolved = self.resolve_global(key)
        if resolved:
            return resolved
        action = self._table(context).get(key)
        if action is None:
            return UNBOUND
        return Resolution(context, action)


def default_keybindings() -> KeyBindings:
    """Build the stock bindings once at startup."""
    return KeyBindings(
        kind=_freeze(
            [
                (KeyEvent.char("i"), ResourceKind.IMAGE),
                (KeyEvent.char("c"), ResourceKind.CONTAINER),
                (KeyEvent.char("v"), ResourceKind.VOLUME),
            ]
        ),
        command=_freeze(
            [
                (KeyEvent.char("l"), ResourceCommand.LIST),
                (KeyEvent.char("r"), ResourceCommand.REMOVE),
                (KeyEvent.char("s"), ResourceCommand.STOP),
                (KeyEvent.char("t"), ResourceCommand.TAG),
            ]
        ),
        list_navigation=_freeze(
            [
                (KeyEvent(keys.UP), ListAction.UP),
                (KeyEvent.char("j"), ListAction.UP),
                (KeyEvent(keys.DOWN), ListAction.DOWN),
                (KeyEvent.char("k"), ListAction.DOWN),
                (KeyEvent.char(" "), ListAction.TOGGLE),
                (KeyEvent(keys.ENTER), ListAction.CONFIRM),
                (KeyEvent.ctrl("c"), ListAction.CANCEL),
            ]
        ),
        global_overrides=_freeze(
            [
                (KeyEvent.ctrl("c"), GlobalAction.CANCEL),
                (KeyEvent(keys.ESC), GlobalAction.CANCEL),
                (KeyEvent.ctrl("q"), GlobalAction.QUIT),
                (KeyEvent.ctrl("h"), GlobalAction.HELP),
                (KeyEvent.ctrl("l"), GlobalAction.CLEAN),
            ]
        ),
    )
