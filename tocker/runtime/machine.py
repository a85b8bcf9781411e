"""Interaction state machine.

Turns key events into a validated ``Prompt``, runs it, and loads the output
as the next row list. One call to ``run_cycle`` walks::

    AWAITING_KIND -> AWAITING_COMMAND -> [AWAITING_TARGET] -> execute -> AWAITING_KIND

Recoverable errors never escape a cycle. ``QuitRequested`` is the only
exception meant to leave it.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from ..commands import AuthorizationTable, Prompt, ResourceCommand, ResourceKind, TargetType
from ..errors import (
    InvalidEventSource,
    NotAuthorized,
    QuitRequested,
    SubprocessFailure,
    UnboundKey,
    UserCancelled,
)
from ..executor import CommandRunner
from ..extract import extract_target
from ..input import keys
from ..input.key_registry import Context, GlobalAction, KeyBindings, ListAction, Resolution
from ..input.keys import KeyEvent
from ..render.help import HELP_TEXT, INITIAL_HINT, TARGET_HINT, running_hint, text_input_hint
from ..state import Moment, SessionState

ERASE_KEYS = (KeyEvent(keys.BACKSPACE), KeyEvent.ctrl("h"))


def _noop() -> None:
    return None


class InteractionMachine:
    """Drive one session's key-to-command cycles.

    ``next_key`` blocks for the next key event and may raise
    ``InvalidEventSource`` or ``QuitRequested``. ``redraw`` repaints the view
    from ``state``; it is called whenever the state changes before a block.
    """

    def __init__(
        self,
        bindings: KeyBindings,
        table: AuthorizationTable,
        runner: CommandRunner,
        next_key: Callable[[], KeyEvent],
        state: SessionState | None = None,
        redraw: Callable[[], None] = _noop,
    ) -> None:
        self.bindings = bindings
        self.table = table
        self.runner = runner
        self.next_key = next_key
        self.state = state if state is not None else SessionState()
        self.redraw = redraw

    def _refresh(self) -> None:
        self.redraw()

    def reset(self) -> None:
        """Return to AWAITING_KIND, dropping partial input and toggles."""
        state = self.state
        state.moment = Moment.AWAITING_KIND
        state.kind = None
        state.command = None
        state.text_input = ""
        state.hint = INITIAL_HINT
        state.rows.clear_toggles()
        state.rows.reset_cursor()
        self._refresh()

    def run_cycle(self) -> None:
        """Run one kind/command/target/execute cycle; raises only ``QuitRequested``."""
        try:
            prompt = self.resolve_prompt()
            self.execute(prompt)
        except UserCancelled:
            logger.debug("Cycle cancelled by user")
        except NotAuthorized as exc:
            logger.info("Rejected pair: {}", exc)
            self.state.rows.append_status(str(exc))
        except SubprocessFailure as exc:
            logger.warning("Command failed: {}", exc)
            self.state.rows.append_status(str(exc))
        self.reset()

    def run(self) -> None:
        """Loop over cycles until the user quits."""
        while True:
            self.run_cycle()

    def resolve_prompt(self) -> Prompt:
        kind = self._await_kind()
        command = self._await_command(kind)
        target_type = self.table.authorize(kind, command)
        target = self._await_target(command, target_type)
        return Prompt(kind, command, target)

    def execute(self, prompt: Prompt) -> None:
        self.state.hint = running_hint(self.runner.describe(prompt))
        self._refresh()
        lines = self.runner.run(prompt)
        self.state.rows.replace(lines)

    # -- key resolution ---------------------------------------------------

    def _read_key(self) -> KeyEvent:
        """Block for a key, reporting non-key input as a status row."""
        while True:
            try:
                return self.next_key()
            except InvalidEventSource as exc:
                self.state.rows.append_status(str(exc))
                self._refresh()

    def _apply_global(self, action: GlobalAction) -> None:
        if action is GlobalAction.CANCEL:
            raise UserCancelled()
        if action is GlobalAction.QUIT:
            raise QuitRequested()
        if action is GlobalAction.HELP:
            if self.state.moment is Moment.AWAITING_KIND:
                self.state.hint = HELP_TEXT
        elif action is GlobalAction.CLEAN:
            self.state.rows.clear()
        self._refresh()

    def _report_unbound(self, key: KeyEvent) -> None:
        self.state.rows.append_status(str(UnboundKey(key.label())))
        self._refresh()

    def _await_resolution(self, context: Context) -> Resolution:
        """Read keys until one binds in ``context``; globals are applied in place."""
        while True:
            key = self._read_key()
            resolved = self.bindings.resolve(context, key)
            if not resolved:
                self._report_unbound(key)
                continue
            if resolved.is_global:
                self._apply_global(resolved.action)
                continue
            return resolved

    # -- steps --------------------------------------------------------------

    def _await_kind(self) -> ResourceKind:
        self.state.moment = Moment.AWAITING_KIND
        kind = self._await_resolution(Context.KIND).action
        self.state.kind = kind
        self.state.hint = self.table.legend(kind)
        self.state.moment = Moment.AWAITING_COMMAND
        self._refresh()
        return kind

    def _await_command(self, kind: ResourceKind) -> ResourceCommand:
        command = self._await_resolution(Context.COMMAND).action
        self.state.command = command
        logger.debug("Resolved {} {}", kind.token, command.token)
        return command

    def _await_target(self, command: ResourceCommand, target_type: TargetType) -> str:
        if target_type is TargetType.NONE:
            return ""
        self.state.moment = Moment.AWAITING_TARGET
        if target_type is TargetType.SELECT_FROM_LIST:
            return self._select_from_list()
        return self._read_text(command)

    def _select_from_list(self) -> str:
        rows = self.state.rows
        while True:
            self.state.hint = TARGET_HINT
            self._refresh()
            action = self._await_resolution(Context.LIST).action
            if action is ListAction.UP:
                rows.move_up()
            elif action is ListAction.DOWN:
                rows.move_down()
            elif action is ListAction.TOGGLE:
                rows.toggle()
            elif action is ListAction.CANCEL:
                raise UserCancelled()
            elif action is ListAction.CONFIRM:
                return extract_target(rows.rows)

    def _read_text(self, command: ResourceCommand) -> str:
        state = self.state
        while True:
            state.hint = text_input_hint(command.token, state.text_input)
            self._refresh()
            key = self._read_key()
            # Some terminals send Backspace as 0x08, which decodes to Ctrl+h.
            if key in ERASE_KEYS:
                state.text_input = state.text_input[:-1]
                continue
            resolved = self.bindings.resolve_global(key)
            if resolved:
                self._apply_global(resolved.action)
            elif key == KeyEvent(keys.ENTER):
                return state.text_input.strip()
            elif key.is_printable():
                state.text_input += key.code
            else:
                self._report_unbound(key)
