"""Scenario tests for the interaction state machine.

Keys are scripted; the runner is a fake that records prompts. When the
script runs out the key source raises ``QuitRequested`` like end of input.
"""

from __future__ import annotations

import unittest
from collections.abc import Iterable

from tocker.commands import Prompt, ResourceCommand, ResourceKind, default_authorization_table
from tocker.errors import InvalidEventSource, QuitRequested, SubprocessFailure
from tocker.input import keys
from tocker.input.key_registry import default_keybindings
from tocker.input.keys import KeyEvent
from tocker.render.help import HELP_TEXT, INITIAL_HINT, TARGET_HINT
from tocker.runtime.machine import InteractionMachine
from tocker.selection import RowList
from tocker.state import Moment, SessionState

IMAGE_LISTING = [
    "REPOSITORY  TAG  IMAGE ID  SIZE",
    "myimg latest abc123 10MB",
    "other v1 def456 20MB",
]

ENTER = KeyEvent(keys.ENTER)
ESC = KeyEvent(keys.ESC)
SPACE = KeyEvent.char(" ")


class FakeRunner:
    def __init__(self, output: list[str] | None = None, error: Exception | None = None) -> None:
        self.output = output if output is not None else []
        self.error = error
        self.prompts: list[Prompt] = []

    def describe(self, prompt: Prompt) -> str:
        return " ".join(["docker", *prompt.arguments()])

    def run(self, prompt: Prompt) -> list[str]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return list(self.output)


class ScriptedKeys:
    """Key source fed from a list; exceptions in the list are raised."""

    def __init__(self, events: Iterable[object]) -> None:
        self._events = list(events)

    def __call__(self) -> KeyEvent:
        if not self._events:
            raise QuitRequested("script exhausted")
        event = self._events.pop(0)
        if isinstance(event, Exception):
            raise event
        return event


def _chars(text: str) -> list[KeyEvent]:
    return [KeyEvent.char(ch) for ch in text]


class MachineHarness(unittest.TestCase):
    def make_machine(
        self,
        events: Iterable[object],
        rows: list[str] | None = None,
        runner: FakeRunner | None = None,
    ) -> InteractionMachine:
        self.runner = runner if runner is not None else FakeRunner()
        self.keys = ScriptedKeys(events)
        self.redraws = 0
        state = SessionState(rows=RowList.from_lines(rows or []))

        def redraw() -> None:
            self.redraws += 1

        return InteractionMachine(
            bindings=default_keybindings(),
            table=default_authorization_table(),
            runner=self.runner,
            next_key=self.keys,
            state=state,
            redraw=redraw,
        )

    def run_until_quit(self, machine: InteractionMachine) -> None:
        with self.assertRaises(QuitRequested):
            machine.run()


class CycleScenarioTests(MachineHarness):
    def test_container_list_executes_without_list_selection(self) -> None:
        runner = FakeRunner(output=["CONTAINER ID   IMAGE", "aaa111   nginx"])
        machine = self.make_machine(_chars("cl"), runner=runner)

        machine.run_cycle()

        self.assertEqual(runner.prompts, [Prompt(ResourceKind.CONTAINER, ResourceCommand.LIST, "")])
        self.assertEqual([row.text for row in machine.state.rows], ["CONTAINER ID   IMAGE", "aaa111   nginx"])
        self.assertIs(machine.state.moment, Moment.AWAITING_KIND)
        self.assertEqual(machine.state.hint, INITIAL_HINT)

    def test_image_remove_confirm_with_nothing_toggled_runs_with_empty_target(self) -> None:
        machine = self.make_machine([*_chars("ir"), ENTER], rows=IMAGE_LISTING)

        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [Prompt(ResourceKind.IMAGE, ResourceCommand.REMOVE, "")])

    def test_image_remove_with_selected_rows_passes_their_ids(self) -> None:
        events = [*_chars("ir"), KeyEvent.char("j"), SPACE, KeyEvent.char("j"), SPACE, ENTER]
        machine = self.make_machine(events, rows=IMAGE_LISTING, runner=FakeRunner(output=["Deleted: abc123"]))

        machine.run_cycle()

        self.assertEqual(self.runner.prompts[0].target, "abc123 def456")
        self.assertEqual([row.text for row in machine.state.rows], ["Deleted: abc123"])

    def test_list_selection_hint_is_shown_while_selecting(self) -> None:
        seen_hints: list[str] = []
        machine = self.make_machine([*_chars("ir"), ENTER], rows=IMAGE_LISTING)
        original = machine.next_key

        def spying_next_key() -> KeyEvent:
            seen_hints.append(machine.state.hint)
            return original()

        machine.next_key = spying_next_key
        machine.run_cycle()

        self.assertEqual(seen_hints[-1], TARGET_HINT)
        self.assertEqual(seen_hints[1], default_authorization_table().legend(ResourceKind.IMAGE))

    def test_tag_reads_free_text_target(self) -> None:
        events = [*_chars("it"), *_chars("app:latest app:vX"), KeyEvent(keys.BACKSPACE), KeyEvent.char("2"), ENTER]
        machine = self.make_machine(events)

        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [Prompt(ResourceKind.IMAGE, ResourceCommand.TAG, "app:latest app:v2")])
        self.assertEqual(machine.state.text_input, "")

    def test_ctrl_h_erases_in_free_text_like_backspace(self) -> None:
        events = [*_chars("it"), *_chars("app:v1"), KeyEvent.ctrl("h"), KeyEvent.char("2"), ENTER]
        machine = self.make_machine(events)

        machine.run_cycle()

        self.assertEqual(self.runner.prompts[0].target, "app:v2")

    def test_unauthorized_pair_never_builds_a_prompt(self) -> None:
        machine = self.make_machine(_chars("ct"), rows=["HEADER"])

        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [])
        self.assertIn("not available for container", machine.state.rows[-1].text)
        self.assertIs(machine.state.moment, Moment.AWAITING_KIND)

    def test_every_unauthorized_pair_is_rejected(self) -> None:
        table = default_authorization_table()
        kind_keys = {ResourceKind.IMAGE: "i", ResourceKind.CONTAINER: "c", ResourceKind.VOLUME: "v"}
        command_keys = {
            ResourceCommand.LIST: "l",
            ResourceCommand.REMOVE: "r",
            ResourceCommand.TAG: "t",
            ResourceCommand.STOP: "s",
        }
        for kind, kind_key in kind_keys.items():
            for command, command_key in command_keys.items():
                if table.is_allowed(kind, command):
                    continue
                with self.subTest(kind=kind, command=command):
                    machine = self.make_machine(_chars(kind_key + command_key))
                    machine.run_cycle()
                    self.assertEqual(self.runner.prompts, [])

    def test_subprocess_failure_appends_status_row_and_keeps_rows(self) -> None:
        runner = FakeRunner(error=SubprocessFailure("'docker image rm abc123' failed: conflict"))
        events = [*_chars("ir"), KeyEvent.char("j"), SPACE, ENTER]
        machine = self.make_machine(events, rows=IMAGE_LISTING, runner=runner)

        machine.run_cycle()

        texts = [row.text for row in machine.state.rows]
        self.assertEqual(texts[:3], IMAGE_LISTING)
        self.assertIn("failed: conflict", texts[-1])
        self.assertEqual(machine.state.rows.toggled_rows(), [])
        self.assertEqual(machine.state.rows.cursor, 0)


class GlobalOverrideTests(MachineHarness):
    def test_cancel_during_command_step_resets_to_kind(self) -> None:
        machine = self.make_machine([KeyEvent.char("i"), ESC], rows=IMAGE_LISTING)
        machine.state.rows.cursor = 2

        machine.run_cycle()

        self.assertIs(machine.state.moment, Moment.AWAITING_KIND)
        self.assertIsNone(machine.state.kind)
        self.assertEqual(machine.state.rows.cursor, 0)
        self.assertEqual(self.runner.prompts, [])
        self.assertEqual(len(machine.state.rows), len(IMAGE_LISTING))

    def test_cancel_discards_previously_resolved_kind(self) -> None:
        events = [KeyEvent.char("i"), KeyEvent.ctrl("c"), *_chars("cl")]
        machine = self.make_machine(events)

        machine.run_cycle()
        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [Prompt(ResourceKind.CONTAINER, ResourceCommand.LIST, "")])

    def test_cancel_in_list_selection_clears_toggles_without_running(self) -> None:
        events = [*_chars("ir"), KeyEvent.char("j"), SPACE, KeyEvent.ctrl("c")]
        machine = self.make_machine(events, rows=IMAGE_LISTING)

        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [])
        self.assertEqual(machine.state.rows.toggled_rows(), [])
        self.assertEqual(machine.state.rows.cursor, 0)

    def test_cancel_during_free_text_discards_buffer(self) -> None:
        machine = self.make_machine([*_chars("itabc"), ESC])

        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [])
        self.assertEqual(machine.state.text_input, "")

    def test_quit_propagates_from_any_step(self) -> None:
        for script in ([KeyEvent.ctrl("q")], [KeyEvent.char("c"), KeyEvent.ctrl("q")], [*_chars("ir"), KeyEvent.ctrl("q")]):
            with self.subTest(script=script):
                machine = self.make_machine(script, rows=IMAGE_LISTING)
                with self.assertRaises(QuitRequested):
                    machine.run_cycle()
                self.assertEqual(self.runner.prompts, [])

    def test_help_swaps_hint_only_while_awaiting_kind(self) -> None:
        machine = self.make_machine([KeyEvent.ctrl("h")])
        self.run_until_quit(machine)
        self.assertEqual(machine.state.hint, HELP_TEXT)
        self.assertIs(machine.state.moment, Moment.AWAITING_KIND)

        machine = self.make_machine([KeyEvent.char("i"), KeyEvent.ctrl("h")])
        self.run_until_quit(machine)
        self.assertEqual(machine.state.hint, default_authorization_table().legend(ResourceKind.IMAGE))
        self.assertIs(machine.state.moment, Moment.AWAITING_COMMAND)

    def test_clean_empties_rows_without_changing_moment(self) -> None:
        machine = self.make_machine([KeyEvent.char("v"), KeyEvent.ctrl("l")], rows=IMAGE_LISTING)
        self.run_until_quit(machine)
        self.assertEqual(len(machine.state.rows), 0)
        self.assertIs(machine.state.moment, Moment.AWAITING_COMMAND)
        self.assertIs(machine.state.kind, ResourceKind.VOLUME)


class UnboundKeyTests(MachineHarness):
    def test_unbound_key_reports_and_retries_same_step(self) -> None:
        machine = self.make_machine([KeyEvent.char("i"), KeyEvent.char("z"), KeyEvent.char("l")])

        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [Prompt(ResourceKind.IMAGE, ResourceCommand.LIST, "")])

    def test_unbound_key_leaves_moment_unchanged(self) -> None:
        machine = self.make_machine([KeyEvent.char("i"), KeyEvent.char("z")], rows=["HEADER"])

        self.run_until_quit(machine)

        self.assertIs(machine.state.moment, Moment.AWAITING_COMMAND)
        self.assertEqual(machine.state.rows[-1].text, "Invalid key z: press only the available keys")

    def test_invalid_event_source_is_reported_and_retried(self) -> None:
        machine = self.make_machine([InvalidEventSource("Press a valid key"), KeyEvent.char("v")])

        self.run_until_quit(machine)

        self.assertEqual(machine.state.rows[0].text, "Press a valid key")
        self.assertIs(machine.state.moment, Moment.AWAITING_COMMAND)
        self.assertIs(machine.state.kind, ResourceKind.VOLUME)

    def test_control_key_in_free_text_is_unbound(self) -> None:
        machine = self.make_machine([*_chars("it"), KeyEvent.ctrl("x"), *_chars("a b")])

        self.run_until_quit(machine)

        self.assertIn("Ctrl+x", machine.state.rows[0].text)
        self.assertEqual(machine.state.text_input, "a b")
        self.assertIs(machine.state.moment, Moment.AWAITING_TARGET)

    def test_unbound_key_report_is_never_selected_as_a_target(self) -> None:
        events = [*_chars("ir"), KeyEvent.char("x"), KeyEvent.char("k"), SPACE, ENTER]
        machine = self.make_machine(events, rows=IMAGE_LISTING[:2])

        machine.run_cycle()

        self.assertEqual(self.runner.prompts, [Prompt(ResourceKind.IMAGE, ResourceCommand.REMOVE, "abc123")])


class RunLoopTests(MachineHarness):
    def test_run_loops_cycles_until_quit_and_redraws(self) -> None:
        runner = FakeRunner(output=["VOLUME NAME"])
        machine = self.make_machine([*_chars("vl"), *_chars("cl")], runner=runner)

        self.run_until_quit(machine)

        self.assertEqual(
            [prompt.kind for prompt in runner.prompts],
            [ResourceKind.VOLUME, ResourceKind.CONTAINER],
        )
        self.assertGreater(self.redraws, 0)


if __name__ == "__main__":
    unittest.main()
