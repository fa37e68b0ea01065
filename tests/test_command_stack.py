"""Tests for HistoryManager and BaseCommand."""

from pytestqt.qtbot import QtBot

from pagecomposer.commands.macro_command import MacroCommand
from pagecomposer.core.command_stack import BaseCommand, HistoryManager


class IncrementCommand(BaseCommand):
    """Test command that increments/decrements a counter."""

    def __init__(self, counter: list[int], amount: int = 1) -> None:
        self._counter = counter
        self._amount = amount

    def execute(self) -> None:
        self._counter[0] += self._amount

    def undo(self) -> None:
        self._counter[0] -= self._amount

    @property
    def description(self) -> str:
        return f"Increment by {self._amount}"


def test_execute_runs_command() -> None:
    counter = [0]
    history = HistoryManager()
    history.execute(IncrementCommand(counter))
    assert counter[0] == 1
    assert history.can_undo
    assert not history.can_redo


def test_undo_reverses_command() -> None:
    counter = [0]
    history = HistoryManager()
    history.execute(IncrementCommand(counter))
    history.undo()
    assert counter[0] == 0
    assert history.can_redo


def test_redo_reapplies_command() -> None:
    counter = [0]
    history = HistoryManager()
    history.execute(IncrementCommand(counter))
    history.undo()
    history.redo()
    assert counter[0] == 1


def test_undo_redo_on_empty_history_are_noops() -> None:
    history = HistoryManager()
    history.undo()
    history.redo()
    assert history.count == 0
    assert history.redo_count == 0


def test_multiple_redo_restores_pre_undo_state() -> None:
    counter = [0]
    history = HistoryManager()
    for amount in (1, 10, 100):
        history.execute(IncrementCommand(counter, amount))
    for _ in range(3):
        history.undo()
    assert counter[0] == 0
    for _ in range(3):
        history.redo()
    assert counter[0] == 111


def test_redo_does_not_clear_remaining_redo_entries() -> None:
    counter = [0]
    history = HistoryManager()
    history.execute(IncrementCommand(counter, 1))
    history.execute(IncrementCommand(counter, 2))
    history.undo()
    history.undo()
    history.redo()
    assert history.redo_count == 1
    assert counter[0] == 1


def test_new_command_invalidates_redo() -> None:
    counter = [0]
    history = HistoryManager()
    history.execute(IncrementCommand(counter, 1))
    history.execute(IncrementCommand(counter, 10))
    history.undo()
    history.undo()
    history.redo()
    history.execute(IncrementCommand(counter, 100))
    assert not history.can_redo
    history.redo()
    assert counter[0] == 101


def test_limit_evicts_oldest() -> None:
    counter = [0]
    history = HistoryManager(limit=3)
    for _ in range(4):
        history.execute(IncrementCommand(counter))
    assert history.count == 3
    for _ in range(5):
        history.undo()
    # The first increment fell off the bottom and cannot be undone.
    assert counter[0] == 1


def test_clear_empties_both_stacks() -> None:
    counter = [0]
    history = HistoryManager()
    history.execute(IncrementCommand(counter))
    history.execute(IncrementCommand(counter))
    history.undo()
    history.clear()
    assert not history.can_undo
    assert not history.can_redo


def test_undo_and_redo_text() -> None:
    counter = [0]
    history = HistoryManager()
    assert history.undo_text == ""
    history.execute(IncrementCommand(counter, 5))
    assert history.undo_text == "Increment by 5"
    history.undo()
    assert history.redo_text == "Increment by 5"


def test_signals_emitted_on_execute(qtbot: QtBot) -> None:
    history = HistoryManager()
    with qtbot.waitSignal(history.can_undo_changed) as blocker:
        history.execute(IncrementCommand([0]))
    assert blocker.args == [True]


def test_stack_changed_emitted_on_undo(qtbot: QtBot) -> None:
    history = HistoryManager()
    history.execute(IncrementCommand([0]))
    with qtbot.waitSignal(history.stack_changed):
        history.undo()


def test_macro_command_undoes_in_reverse() -> None:
    log: list[str] = []

    class Record(BaseCommand):
        def __init__(self, name: str) -> None:
            self._name = name

        def execute(self) -> None:
            log.append(f"do {self._name}")

        def undo(self) -> None:
            log.append(f"undo {self._name}")

        @property
        def description(self) -> str:
            return self._name

    history = HistoryManager()
    history.execute(MacroCommand([Record("a"), Record("b")], "Both"))
    history.undo()
    assert log == ["do a", "do b", "undo b", "undo a"]
    assert history.redo_text == "Both"
