"""Undo/redo command infrastructure."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from PyQt6.QtCore import QObject, pyqtSignal

from pagecomposer.config.constants import UNDO_LIMIT

log = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Abstract base for all undoable commands.

    ``execute`` and ``undo`` must never raise.  A command whose target has
    disappeared does nothing.
    """

    @abstractmethod
    def execute(self) -> None:
        """Apply (or re-apply) the command."""

    @abstractmethod
    def undo(self) -> None:
        """Reverse the command."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description for the undo/redo menu."""


class HistoryManager(QObject):
    """Bounded undo stack plus an unbounded redo stack.

    Only :meth:`execute` clears the redo stack; :meth:`redo` re-applies
    commands directly so it does not discard the branch it is draining.
    When the undo stack exceeds *limit* the oldest command is dropped and
    can no longer be undone.

    Signals
    -------
    can_undo_changed(bool)
    can_redo_changed(bool)
    stack_changed()
        Emitted after any execute/undo/redo/clear operation.
    """

    can_undo_changed = pyqtSignal(bool)
    can_redo_changed = pyqtSignal(bool)
    stack_changed = pyqtSignal()

    def __init__(self, parent: QObject | None = None, limit: int = UNDO_LIMIT) -> None:
        super().__init__(parent)
        self._undo_stack: list[BaseCommand] = []
        self._redo_stack: list[BaseCommand] = []
        self._limit = max(1, limit)

    # --- public API ---

    def execute(self, command: BaseCommand) -> None:
        """Run *command* and record it, invalidating the redo branch."""
        command.execute()
        self._undo_stack.append(command)
        if len(self._undo_stack) > self._limit:
            excess = len(self._undo_stack) - self._limit
            del self._undo_stack[:excess]
            log.debug("History limit %d reached, dropped %d command(s)", self._limit, excess)
        self._redo_stack.clear()
        self._emit_signals()

    def undo(self) -> None:
        """Undo the most recent command, if any."""
        if not self._undo_stack:
            return
        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)
        self._emit_signals()

    def redo(self) -> None:
        """Re-apply the most recently undone command, if any."""
        if not self._redo_stack:
            return
        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)
        self._emit_signals()

    def clear(self) -> None:
        """Forget all history (project load/reset)."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._emit_signals()

    # --- queries ---

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_text(self) -> str:
        if self._undo_stack:
            return self._undo_stack[-1].description
        return ""

    @property
    def redo_text(self) -> str:
        if self._redo_stack:
            return self._redo_stack[-1].description
        return ""

    @property
    def count(self) -> int:
        """Number of commands that can currently be undone."""
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    @property
    def limit(self) -> int:
        return self._limit

    # --- internal ---

    def _emit_signals(self) -> None:
        self.can_undo_changed.emit(self.can_undo)
        self.can_redo_changed.emit(self.can_redo)
        self.stack_changed.emit()
