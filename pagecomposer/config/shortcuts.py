"""Keyboard shortcut definitions.

Each entry maps a logical action name to one or more key sequence
strings compatible with ``QKeySequence``.
"""

from PyQt6.QtGui import QKeySequence

SHORTCUTS: dict[str, tuple[str, ...]] = {
    # Edit
    "edit.undo": ("Ctrl+Z",),
    "edit.redo": ("Ctrl+Y", "Ctrl+Shift+Z"),
    "edit.delete": ("Delete", "Backspace"),
    "edit.cancel": ("Escape",),
    # Text
    "text.new": ("T",),
    "text.bold": ("Ctrl+B",),
    "text.italic": ("Ctrl+I",),
    # Arrange
    "arrange.bring_forward": ("Ctrl+Up",),
    "arrange.send_backward": ("Ctrl+Down",),
}


def matches(sequence: QKeySequence, action: str) -> bool:
    """Return True if *sequence* is bound to *action*."""
    return any(sequence == QKeySequence(s) for s in SHORTCUTS.get(action, ()))
