"""EditTextCommand — replace the content of a text layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagecomposer.commands.layer_command import LayerCommand
from pagecomposer.layers.text_layer import TextLayer

if TYPE_CHECKING:
    from pagecomposer.core.project import Project


class EditTextCommand(LayerCommand):
    """Set/restore ``text``.  Callers only build one when the text changed."""

    def __init__(
        self,
        project: Project,
        page_id: str,
        layer_id: str,
        old_text: str,
        new_text: str,
    ) -> None:
        super().__init__(project, page_id, layer_id)
        self._old_text = old_text
        self._new_text = new_text

    def execute(self) -> None:
        self._apply(self._new_text)

    def undo(self) -> None:
        self._apply(self._old_text)

    def _apply(self, text: str) -> None:
        match self._layer():
            case TextLayer() as layer:
                layer.text = text
            case _:
                return

    @property
    def description(self) -> str:
        return "Edit text"
