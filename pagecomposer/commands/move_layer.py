"""MoveLayerCommand — undoable repositioning of one layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QPointF

from pagecomposer.commands.layer_command import LayerCommand

if TYPE_CHECKING:
    from pagecomposer.core.project import Project


class MoveLayerCommand(LayerCommand):
    """Set a layer's ``x``/``y``; nothing else is touched."""

    def __init__(
        self,
        project: Project,
        page_id: str,
        layer_id: str,
        old_pos: QPointF,
        new_pos: QPointF,
    ) -> None:
        super().__init__(project, page_id, layer_id)
        self._old_pos = QPointF(old_pos)
        self._new_pos = QPointF(new_pos)

    def execute(self) -> None:
        self._apply(self._new_pos)

    def undo(self) -> None:
        self._apply(self._old_pos)

    def _apply(self, pos: QPointF) -> None:
        layer = self._layer()
        if layer is None:
            return
        layer.x = pos.x()
        layer.y = pos.y()

    @property
    def description(self) -> str:
        return "Move layer"
