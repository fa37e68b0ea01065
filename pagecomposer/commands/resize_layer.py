"""ResizeLayerCommand — undoable position and size change of an image layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QRectF

from pagecomposer.commands.layer_command import LayerCommand
from pagecomposer.layers.image_layer import ImageLayer

if TYPE_CHECKING:
    from pagecomposer.core.project import Project


class ResizeLayerCommand(LayerCommand):
    """Set position and size together; a resize can shift the origin.

    Only image layers carry a size.  Other targets are left untouched.
    """

    def __init__(
        self,
        project: Project,
        page_id: str,
        layer_id: str,
        old_rect: QRectF,
        new_rect: QRectF,
    ) -> None:
        super().__init__(project, page_id, layer_id)
        self._old_rect = QRectF(old_rect)
        self._new_rect = QRectF(new_rect)

    def execute(self) -> None:
        self._apply(self._new_rect)

    def undo(self) -> None:
        self._apply(self._old_rect)

    def _apply(self, rect: QRectF) -> None:
        match self._layer():
            case ImageLayer() as layer:
                layer.x = rect.x()
                layer.y = rect.y()
                layer.width = rect.width()
                layer.height = rect.height()
            case _:
                return

    @property
    def description(self) -> str:
        return "Resize layer"
