"""AddLayerCommand — adds a layer to a page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagecomposer.commands.layer_command import LayerCommand

if TYPE_CHECKING:
    from pagecomposer.core.project import Project
    from pagecomposer.layers.layer_types import Layer


class AddLayerCommand(LayerCommand):
    """Add *layer* to the page; adding an id that is already present is a no-op."""

    def __init__(self, project: Project, page_id: str, layer: Layer) -> None:
        super().__init__(project, page_id, layer.id)
        self._layer_obj = layer

    def execute(self) -> None:
        page = self._page()
        if page is None:
            return
        if page.layer_by_id(self._layer_obj.id) is None:
            page.add_layer(self._layer_obj)

    def undo(self) -> None:
        page = self._page()
        if page is None:
            return
        page.remove_layer(self._layer_obj.id)

    @property
    def description(self) -> str:
        return f"Add {self._layer_obj.type_name}"
