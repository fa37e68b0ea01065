"""RemoveLayerCommand — removes a layer from a page (undoable)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagecomposer.commands.layer_command import LayerCommand

if TYPE_CHECKING:
    from pagecomposer.core.project import Project
    from pagecomposer.layers.layer_types import Layer


class RemoveLayerCommand(LayerCommand):
    """Remove a layer, remembering the instance and its index for undo."""

    def __init__(self, project: Project, page_id: str, layer_id: str) -> None:
        super().__init__(project, page_id, layer_id)
        self._removed: Layer | None = None
        self._removed_index = -1

    def execute(self) -> None:
        page = self._page()
        if page is None:
            return
        idx = page.index_of(self._layer_id)
        if idx < 0:
            return
        self._removed_index = idx
        self._removed = page.remove_layer(self._layer_id)

    def undo(self) -> None:
        page = self._page()
        if page is None or self._removed is None:
            return
        if page.layer_by_id(self._removed.id) is not None:
            return
        page.insert_layer(self._removed, min(self._removed_index, page.count))

    @property
    def description(self) -> str:
        if self._removed is not None:
            return f"Remove {self._removed.type_name}"
        return "Remove layer"
