"""Arrange commands — z-order changes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagecomposer.commands.layer_command import LayerCommand

if TYPE_CHECKING:
    from pagecomposer.core.project import Project


class ZIndexCommand(LayerCommand):
    """Change a layer's ``z_index`` and re-sort the page.

    Parameters
    ----------
    project : Project
    page_id, layer_id : str
    old_z, new_z : int
    """

    def __init__(
        self, project: Project, page_id: str, layer_id: str, old_z: int, new_z: int
    ) -> None:
        super().__init__(project, page_id, layer_id)
        self._old_z = old_z
        self._new_z = new_z

    def execute(self) -> None:
        self._apply(self._new_z)

    def undo(self) -> None:
        self._apply(self._old_z)

    def _apply(self, z_index: int) -> None:
        page = self._page()
        if page is None:
            return
        layer = self._layer()
        if layer is None:
            return
        layer.z_index = z_index
        page.sort_by_z()

    @property
    def description(self) -> str:
        if self._new_z > self._old_z:
            return "Bring Forward"
        return "Send Backward"
