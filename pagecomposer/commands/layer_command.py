"""LayerCommand — shared lookup of a command's target page and layer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pagecomposer.core.command_stack import BaseCommand

if TYPE_CHECKING:
    from pagecomposer.core.page import Page
    from pagecomposer.core.project import Project
    from pagecomposer.layers.layer_types import Layer

log = logging.getLogger(__name__)


class LayerCommand(BaseCommand):
    """Base for commands addressing one layer on one page by id.

    Targets are resolved on every execute/undo so that stale references
    (deleted page or layer) turn into silent no-ops.
    """

    def __init__(self, project: Project, page_id: str, layer_id: str) -> None:
        self._project = project
        self._page_id = page_id
        self._layer_id = layer_id

    @property
    def layer_id(self) -> str:
        return self._layer_id

    @property
    def page_id(self) -> str:
        return self._page_id

    def _page(self) -> Page | None:
        page = self._project.page_by_id(self._page_id)
        if page is None:
            log.debug("%s: page %s no longer exists", type(self).__name__, self._page_id)
        return page

    def _layer(self) -> Layer | None:
        page = self._page()
        if page is None:
            return None
        layer = page.layer_by_id(self._layer_id)
        if layer is None:
            log.debug("%s: layer %s no longer exists", type(self).__name__, self._layer_id)
        return layer
