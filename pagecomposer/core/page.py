"""Page — a fixed-size canvas holding a z-ordered list of layers."""

from __future__ import annotations

import uuid

from PyQt6.QtGui import QPainter

from pagecomposer.config.constants import (
    BACKGROUND_Z_INDEX,
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
)
from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.layer_types import Layer


class Page:
    """Owns its layers and keeps them sorted ascending by ``z_index``.

    Sorting is stable, so layers sharing a z-index keep insertion order.
    """

    def __init__(
        self,
        w: float = DEFAULT_PAGE_WIDTH,
        h: float = DEFAULT_PAGE_HEIGHT,
        page_id: str | None = None,
    ) -> None:
        self.id: str = page_id or f"page_{uuid.uuid4().hex}"
        self.w = w
        self.h = h
        self._layers: list[Layer] = []
        self._background_layer: ImageLayer | None = None

    # --- queries ---

    @property
    def layers(self) -> list[Layer]:
        """Return the layer list (bottom-to-top)."""
        return list(self._layers)

    @property
    def count(self) -> int:
        return len(self._layers)

    @property
    def background_layer(self) -> ImageLayer | None:
        return self._background_layer

    def layer_by_id(self, layer_id: str) -> Layer | None:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    def index_of(self, layer_id: str) -> int:
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return i
        return -1

    def max_z(self) -> int:
        return max((layer.z_index for layer in self._layers), default=0)

    def min_z(self) -> int:
        return min((layer.z_index for layer in self._layers), default=0)

    # --- mutations ---

    def add_layer(self, layer: Layer) -> None:
        """Append *layer* and restore z order."""
        self.insert_layer(layer, len(self._layers))

    def insert_layer(self, layer: Layer, index: int) -> None:
        """Insert *layer* at *index* (clamped) and restore z order."""
        index = max(0, min(index, len(self._layers)))
        self._layers.insert(index, layer)
        if isinstance(layer, ImageLayer) and layer.is_background:
            self._background_layer = layer
        self.sort_by_z()

    def remove_layer(self, layer_id: str) -> Layer | None:
        """Remove a layer by id. Returns the removed layer, or None."""
        idx = self.index_of(layer_id)
        if idx < 0:
            return None
        layer = self._layers.pop(idx)
        if self._background_layer is not None and self._background_layer.id == layer_id:
            self._background_layer = None
        return layer

    def sort_by_z(self) -> None:
        self._layers.sort(key=lambda layer: layer.z_index)

    def set_background_layer(self, layer: ImageLayer) -> None:
        """Make *layer* the page background, replacing any previous one.

        The layer is sized to the page and pushed beneath all others.
        """
        if self._background_layer is not None:
            self.remove_layer(self._background_layer.id)
        layer.is_background = True
        layer.z_index = BACKGROUND_Z_INDEX
        layer.x = 0
        layer.y = 0
        layer.width = self.w
        layer.height = self.h
        self.add_layer(layer)

    # --- rendering ---

    def draw(self, painter: QPainter) -> None:
        """Draw every layer in ascending z order."""
        for layer in self._layers:
            layer.draw(painter)
