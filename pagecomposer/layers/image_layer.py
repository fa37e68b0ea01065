"""ImageLayer — a positioned, sized raster image."""

from __future__ import annotations

from dataclasses import dataclass, field

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QImage, QPainter

from pagecomposer.config.constants import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    IMAGE_MAX_HEIGHT,
    IMAGE_MAX_WIDTH,
)
from pagecomposer.core.geometry import point_in_rotated_rect
from pagecomposer.layers.base_layer import BaseLayer


@dataclass
class ImageLayer(BaseLayer):
    """An image whose ``x``/``y`` is the top-left of its box.

    ``image_source`` is a file path or a ``data:`` URL.  The decoded
    pixels live in ``image`` and take no part in equality.
    """

    width: float = DEFAULT_IMAGE_WIDTH
    height: float = DEFAULT_IMAGE_HEIGHT
    opacity: float = 1.0
    is_background: bool = False
    image_source: str | None = None
    image: QImage | None = field(default=None, init=False, compare=False, repr=False)

    def measure(self) -> QRectF:
        return QRectF(self.x, self.y, self.width, self.height)

    def contains(self, point: QPointF) -> bool:
        return point_in_rotated_rect(point, self.measure(), self.angle)

    def apply_decoded_image(self, image: QImage) -> None:
        """Attach freshly decoded pixels and fit the box to them.

        Background images keep their page-sized box.  Other images adopt
        their natural size, scaled down to fit 600x800 keeping the
        aspect ratio.
        """
        self.image = image
        if self.is_background or image.isNull() or image.height() == 0:
            return
        img_w, img_h = image.width(), image.height()
        ratio = img_w / img_h
        if img_w > IMAGE_MAX_WIDTH:
            self.width = IMAGE_MAX_WIDTH
            self.height = round(IMAGE_MAX_WIDTH / ratio)
        elif img_h > IMAGE_MAX_HEIGHT:
            self.height = IMAGE_MAX_HEIGHT
            self.width = round(IMAGE_MAX_HEIGHT * ratio)
        else:
            self.width = img_w
            self.height = img_h

    def draw(self, painter: QPainter) -> None:
        if not self.visible or self.image is None:
            return
        painter.save()
        painter.setOpacity(self.opacity)
        box = self.measure()
        painter.translate(box.center())
        painter.rotate(self.angle)
        painter.drawImage(
            QRectF(-self.width / 2, -self.height / 2, self.width, self.height),
            self.image,
        )
        painter.restore()
