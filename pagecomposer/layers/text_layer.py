"""TextLayer — a single line of styled text anchored by its alignment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QFont, QPainter

from pagecomposer.config.constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_X,
    DEFAULT_TEXT_Y,
)
from pagecomposer.core.geometry import point_in_rotated_rect
from pagecomposer.core.text_metrics import TextMetrics, default_text_metrics
from pagecomposer.layers.base_layer import BaseLayer


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class TextLayer(BaseLayer):
    """Styled text.

    ``x`` is the alignment anchor: the left edge, the center or the right
    edge of the text box for ``LEFT``, ``CENTER`` and ``RIGHT``
    respectively.  ``y`` is always the top of the box.
    """

    x: float = DEFAULT_TEXT_X
    y: float = DEFAULT_TEXT_Y
    text: str = DEFAULT_TEXT
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: int = DEFAULT_FONT_SIZE
    color: str = DEFAULT_TEXT_COLOR
    align: TextAlign = TextAlign.LEFT
    bold: bool = False
    italic: bool = False

    def font(self) -> QFont:
        font = QFont()
        font.setFamily(self.font_family)
        font.setPixelSize(max(1, int(self.font_size)))
        font.setBold(self.bold)
        font.setItalic(self.italic)
        return font

    def measure(self, metrics: TextMetrics | None = None) -> QRectF:
        """Return the unrotated box, top-left derived from the anchor."""
        if metrics is None:
            metrics = default_text_metrics()
        width = max(0.0, metrics.text_width(self.font(), self.text or ""))
        if self.align == TextAlign.CENTER:
            left = self.x - width / 2
        elif self.align == TextAlign.RIGHT:
            left = self.x - width
        else:
            left = self.x
        return QRectF(left, self.y, width, float(self.font_size))

    def contains(self, point: QPointF) -> bool:
        return point_in_rotated_rect(point, self.measure(), self.angle)

    def draw(self, painter: QPainter) -> None:
        if not self.visible:
            return
        box = self.measure()
        painter.save()
        painter.setFont(self.font())
        painter.setPen(QColor(self.color))
        center = box.center()
        painter.translate(center)
        painter.rotate(self.angle)
        local = QRectF(-box.width() / 2, -box.height() / 2, box.width(), box.height())
        flags = {
            TextAlign.LEFT: Qt.AlignmentFlag.AlignLeft,
            TextAlign.CENTER: Qt.AlignmentFlag.AlignHCenter,
            TextAlign.RIGHT: Qt.AlignmentFlag.AlignRight,
        }[self.align] | Qt.AlignmentFlag.AlignTop
        painter.drawText(local, flags, self.text or "")
        painter.restore()
