"""Snap engine — alignment of moving layers to page and sibling edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from PyQt6.QtCore import QLineF

from pagecomposer.config.constants import (
    ANGLE_SNAP_STEP,
    CARDINAL_ANGLES,
    CARDINAL_SNAP_TOLERANCE,
    SNAP_THRESHOLD,
)
from pagecomposer.core.geometry import circular_distance

if TYPE_CHECKING:
    from pagecomposer.core.page import Page
    from pagecomposer.layers.layer_types import Layer


@dataclass
class SnapResult:
    x: float
    y: float
    guides: list[QLineF] = field(default_factory=list)


class SnapEngine:
    """Snap a layer's candidate top-left against page and sibling guides.

    Candidates are examined page first (left, right, center; then top,
    bottom, middle) and then siblings in page order.  When several are in
    range on an axis the last one examined wins.  The result is finally
    clamped so the box stays on the page.
    """

    def __init__(self, threshold: float = SNAP_THRESHOLD, enabled: bool = True) -> None:
        self.threshold = threshold
        self.enabled = enabled

    def snap_position(self, page: Page, layer: Layer, x: float, y: float) -> SnapResult:
        """Snap the box of *layer* placed with its top-left at (*x*, *y*)."""
        box = layer.measure()
        w, h = box.width(), box.height()
        result = SnapResult(x, y)

        if self.enabled:
            self._snap_x(result, x, w, 0.0, page.w, page.w / 2, page)
            self._snap_y(result, y, h, 0.0, page.h, page.h / 2, page)
            for other in page.layers:
                if other.id == layer.id:
                    continue
                om = other.measure()
                self._snap_x(
                    result, x, w, om.x(), om.x() + om.width(), om.x() + om.width() / 2, page
                )
                self._snap_y(
                    result, y, h, om.y(), om.y() + om.height(), om.y() + om.height() / 2, page
                )

        result.x = max(0.0, min(result.x, page.w - w))
        result.y = max(0.0, min(result.y, page.h - h))
        return result

    def _snap_x(
        self,
        result: SnapResult,
        x: float,
        w: float,
        left: float,
        right: float,
        center: float,
        page: Page,
    ) -> None:
        if abs(x - left) <= self.threshold:
            result.x = left
            result.guides.append(QLineF(left, 0, left, page.h))
        if abs(x + w - right) <= self.threshold:
            result.x = right - w
            result.guides.append(QLineF(right, 0, right, page.h))
        if abs(x + w / 2 - center) <= self.threshold:
            result.x = round(center - w / 2)
            result.guides.append(QLineF(center, 0, center, page.h))

    def _snap_y(
        self,
        result: SnapResult,
        y: float,
        h: float,
        top: float,
        bottom: float,
        middle: float,
        page: Page,
    ) -> None:
        if abs(y - top) <= self.threshold:
            result.y = top
            result.guides.append(QLineF(0, top, page.w, top))
        if abs(y + h - bottom) <= self.threshold:
            result.y = bottom - h
            result.guides.append(QLineF(0, bottom, page.w, bottom))
        if abs(y + h / 2 - middle) <= self.threshold:
            result.y = round(middle - h / 2)
            result.guides.append(QLineF(0, middle, page.w, middle))


def snapped_angle(angle: float, constrain: bool = False) -> float:
    """Snap a rotation angle.

    With *constrain* (Shift held) round to the nearest 15 degrees.
    Otherwise snap to 0/90/180/270 when within 4 degrees, else return
    *angle* unchanged.
    """
    if constrain:
        return round(angle / ANGLE_SNAP_STEP) * ANGLE_SNAP_STEP
    for cardinal in CARDINAL_ANGLES:
        if circular_distance(angle, cardinal) <= CARDINAL_SNAP_TOLERANCE:
            return float(cardinal)
    return angle
