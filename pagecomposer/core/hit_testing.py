"""Hit-testing of pointer positions against rotated layer boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from PyQt6.QtCore import QPointF

from pagecomposer.config.constants import (
    HANDLE_TOLERANCE,
    ROTATE_HANDLE_DISTANCE,
    ROTATE_HANDLE_RADIUS,
)
from pagecomposer.core.geometry import (
    point_in_rotated_rect,
    rotate_handle_position,
    rotated_corners,
)

if TYPE_CHECKING:
    from pagecomposer.core.page import Page
    from pagecomposer.layers.layer_types import Layer


class HitKind(Enum):
    HANDLE = auto()
    ROTATE = auto()
    BODY = auto()


class HandleName(str, Enum):
    """Corner handles, in the order :func:`rotated_corners` returns them."""

    NW = "nw"
    NE = "ne"
    SE = "se"
    SW = "sw"


CORNER_ORDER = (HandleName.NW, HandleName.NE, HandleName.SE, HandleName.SW)


@dataclass(frozen=True)
class HitResult:
    layer: Layer
    kind: HitKind
    handle: HandleName | None = None


def hit_test_layer(layer: Layer, point: QPointF) -> HitResult | None:
    """Test a single layer: corner handles, then rotate handle, then body."""
    box = layer.measure()
    corners = rotated_corners(box, layer.angle)
    for name, corner in zip(CORNER_ORDER, corners):
        if (
            abs(point.x() - corner.x()) <= HANDLE_TOLERANCE
            and abs(point.y() - corner.y()) <= HANDLE_TOLERANCE
        ):
            return HitResult(layer, HitKind.HANDLE, name)

    rotate_pos = rotate_handle_position(box, layer.angle, ROTATE_HANDLE_DISTANCE)
    if math.hypot(point.x() - rotate_pos.x(), point.y() - rotate_pos.y()) <= ROTATE_HANDLE_RADIUS:
        return HitResult(layer, HitKind.ROTATE)

    if point_in_rotated_rect(point, box, layer.angle):
        return HitResult(layer, HitKind.BODY)
    return None


def hit_test(page: Page, point: QPointF) -> HitResult | None:
    """Return the hit on the top-most layer under *point*, or None.

    Layers are walked from the highest z down; the first layer producing
    any hit wins even if a lower one would also match.  Hidden layers
    are still hit-testable.
    """
    for layer in reversed(page.layers):
        result = hit_test_layer(layer, point)
        if result is not None:
            return result
    return None
