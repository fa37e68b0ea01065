"""Rotation math shared by hit-testing, layer containment and gestures.

All angles are in degrees, positive angles rotate clockwise in page
coordinates (y grows downward).
"""

from __future__ import annotations

import math

from PyQt6.QtCore import QPointF, QRectF

from pagecomposer.config.constants import ROTATE_HANDLE_DISTANCE


def rotate_point(point: QPointF, center: QPointF, degrees: float) -> QPointF:
    """Rotate *point* about *center* by *degrees*."""
    rad = math.radians(degrees)
    cos_a, sin_a = math.cos(rad), math.sin(rad)
    dx = point.x() - center.x()
    dy = point.y() - center.y()
    return QPointF(
        center.x() + dx * cos_a - dy * sin_a,
        center.y() + dx * sin_a + dy * cos_a,
    )


def rotated_corners(box: QRectF, degrees: float) -> list[QPointF]:
    """Return the corners of *box* rotated about its center, ordered nw, ne, se, sw."""
    center = box.center()
    corners = [
        QPointF(box.left(), box.top()),
        QPointF(box.left() + box.width(), box.top()),
        QPointF(box.left() + box.width(), box.top() + box.height()),
        QPointF(box.left(), box.top() + box.height()),
    ]
    return [rotate_point(c, center, degrees) for c in corners]


def rotate_handle_position(
    box: QRectF, degrees: float, distance: float = ROTATE_HANDLE_DISTANCE
) -> QPointF:
    """Return the rotate-handle location above the (rotated) top edge of *box*."""
    center = box.center()
    nw, ne = rotated_corners(box, degrees)[:2]
    top_mid = QPointF((nw.x() + ne.x()) / 2, (nw.y() + ne.y()) / 2)
    dir_x = top_mid.x() - center.x()
    dir_y = top_mid.y() - center.y()
    length = math.hypot(dir_x, dir_y) or 1.0
    return QPointF(
        top_mid.x() + dir_x / length * distance,
        top_mid.y() + dir_y / length * distance,
    )


def point_in_rotated_rect(point: QPointF, box: QRectF, degrees: float) -> bool:
    """Test *point* against *box* rotated by *degrees* about its center.

    Edges count as inside.
    """
    local = rotate_point(point, box.center(), -degrees)
    return (
        box.left() <= local.x() <= box.left() + box.width()
        and box.top() <= local.y() <= box.top() + box.height()
    )


def pointer_angle(center: QPointF, point: QPointF) -> float:
    """Angle in degrees of *point* as seen from *center*."""
    return math.degrees(math.atan2(point.y() - center.y(), point.x() - center.x()))


def circular_distance(a: float, b: float) -> float:
    """Smallest absolute difference between two angles, in ``[0, 180]``."""
    return abs((a - b + 540.0) % 360.0 - 180.0)
