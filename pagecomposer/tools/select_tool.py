"""SelectTool — select, drag, resize, rotate and text-edit gestures on a page."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from PyQt6.QtCore import QKeyCombination, QLineF, QObject, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QKeySequence

from pagecomposer.commands.edit_text import EditTextCommand
from pagecomposer.commands.modify_property import AngleChange, ChangePropertyCommand
from pagecomposer.commands.move_layer import MoveLayerCommand
from pagecomposer.commands.remove_layer import RemoveLayerCommand
from pagecomposer.commands.resize_layer import ResizeLayerCommand
from pagecomposer.config.constants import (
    CARDINAL_ANGLES,
    CARDINAL_GUIDE_TOLERANCE,
    MIN_LAYER_SIZE,
)
from pagecomposer.config.shortcuts import matches
from pagecomposer.core.geometry import circular_distance, pointer_angle
from pagecomposer.core.hit_testing import HandleName, HitKind, HitResult, hit_test
from pagecomposer.core.snapping import SnapEngine, snapped_angle
from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.text_layer import TextLayer

if TYPE_CHECKING:
    from pagecomposer.core.command_stack import BaseCommand, HistoryManager
    from pagecomposer.core.page import Page
    from pagecomposer.core.project import Project
    from pagecomposer.layers.layer_types import Layer

log = logging.getLogger(__name__)


class GestureState(Enum):
    IDLE = auto()
    DRAGGING = auto()
    RESIZING = auto()
    ROTATING = auto()
    EDITING = auto()


@dataclass
class _Gesture:
    page_id: str
    layer_id: str
    start_pointer: QPointF
    start_pos: QPointF
    start_rect: QRectF
    handle: HandleName | None = None
    start_angle: float = 0.0
    start_pointer_angle: float = 0.0


@dataclass
class _PendingEdit:
    page_id: str
    layer_id: str
    old_text: str


class SelectTool(QObject):
    """Turns pointer and keyboard input into live edits and history entries.

    Positions are page coordinates.  During a gesture the layer's fields
    are written directly for feedback; releasing the pointer submits one
    command spanning the whole gesture, or none if nothing changed.  Only
    one gesture can be active at a time and pointer presses are ignored
    while a text edit is open.

    Signals
    -------
    layer_selected(object)
        Emitted with the newly selected layer, or None.
    text_edit_requested(object)
        Emitted with the text layer that should get an inline editor.
    scene_changed()
        Emitted whenever the page needs repainting.
    guides_changed(list)
        Emitted with the current snap guides (list of QLineF).
    """

    layer_selected = pyqtSignal(object)
    text_edit_requested = pyqtSignal(object)
    scene_changed = pyqtSignal()
    guides_changed = pyqtSignal(list)

    def __init__(
        self,
        project: Project,
        history: HistoryManager,
        snap_engine: SnapEngine | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._project = project
        self._history = history
        self._snap = snap_engine if snap_engine is not None else SnapEngine()
        self._state = GestureState.IDLE
        self._gesture: _Gesture | None = None
        self._pending_edit: _PendingEdit | None = None
        self._selected_id: str | None = None
        self._guides: list[QLineF] = []

    # --- properties ---

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_active_operation(self) -> bool:
        return self._state in (
            GestureState.DRAGGING,
            GestureState.RESIZING,
            GestureState.ROTATING,
        )

    @property
    def is_editing(self) -> bool:
        return self._state == GestureState.EDITING

    @property
    def guides(self) -> list[QLineF]:
        return list(self._guides)

    @property
    def snap_engine(self) -> SnapEngine:
        return self._snap

    @property
    def selected_layer_id(self) -> str | None:
        return self._selected_id

    @property
    def selected_layer(self) -> Layer | None:
        if self._selected_id is None:
            return None
        return self._project.active_page.layer_by_id(self._selected_id)

    def set_project(self, project: Project) -> None:
        """Switch to another project, dropping any gesture and selection."""
        self.cancel()
        self._project = project
        self.select_layer(None)

    # --- selection ---

    def select_layer(self, layer_id: str | None) -> None:
        self._selected_id = layer_id
        self.layer_selected.emit(self.selected_layer)

    def _drop_stale_selection(self) -> None:
        if self._selected_id is not None and self.selected_layer is None:
            self.select_layer(None)

    # --- pointer events ---

    def mouse_press(
        self, pos: QPointF, modifiers: Qt.KeyboardModifier = Qt.KeyboardModifier.NoModifier
    ) -> bool:
        if self._state != GestureState.IDLE:
            return False

        page = self._project.active_page
        hit = hit_test(page, pos)
        if hit is None:
            self.select_layer(None)
            return False

        self.select_layer(hit.layer.id)
        self._gesture = self._start_gesture(page, hit, pos)
        self._set_guides([])
        return True

    def _start_gesture(self, page: Page, hit: HitResult, pos: QPointF) -> _Gesture:
        layer = hit.layer
        gesture = _Gesture(
            page_id=page.id,
            layer_id=layer.id,
            start_pointer=QPointF(pos),
            start_pos=QPointF(layer.x, layer.y),
            start_rect=layer.measure(),
        )
        # Only image layers carry a size; a corner grab on text moves it.
        if hit.kind == HitKind.HANDLE and isinstance(layer, ImageLayer):
            gesture.handle = hit.handle
            gesture.start_rect = QRectF(
                layer.x, layer.y, layer.width or 1, layer.height or 1
            )
            self._state = GestureState.RESIZING
        elif hit.kind == HitKind.ROTATE:
            gesture.start_angle = layer.angle
            gesture.start_pointer_angle = pointer_angle(layer.measure().center(), pos)
            self._state = GestureState.ROTATING
        else:
            self._state = GestureState.DRAGGING
        return gesture

    def mouse_move(
        self, pos: QPointF, modifiers: Qt.KeyboardModifier = Qt.KeyboardModifier.NoModifier
    ) -> bool:
        if self._gesture is None or not self.is_active_operation:
            return False
        page = self._project.page_by_id(self._gesture.page_id)
        layer = page.layer_by_id(self._gesture.layer_id) if page is not None else None
        if page is None or layer is None:
            self._end_gesture()
            return False

        shift = bool(modifiers & Qt.KeyboardModifier.ShiftModifier)
        if self._state == GestureState.DRAGGING:
            self._apply_drag(page, layer, pos)
        elif self._state == GestureState.RESIZING and isinstance(layer, ImageLayer):
            self._apply_resize(page, layer, pos, shift)
        elif self._state == GestureState.ROTATING:
            self._apply_rotation(page, layer, pos, shift)
        self.scene_changed.emit()
        return True

    def mouse_release(self, pos: QPointF | None = None) -> bool:
        if self._gesture is None or not self.is_active_operation:
            return False
        gesture = self._gesture
        page = self._project.page_by_id(gesture.page_id)
        layer = page.layer_by_id(gesture.layer_id) if page is not None else None

        command: BaseCommand | None = None
        if layer is not None:
            command = self._build_command(gesture, layer)

        self._end_gesture()
        if command is not None:
            self._history.execute(command)
        self.scene_changed.emit()
        return True

    def mouse_double_click(self, pos: QPointF) -> bool:
        if self._state != GestureState.IDLE:
            return False
        match hit_test(self._project.active_page, pos):
            case HitResult(layer=TextLayer() as layer):
                return self.begin_text_edit(layer.id)
            case _:
                return False

    # --- drag / resize / rotate ---

    def _apply_drag(self, page: Page, layer: Layer, pos: QPointF) -> None:
        gesture = self._gesture
        assert gesture is not None
        cand_x = gesture.start_pos.x() + pos.x() - gesture.start_pointer.x()
        cand_y = gesture.start_pos.y() + pos.y() - gesture.start_pointer.y()
        # Text anchors are not the box corner; snap the box, keep the offset.
        box = layer.measure()
        off_x = layer.x - box.x()
        off_y = layer.y - box.y()
        result = self._snap.snap_position(page, layer, cand_x - off_x, cand_y - off_y)
        layer.x = result.x + off_x
        layer.y = result.y + off_y
        self._set_guides(result.guides)

    def _apply_resize(self, page: Page, layer: ImageLayer, pos: QPointF, keep_aspect: bool) -> None:
        """Move the edges owned by the grabbed corner; the opposite corner stays put."""
        gesture = self._gesture
        assert gesture is not None
        start = gesture.start_rect
        dx = pos.x() - gesture.start_pointer.x()
        dy = pos.y() - gesture.start_pointer.y()
        sw, sh = start.width(), start.height()
        ratio = sw / sh if sh else 1.0
        handle = gesture.handle

        moves_left = handle in (HandleName.NW, HandleName.SW)
        moves_top = handle in (HandleName.NW, HandleName.NE)
        new_w = max(MIN_LAYER_SIZE, round(sw - dx if moves_left else sw + dx))
        new_h = max(MIN_LAYER_SIZE, round(sh - dy if moves_top else sh + dy))
        if keep_aspect:
            new_h = max(MIN_LAYER_SIZE, round(new_w / ratio))
        new_x = round(start.x() + sw - new_w) if moves_left else start.x()
        new_y = round(start.y() + sh - new_h) if moves_top else start.y()

        # Shrink rather than shift to stay on the page.
        if new_x < 0:
            new_w = max(MIN_LAYER_SIZE, new_w + new_x)
            new_x = 0
        if new_y < 0:
            new_h = max(MIN_LAYER_SIZE, new_h + new_y)
            new_y = 0
        if new_x + new_w > page.w:
            new_w = max(MIN_LAYER_SIZE, page.w - new_x)
        if new_y + new_h > page.h:
            new_h = max(MIN_LAYER_SIZE, page.h - new_y)

        layer.width = new_w
        layer.height = new_h
        result = self._snap.snap_position(page, layer, new_x, new_y)
        layer.x = result.x
        layer.y = result.y
        self._set_guides(result.guides)

    def _apply_rotation(self, page: Page, layer: Layer, pos: QPointF, constrain: bool) -> None:
        gesture = self._gesture
        assert gesture is not None
        center = layer.measure().center()
        delta = pointer_angle(center, pos) - gesture.start_pointer_angle
        angle = snapped_angle((gesture.start_angle + delta) % 360.0, constrain)
        layer.angle = angle

        guides: list[QLineF] = []
        if any(circular_distance(angle, c) <= CARDINAL_GUIDE_TOLERANCE for c in CARDINAL_ANGLES):
            guides = [
                QLineF(0, center.y(), page.w, center.y()),
                QLineF(center.x(), 0, center.x(), page.h),
            ]
        self._set_guides(guides)

    def _build_command(self, gesture: _Gesture, layer: Layer) -> BaseCommand | None:
        if self._state == GestureState.DRAGGING:
            final = QPointF(layer.x, layer.y)
            if final == gesture.start_pos:
                return None
            return MoveLayerCommand(
                self._project, gesture.page_id, layer.id, gesture.start_pos, final
            )
        if self._state == GestureState.RESIZING and isinstance(layer, ImageLayer):
            final_rect = QRectF(layer.x, layer.y, layer.width, layer.height)
            if final_rect == gesture.start_rect:
                return None
            return ResizeLayerCommand(
                self._project, gesture.page_id, layer.id, gesture.start_rect, final_rect
            )
        if self._state == GestureState.ROTATING:
            if layer.angle == gesture.start_angle:
                return None
            return ChangePropertyCommand(
                self._project,
                gesture.page_id,
                layer.id,
                AngleChange(gesture.start_angle, layer.angle),
            )
        return None

    def _end_gesture(self) -> None:
        self._gesture = None
        self._state = GestureState.IDLE
        self._set_guides([])

    def _set_guides(self, guides: list[QLineF]) -> None:
        if not guides and not self._guides:
            return
        self._guides = list(guides)
        self.guides_changed.emit(self.guides)

    def cancel(self) -> None:
        """Abort the current gesture or text edit, restoring the start values."""
        if self._state == GestureState.EDITING:
            self.cancel_text_edit()
            return
        gesture = self._gesture
        if gesture is None:
            return
        page = self._project.page_by_id(gesture.page_id)
        layer = page.layer_by_id(gesture.layer_id) if page is not None else None
        if layer is not None:
            if self._state == GestureState.RESIZING and isinstance(layer, ImageLayer):
                layer.width = gesture.start_rect.width()
                layer.height = gesture.start_rect.height()
            if self._state == GestureState.ROTATING:
                layer.angle = gesture.start_angle
            layer.x = gesture.start_pos.x()
            layer.y = gesture.start_pos.y()
        self._end_gesture()
        self.scene_changed.emit()

    # --- text editing ---

    def begin_text_edit(self, layer_id: str) -> bool:
        """Enter editing mode on a text layer of the active page."""
        if self._state != GestureState.IDLE:
            return False
        page = self._project.active_page
        layer = page.layer_by_id(layer_id)
        if not isinstance(layer, TextLayer):
            return False
        self._pending_edit = _PendingEdit(page.id, layer.id, layer.text)
        self._state = GestureState.EDITING
        self.select_layer(layer.id)
        self.text_edit_requested.emit(layer)
        return True

    def preview_text(self, text: str) -> None:
        """Show in-progress text on the layer without touching history."""
        layer = self._editing_layer()
        if layer is not None:
            layer.text = text
            self.scene_changed.emit()

    def commit_text_edit(self, new_text: str) -> bool:
        """Finish editing; records an EditTextCommand only if the text changed."""
        edit = self._pending_edit
        self._pending_edit = None
        if self._state == GestureState.EDITING:
            self._state = GestureState.IDLE
        if edit is None:
            return False
        layer = self._layer_for_edit(edit)
        if layer is None:
            log.debug("Edited layer %s is gone; text not recorded", edit.layer_id)
            self.scene_changed.emit()
            return False
        layer.text = edit.old_text
        if new_text != edit.old_text:
            self._history.execute(
                EditTextCommand(self._project, edit.page_id, edit.layer_id, edit.old_text, new_text)
            )
        self.scene_changed.emit()
        return True

    def cancel_text_edit(self) -> None:
        """Leave editing mode, putting the original text back directly."""
        edit = self._pending_edit
        self._pending_edit = None
        if self._state == GestureState.EDITING:
            self._state = GestureState.IDLE
        if edit is None:
            return
        layer = self._layer_for_edit(edit)
        if layer is not None:
            layer.text = edit.old_text
        self.scene_changed.emit()

    def _editing_layer(self) -> TextLayer | None:
        if self._pending_edit is None:
            return None
        return self._layer_for_edit(self._pending_edit)

    def _layer_for_edit(self, edit: _PendingEdit) -> TextLayer | None:
        page = self._project.page_by_id(edit.page_id)
        if page is None:
            return None
        layer = page.layer_by_id(edit.layer_id)
        return layer if isinstance(layer, TextLayer) else None

    # --- key events ---

    def key_press(
        self, key: Qt.Key, modifiers: Qt.KeyboardModifier = Qt.KeyboardModifier.NoModifier
    ) -> bool:
        sequence = QKeySequence(QKeyCombination(modifiers, key))

        if matches(sequence, "edit.cancel"):
            if self._state == GestureState.IDLE:
                return False
            self.cancel()
            return True

        # The inline editor owns every other key while editing.
        if self._state == GestureState.EDITING:
            return False

        if matches(sequence, "edit.undo") or matches(sequence, "edit.redo"):
            if self.is_active_operation:
                return True
            if matches(sequence, "edit.undo"):
                self._history.undo()
            else:
                self._history.redo()
            self._drop_stale_selection()
            self.scene_changed.emit()
            return True

        if matches(sequence, "edit.delete"):
            if self.is_active_operation or self._selected_id is None:
                return False
            page = self._project.active_page
            self._history.execute(RemoveLayerCommand(self._project, page.id, self._selected_id))
            self.select_layer(None)
            self.scene_changed.emit()
            return True

        return False
