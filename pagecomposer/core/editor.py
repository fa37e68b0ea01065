"""Editor — owns the project, history, image loader and select tool."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QKeyCombination, QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QKeySequence

from pagecomposer.commands.add_layer import AddLayerCommand
from pagecomposer.commands.arrange_commands import ZIndexCommand
from pagecomposer.commands.macro_command import MacroCommand
from pagecomposer.commands.modify_property import (
    AlignChange,
    BoldChange,
    ChangePropertyCommand,
    ColorChange,
    FontFamilyChange,
    FontSizeChange,
    ItalicChange,
    OpacityChange,
    PropertyChange,
    VisibilityChange,
)
from pagecomposer.commands.move_layer import MoveLayerCommand
from pagecomposer.commands.remove_layer import RemoveLayerCommand
from pagecomposer.config.constants import (
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    NEW_TEXT_CENTER_OFFSET_X,
    NEW_TEXT_CENTER_OFFSET_Y,
    NEW_TEXT_PLACEHOLDER,
    OVERLAY_DEFAULT_X,
    OVERLAY_DEFAULT_Y,
)
from pagecomposer.config.settings import AppSettings
from pagecomposer.config.shortcuts import matches
from pagecomposer.core.command_stack import HistoryManager
from pagecomposer.core.image_loader import ImageLoader
from pagecomposer.core.page import Page
from pagecomposer.core.project import Project
from pagecomposer.core.snapping import SnapEngine
from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.layer_types import Layer
from pagecomposer.layers.text_layer import TextAlign, TextLayer
from pagecomposer.tools.select_tool import SelectTool

log = logging.getLogger(__name__)


class Editor(QObject):
    """Entry points for every user-facing editing action.

    Signals
    -------
    scene_changed()
        Emitted whenever the active page needs repainting.
    layer_selected(object)
        Forwarded from the select tool.
    text_edit_requested(object)
        Forwarded from the select tool.
    project_loaded(object)
        Emitted with the new project after :meth:`load_project`.
    """

    scene_changed = pyqtSignal()
    layer_selected = pyqtSignal(object)
    text_edit_requested = pyqtSignal(object)
    project_loaded = pyqtSignal(object)

    def __init__(
        self,
        project: Project | None = None,
        settings: AppSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._project = project if project is not None else Project()
        if settings is not None:
            history = HistoryManager(self, settings.undo_limit())
            snap = SnapEngine(settings.snap_threshold(), settings.snapping_enabled())
        else:
            history = HistoryManager(self)
            snap = SnapEngine()
        self._history = history
        self._image_loader = ImageLoader(self)
        self._select_tool = SelectTool(self._project, self._history, snap, self)

        self._image_loader.image_ready.connect(self._on_image_ready)
        self._history.stack_changed.connect(self.scene_changed)
        self._select_tool.scene_changed.connect(self.scene_changed)
        self._select_tool.layer_selected.connect(self.layer_selected)
        self._select_tool.text_edit_requested.connect(self.text_edit_requested)

        self._request_images(self._project)

    # --- accessors ---

    @property
    def project(self) -> Project:
        return self._project

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def image_loader(self) -> ImageLoader:
        return self._image_loader

    @property
    def select_tool(self) -> SelectTool:
        return self._select_tool

    @property
    def active_page(self) -> Page:
        return self._project.active_page

    @property
    def selected_layer(self) -> Layer | None:
        return self._select_tool.selected_layer

    # --- creation ---

    def create_text(self, text: str = NEW_TEXT_PLACEHOLDER) -> TextLayer | None:
        """Add a text layer near the page center and start editing it."""
        if self._select_tool.is_active_operation or self._select_tool.is_editing:
            return None
        page = self.active_page
        layer = TextLayer(
            x=round(page.w / 2 - NEW_TEXT_CENTER_OFFSET_X),
            y=round(page.h / 2 - NEW_TEXT_CENTER_OFFSET_Y),
            text=text,
        )
        self._history.execute(AddLayerCommand(self._project, page.id, layer))
        self._select_tool.begin_text_edit(layer.id)
        return layer

    def add_image_overlay(self, source: str) -> ImageLayer:
        """Add an image above every other layer and start decoding it."""
        page = self.active_page
        layer = ImageLayer(
            x=OVERLAY_DEFAULT_X,
            y=OVERLAY_DEFAULT_Y,
            z_index=max(0, page.max_z()) + 1,
        )
        self._history.execute(AddLayerCommand(self._project, page.id, layer))
        self._image_loader.request(layer, source)
        return layer

    def set_page_background(self, source: str) -> ImageLayer:
        """Replace the active page's background image.  Not recorded in history."""
        layer = ImageLayer()
        self.active_page.set_background_layer(layer)
        self._image_loader.request(layer, source)
        self._select_tool.select_layer(None)
        self.scene_changed.emit()
        return layer

    # --- pages ---

    def add_page(
        self,
        w: float = DEFAULT_PAGE_WIDTH,
        h: float = DEFAULT_PAGE_HEIGHT,
        background_source: str | None = None,
    ) -> Page:
        """Append a page, make it active and optionally give it a background."""
        self._select_tool.cancel()
        page = self._project.add_page(w, h)
        self._project.set_active_page(self._project.page_count - 1)
        self._select_tool.select_layer(None)
        if background_source:
            self.set_page_background(background_source)
        self.scene_changed.emit()
        return page

    def remove_page(self, index: int) -> bool:
        self._select_tool.cancel()
        if not self._project.remove_page_at(index):
            return False
        self._select_tool.select_layer(None)
        self.scene_changed.emit()
        return True

    def set_active_page(self, index: int) -> bool:
        if index == self._project.active_page_index:
            return True
        self._select_tool.cancel()
        if not self._project.set_active_page(index):
            return False
        self._select_tool.select_layer(None)
        self.scene_changed.emit()
        return True

    # --- arrange ---

    def bring_forward(self) -> bool:
        layer = self.selected_layer
        if layer is None:
            return False
        new_z = max(0, self.active_page.max_z()) + 1
        return self._set_z(layer, new_z)

    def send_backward(self) -> bool:
        layer = self.selected_layer
        if layer is None:
            return False
        new_z = self.active_page.min_z() - 1
        return self._set_z(layer, new_z)

    def _set_z(self, layer: Layer, new_z: int) -> bool:
        if new_z == layer.z_index:
            return False
        self._history.execute(
            ZIndexCommand(self._project, self.active_page.id, layer.id, layer.z_index, new_z)
        )
        return True

    def delete_selected(self) -> bool:
        layer = self.selected_layer
        tool = self._select_tool
        if layer is None or tool.is_active_operation or tool.is_editing:
            return False
        self._history.execute(RemoveLayerCommand(self._project, self.active_page.id, layer.id))
        self._select_tool.select_layer(None)
        return True

    # --- style ---

    def toggle_bold(self) -> bool:
        layer = self.selected_layer
        if not isinstance(layer, TextLayer):
            return False
        return self._change_property(layer, BoldChange(layer.bold, not layer.bold))

    def toggle_italic(self) -> bool:
        layer = self.selected_layer
        if not isinstance(layer, TextLayer):
            return False
        return self._change_property(layer, ItalicChange(layer.italic, not layer.italic))

    def set_font_size(self, size: int) -> bool:
        layer = self.selected_layer
        if not isinstance(layer, TextLayer) or size <= 0:
            return False
        return self._change_property(layer, FontSizeChange(layer.font_size, int(size)))

    def set_font_family(self, family: str) -> bool:
        layer = self.selected_layer
        if not isinstance(layer, TextLayer) or not family:
            return False
        return self._change_property(layer, FontFamilyChange(layer.font_family, family))

    def set_color(self, color: str) -> bool:
        layer = self.selected_layer
        if not isinstance(layer, TextLayer):
            return False
        return self._change_property(layer, ColorChange(layer.color, color))

    def set_opacity(self, opacity: float) -> bool:
        layer = self.selected_layer
        if not isinstance(layer, ImageLayer):
            return False
        opacity = max(0.0, min(1.0, float(opacity)))
        return self._change_property(layer, OpacityChange(layer.opacity, opacity))

    def set_visible(self, visible: bool) -> bool:
        layer = self.selected_layer
        if layer is None:
            return False
        return self._change_property(layer, VisibilityChange(layer.visible, visible))

    def _change_property(self, layer: Layer, change: PropertyChange) -> bool:
        if change.old == change.new:
            return False
        self._history.execute(
            ChangePropertyCommand(self._project, self.active_page.id, layer.id, change)
        )
        return True

    def set_text_align(self, align: TextAlign) -> bool:
        """Align the selection.

        Text keeps its on-page position: the anchor moves to the edge or
        center named by *align* and the alignment changes, as one history
        entry.  Images move to the page's left edge, center or right edge.
        """
        layer = self.selected_layer
        page = self.active_page
        old_pos = QPointF(layer.x, layer.y) if layer is not None else QPointF()
        match layer:
            case TextLayer():
                box = layer.measure()
                anchor_x = {
                    TextAlign.LEFT: box.x(),
                    TextAlign.CENTER: box.x() + box.width() / 2,
                    TextAlign.RIGHT: box.x() + box.width(),
                }[align]
                if align == layer.align and anchor_x == layer.x:
                    return False
                macro = MacroCommand(
                    [
                        MoveLayerCommand(
                            self._project, page.id, layer.id, old_pos, QPointF(anchor_x, layer.y)
                        ),
                        ChangePropertyCommand(
                            self._project, page.id, layer.id, AlignChange(layer.align, align)
                        ),
                    ],
                    "Align text",
                )
                self._history.execute(macro)
                return True
            case ImageLayer():
                new_x = {
                    TextAlign.LEFT: 0,
                    TextAlign.CENTER: round((page.w - layer.width) / 2),
                    TextAlign.RIGHT: max(0, page.w - layer.width),
                }[align]
                if new_x == layer.x:
                    return False
                self._history.execute(
                    MoveLayerCommand(
                        self._project, page.id, layer.id, old_pos, QPointF(new_x, layer.y)
                    )
                )
                return True
        return False

    # --- keyboard ---

    def key_press(
        self, key: Qt.Key, modifiers: Qt.KeyboardModifier = Qt.KeyboardModifier.NoModifier
    ) -> bool:
        """Route a key press: gesture and history keys first, then editor actions."""
        if self._select_tool.key_press(key, modifiers):
            return True
        if self._select_tool.is_editing or self._select_tool.is_active_operation:
            return False
        sequence = QKeySequence(QKeyCombination(modifiers, key))
        if matches(sequence, "text.new"):
            return self.create_text() is not None
        if matches(sequence, "text.bold"):
            return self.toggle_bold()
        if matches(sequence, "text.italic"):
            return self.toggle_italic()
        if matches(sequence, "arrange.bring_forward"):
            return self.bring_forward()
        if matches(sequence, "arrange.send_backward"):
            return self.send_backward()
        return False

    # --- history ---

    def undo(self) -> None:
        if self._select_tool.is_active_operation or self._select_tool.is_editing:
            return
        self._history.undo()
        self._select_tool.select_layer(self._still_present(self._select_tool.selected_layer_id))

    def redo(self) -> None:
        if self._select_tool.is_active_operation or self._select_tool.is_editing:
            return
        self._history.redo()
        self._select_tool.select_layer(self._still_present(self._select_tool.selected_layer_id))

    def _still_present(self, layer_id: str | None) -> str | None:
        if layer_id is None or self.active_page.layer_by_id(layer_id) is None:
            return None
        return layer_id

    # --- project lifecycle ---

    def load_project(self, project: Project) -> None:
        """Replace the edited project; history starts empty."""
        self._select_tool.cancel()
        self._history.clear()
        self._project = project
        self._select_tool.set_project(project)
        self._request_images(project)
        self.project_loaded.emit(project)
        self.scene_changed.emit()

    def reset(self) -> None:
        """Start over with an empty single-page project."""
        self.load_project(Project())

    def _request_images(self, project: Project) -> None:
        for page in project.pages:
            for layer in page.layers:
                if isinstance(layer, ImageLayer) and layer.image_source and layer.image is None:
                    self._image_loader.request(layer, layer.image_source)

    def _on_image_ready(self, layer_id: str) -> None:
        for page in self._project.pages:
            if page.layer_by_id(layer_id) is not None:
                self.scene_changed.emit()
                return
        log.debug("Decoded image for layer %s which is no longer in the project", layer_id)
