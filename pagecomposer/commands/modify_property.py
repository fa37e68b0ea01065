"""ChangePropertyCommand — set one typed field on a layer.

Each kind of change is its own small value type carrying typed old/new
values, so a command can only ever write a field of the right type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Union

from pagecomposer.commands.layer_command import LayerCommand
from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.text_layer import TextAlign, TextLayer

if TYPE_CHECKING:
    from pagecomposer.core.project import Project
    from pagecomposer.layers.layer_types import Layer


@dataclass(frozen=True)
class AngleChange:
    old: float
    new: float
    label: ClassVar[str] = "rotation"


@dataclass(frozen=True)
class VisibilityChange:
    old: bool
    new: bool
    label: ClassVar[str] = "visibility"


@dataclass(frozen=True)
class OpacityChange:
    old: float
    new: float
    label: ClassVar[str] = "opacity"


@dataclass(frozen=True)
class AlignChange:
    old: TextAlign
    new: TextAlign
    label: ClassVar[str] = "alignment"


@dataclass(frozen=True)
class BoldChange:
    old: bool
    new: bool
    label: ClassVar[str] = "bold"


@dataclass(frozen=True)
class ItalicChange:
    old: bool
    new: bool
    label: ClassVar[str] = "italic"


@dataclass(frozen=True)
class ColorChange:
    old: str
    new: str
    label: ClassVar[str] = "color"


@dataclass(frozen=True)
class FontFamilyChange:
    old: str
    new: str
    label: ClassVar[str] = "font family"


@dataclass(frozen=True)
class FontSizeChange:
    old: int
    new: int
    label: ClassVar[str] = "font size"


PropertyChange = Union[
    AngleChange,
    VisibilityChange,
    OpacityChange,
    AlignChange,
    BoldChange,
    ItalicChange,
    ColorChange,
    FontFamilyChange,
    FontSizeChange,
]


def apply_change(layer: Layer, change: PropertyChange, *, forward: bool = True) -> bool:
    """Write the new (or, with ``forward=False``, old) value onto *layer*.

    Returns False when the change does not apply to the layer's type.
    """
    value = change.new if forward else change.old
    match change, layer:
        case AngleChange(), _:
            layer.angle = value
        case VisibilityChange(), _:
            layer.visible = value
        case OpacityChange(), ImageLayer():
            layer.opacity = value
        case AlignChange(), TextLayer():
            layer.align = value
        case BoldChange(), TextLayer():
            layer.bold = value
        case ItalicChange(), TextLayer():
            layer.italic = value
        case ColorChange(), TextLayer():
            layer.color = value
        case FontFamilyChange(), TextLayer():
            layer.font_family = value
        case FontSizeChange(), TextLayer():
            layer.font_size = value
        case _:
            return False
    return True


class ChangePropertyCommand(LayerCommand):
    """Change one property on a layer (style toggles, rotation, alignment)."""

    def __init__(
        self, project: Project, page_id: str, layer_id: str, change: PropertyChange
    ) -> None:
        super().__init__(project, page_id, layer_id)
        self._change = change

    @property
    def change(self) -> PropertyChange:
        return self._change

    def execute(self) -> None:
        layer = self._layer()
        if layer is not None:
            apply_change(layer, self._change, forward=True)

    def undo(self) -> None:
        layer = self._layer()
        if layer is not None:
            apply_change(layer, self._change, forward=False)

    @property
    def description(self) -> str:
        return f"Change {self._change.label}"
