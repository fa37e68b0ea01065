"""Tests for the layer commands."""

import pytest
from PyQt6.QtCore import QPointF, QRectF

from pagecomposer.commands.add_layer import AddLayerCommand
from pagecomposer.commands.arrange_commands import ZIndexCommand
from pagecomposer.commands.edit_text import EditTextCommand
from pagecomposer.commands.modify_property import (
    AlignChange,
    AngleChange,
    BoldChange,
    ChangePropertyCommand,
    FontSizeChange,
    OpacityChange,
    apply_change,
)
from pagecomposer.commands.move_layer import MoveLayerCommand
from pagecomposer.commands.remove_layer import RemoveLayerCommand
from pagecomposer.commands.resize_layer import ResizeLayerCommand
from pagecomposer.core.command_stack import HistoryManager
from pagecomposer.core.project import Project
from pagecomposer.io.project_serializer import serialize
from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.text_layer import TextAlign, TextLayer


@pytest.fixture()
def populated(project: Project) -> Project:
    page = project.active_page
    page.add_layer(ImageLayer(id="img", x=10, y=20, width=100, height=50, z_index=1))
    page.add_layer(TextLayer(id="txt", text="Hello", z_index=2))
    page.add_layer(ImageLayer(id="top", x=300, y=300, z_index=3))
    return project


def test_add_layer_and_undo(project: Project, history: HistoryManager) -> None:
    page = project.active_page
    layer = TextLayer(text="Hi")
    history.execute(AddLayerCommand(project, page.id, layer))
    assert page.layer_by_id(layer.id) is layer
    history.undo()
    assert page.count == 0
    history.redo()
    assert page.layer_by_id(layer.id) is layer


def test_add_layer_twice_keeps_one_copy(project: Project) -> None:
    page = project.active_page
    layer = TextLayer()
    cmd = AddLayerCommand(project, page.id, layer)
    cmd.execute()
    cmd.execute()
    assert page.count == 1


def test_remove_and_undo_restores_z_position(populated: Project, history: HistoryManager) -> None:
    page = populated.active_page
    before = [layer.id for layer in page.layers]
    history.execute(RemoveLayerCommand(populated, page.id, "txt"))
    assert page.layer_by_id("txt") is None
    history.undo()
    assert [layer.id for layer in page.layers] == before


def test_remove_missing_layer_is_noop(populated: Project) -> None:
    page = populated.active_page
    cmd = RemoveLayerCommand(populated, page.id, "missing")
    cmd.execute()
    cmd.undo()
    assert page.count == 3


def test_move_layer(populated: Project, history: HistoryManager) -> None:
    page = populated.active_page
    history.execute(
        MoveLayerCommand(populated, page.id, "img", QPointF(10, 20), QPointF(40, 60))
    )
    layer = page.layer_by_id("img")
    assert (layer.x, layer.y) == (40, 60)
    history.undo()
    assert (layer.x, layer.y) == (10, 20)


def test_resize_layer(populated: Project, history: HistoryManager) -> None:
    page = populated.active_page
    history.execute(
        ResizeLayerCommand(
            populated, page.id, "img", QRectF(10, 20, 100, 50), QRectF(0, 0, 300, 150)
        )
    )
    layer = page.layer_by_id("img")
    assert (layer.x, layer.y, layer.width, layer.height) == (0, 0, 300, 150)
    history.undo()
    assert (layer.x, layer.y, layer.width, layer.height) == (10, 20, 100, 50)


def test_resize_ignores_text_layer(populated: Project) -> None:
    page = populated.active_page
    layer = page.layer_by_id("txt")
    cmd = ResizeLayerCommand(populated, page.id, "txt", QRectF(0, 0, 1, 1), QRectF(5, 5, 9, 9))
    cmd.execute()
    assert (layer.x, layer.y) == (50, 50)


def test_edit_text(populated: Project, history: HistoryManager) -> None:
    page = populated.active_page
    history.execute(EditTextCommand(populated, page.id, "txt", "Hello", "World"))
    assert page.layer_by_id("txt").text == "World"
    history.undo()
    assert page.layer_by_id("txt").text == "Hello"


def test_z_index_command_resorts(populated: Project, history: HistoryManager) -> None:
    page = populated.active_page
    history.execute(ZIndexCommand(populated, page.id, "img", 1, 4))
    assert page.layers[-1].id == "img"
    history.undo()
    assert page.layers[0].id == "img"


def test_z_index_description() -> None:
    project = Project()
    assert ZIndexCommand(project, "p", "l", 1, 2).description == "Bring Forward"
    assert ZIndexCommand(project, "p", "l", 2, 1).description == "Send Backward"


@pytest.mark.parametrize(
    ("layer_id", "change", "attr"),
    [
        ("txt", BoldChange(False, True), "bold"),
        ("txt", FontSizeChange(48, 72), "font_size"),
        ("txt", AlignChange(TextAlign.LEFT, TextAlign.RIGHT), "align"),
        ("img", OpacityChange(1.0, 0.25), "opacity"),
        ("img", AngleChange(0.0, 45.0), "angle"),
    ],
)
def test_change_property_round_trip(
    populated: Project, history: HistoryManager, layer_id, change, attr
) -> None:
    page = populated.active_page
    layer = page.layer_by_id(layer_id)
    history.execute(ChangePropertyCommand(populated, page.id, layer_id, change))
    assert getattr(layer, attr) == change.new
    history.undo()
    assert getattr(layer, attr) == change.old


def test_change_not_applicable_to_layer_type() -> None:
    image = ImageLayer()
    assert not apply_change(image, BoldChange(False, True))
    text = TextLayer()
    assert not apply_change(text, OpacityChange(1.0, 0.5))


def test_change_property_description() -> None:
    cmd = ChangePropertyCommand(Project(), "p", "l", AngleChange(0, 90))
    assert cmd.description == "Change rotation"


def test_every_command_undo_restores_document(populated: Project) -> None:
    page = populated.active_page
    commands = [
        AddLayerCommand(populated, page.id, TextLayer(id="new")),
        RemoveLayerCommand(populated, page.id, "img"),
        MoveLayerCommand(populated, page.id, "top", QPointF(300, 300), QPointF(1, 2)),
        ResizeLayerCommand(populated, page.id, "img", QRectF(10, 20, 100, 50), QRectF(1, 2, 3, 4)),
        EditTextCommand(populated, page.id, "txt", "Hello", "Bye"),
        ZIndexCommand(populated, page.id, "txt", 2, -5),
        ChangePropertyCommand(populated, page.id, "txt", BoldChange(False, True)),
    ]
    for cmd in commands:
        before = serialize(populated)
        cmd.execute()
        cmd.undo()
        assert serialize(populated) == before, cmd.description


def test_commands_on_deleted_page_are_noops(populated: Project) -> None:
    page = populated.active_page
    cmd = MoveLayerCommand(populated, "page_gone", "img", QPointF(0, 0), QPointF(5, 5))
    cmd.execute()
    cmd.undo()
    assert page.layer_by_id("img").x == 10
