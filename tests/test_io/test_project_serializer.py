"""Tests for project save/load."""

import json
import logging
from pathlib import Path

import pytest

from pagecomposer.core.page import Page
from pagecomposer.core.project import Project
from pagecomposer.io.project_serializer import (
    deserialize,
    deserialize_layer,
    load_project,
    save_project,
    serialize,
    serialize_layer,
)
from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.text_layer import TextAlign, TextLayer


@pytest.fixture()
def project() -> Project:
    page = Page(800, 600)
    page.add_layer(
        TextLayer(
            id="t1",
            x=120,
            y=40,
            z_index=2,
            angle=30,
            text="Title",
            font_family="serif",
            font_size=36,
            color="#123456",
            align=TextAlign.CENTER,
            bold=True,
        )
    )
    page.add_layer(
        ImageLayer(id="i1", x=10, y=20, width=300, height=150, opacity=0.5, image_source="a.png")
    )
    page.set_background_layer(ImageLayer(id="bg", image_source="bg.png"))
    second = Page()
    second.add_layer(TextLayer(id="t2", visible=False))
    return Project(title="Story", project_id="p1", created_at=1234, pages=[page, second],
                   active_page_index=1)


def test_serialize_schema(project: Project) -> None:
    data = serialize(project)
    assert data["id"] == "p1"
    assert data["title"] == "Story"
    assert data["createdAt"] == 1234
    assert data["activePageIndex"] == 1
    first = data["pages"][0]
    assert (first["w"], first["h"]) == (800, 600)
    types = [layer["__type"] for layer in first["layers"]]
    assert types == ["image", "image", "text"]
    text = first["layers"][2]
    assert text["fontFamily"] == "serif"
    assert text["align"] == "center"
    assert text["zIndex"] == 2
    assert text["angle"] == 30


def test_round_trip(project: Project) -> None:
    restored = deserialize(json.loads(json.dumps(serialize(project))))
    assert serialize(restored) == serialize(project)
    assert restored.active_page_index == 1
    page = restored.pages[0]
    assert page.background_layer is not None
    assert page.background_layer.id == "bg"
    assert page.layer_by_id("t1") == project.pages[0].layer_by_id("t1")


def test_text_defaults_when_missing() -> None:
    layer = deserialize_layer({"__type": "text", "id": "x"})
    assert isinstance(layer, TextLayer)
    assert layer.font_size == 48
    assert layer.color == "#ffffff"
    assert layer.font_family == "sans-serif"
    assert layer.align == TextAlign.LEFT
    assert layer.angle == 0


def test_unknown_align_falls_back_to_left(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        layer = deserialize_layer({"__type": "text", "align": "justify"})
    assert layer.align == TextAlign.LEFT
    assert "justify" in caplog.text


def test_unknown_layer_type_skipped(caplog: pytest.LogCaptureFixture) -> None:
    data = {
        "pages": [
            {"w": 100, "h": 100, "layers": [{"__type": "video", "id": "v"}, {"__type": "text"}]}
        ]
    }
    with caplog.at_level(logging.WARNING):
        project = deserialize(data)
    assert project.active_page.count == 1
    assert "video" in caplog.text


def test_missing_pages_yield_default_page() -> None:
    project = deserialize({"title": "Empty", "pages": []})
    assert project.page_count == 1
    assert (project.active_page.w, project.active_page.h) == (900, 1600)


def test_null_fields_read_as_defaults() -> None:
    data = {
        "pages": [
            {"w": None, "h": 500, "layers": None},
            {
                "layers": [
                    {"__type": "image", "x": None, "y": 40, "opacity": None, "zIndex": None},
                    {"__type": "text", "text": None, "fontSize": None, "color": None},
                ]
            },
        ]
    }
    project = deserialize(data)
    first, second = project.pages
    assert (first.w, first.h, first.count) == (900, 500, 0)
    image, text = second.layers
    assert isinstance(image, ImageLayer)
    assert (image.x, image.y, image.opacity, image.z_index) == (0, 40, 1.0, 0)
    assert isinstance(text, TextLayer)
    assert (text.text, text.font_size, text.color) == ("", 48, "#ffffff")


def test_image_layer_keeps_source_not_pixels() -> None:
    layer = ImageLayer(image_source="data:image/png;base64,AAAA")
    data = serialize_layer(layer)
    assert data["imageSource"] == "data:image/png;base64,AAAA"
    assert "image" not in data


def test_save_and_load_file(project: Project, tmp_path: Path) -> None:
    path = tmp_path / "story.json"
    save_project(project, path)
    assert path.exists()
    loaded = load_project(path)
    assert loaded.title == "Story"
    assert serialize(loaded) == serialize(project)
