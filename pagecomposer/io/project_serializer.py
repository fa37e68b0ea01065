"""ProjectSerializer — convert projects to and from plain JSON documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from pagecomposer.config.constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    DEFAULT_TEXT_COLOR,
)
from pagecomposer.core.page import Page
from pagecomposer.core.project import Project
from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.layer_types import Layer
from pagecomposer.layers.text_layer import TextAlign, TextLayer

log = logging.getLogger(__name__)


# --- layers ---


def _common_fields(layer: Layer) -> dict[str, Any]:
    return {
        "id": layer.id,
        "x": layer.x,
        "y": layer.y,
        "zIndex": layer.z_index,
        "visible": layer.visible,
        "angle": layer.angle,
    }


def serialize_layer(layer: Layer) -> dict[str, Any]:
    match layer:
        case TextLayer():
            return {
                "__type": "text",
                **_common_fields(layer),
                "text": layer.text,
                "fontFamily": layer.font_family,
                "fontSize": layer.font_size,
                "color": layer.color,
                "align": layer.align.value,
                "bold": layer.bold,
                "italic": layer.italic,
            }
        case ImageLayer():
            return {
                "__type": "image",
                **_common_fields(layer),
                "imageSource": layer.image_source,
                "width": layer.width,
                "height": layer.height,
                "opacity": layer.opacity,
                "isBackground": layer.is_background,
            }
    raise TypeError(f"cannot serialize {type(layer).__name__}")


def _parse_align(value: Any) -> TextAlign:
    try:
        return TextAlign(value)
    except ValueError:
        log.warning("Unknown text alignment %r, using left", value)
        return TextAlign.LEFT


def _number(data: dict[str, Any], key: str, default: float) -> float:
    """Read a numeric field; missing or null values give *default*."""
    value = data.get(key)
    return default if value is None else float(value)


def _text_from_dict(data: dict[str, Any]) -> TextLayer:
    kwargs: dict[str, Any] = {}
    if "id" in data:
        kwargs["id"] = data["id"]
    return TextLayer(
        x=_number(data, "x", 0),
        y=_number(data, "y", 0),
        z_index=int(_number(data, "zIndex", 0)),
        visible=bool(data.get("visible", True)),
        angle=_number(data, "angle", 0),
        text=str(data.get("text") or ""),
        font_family=data.get("fontFamily") or DEFAULT_FONT_FAMILY,
        font_size=int(_number(data, "fontSize", DEFAULT_FONT_SIZE)),
        color=data.get("color") or DEFAULT_TEXT_COLOR,
        align=_parse_align(data.get("align", TextAlign.LEFT.value)),
        bold=bool(data.get("bold", False)),
        italic=bool(data.get("italic", False)),
        **kwargs,
    )


def _image_from_dict(data: dict[str, Any]) -> ImageLayer:
    kwargs: dict[str, Any] = {}
    if "id" in data:
        kwargs["id"] = data["id"]
    return ImageLayer(
        x=_number(data, "x", 0),
        y=_number(data, "y", 0),
        z_index=int(_number(data, "zIndex", 0)),
        visible=bool(data.get("visible", True)),
        angle=_number(data, "angle", 0),
        image_source=data.get("imageSource"),
        width=_number(data, "width", DEFAULT_IMAGE_WIDTH),
        height=_number(data, "height", DEFAULT_IMAGE_HEIGHT),
        opacity=_number(data, "opacity", 1.0),
        is_background=bool(data.get("isBackground", False)),
        **kwargs,
    )


LAYER_REGISTRY: dict[str, Callable[[dict[str, Any]], Layer]] = {
    "text": _text_from_dict,
    "image": _image_from_dict,
}


def deserialize_layer(data: dict[str, Any]) -> Layer | None:
    """Build a layer from its dict, or return None for an unknown type."""
    factory = LAYER_REGISTRY.get(data.get("__type", ""))
    if factory is None:
        log.warning("Skipping layer with unknown type %r", data.get("__type"))
        return None
    return factory(data)


# --- pages / projects ---


def serialize(project: Project) -> dict[str, Any]:
    """Return a JSON-compatible dict describing *project*."""
    return {
        "id": project.id,
        "title": project.title,
        "createdAt": project.created_at,
        "activePageIndex": project.active_page_index,
        "pages": [
            {
                "id": page.id,
                "w": page.w,
                "h": page.h,
                "layers": [serialize_layer(layer) for layer in page.layers],
            }
            for page in project.pages
        ],
    }


def _page_from_dict(data: dict[str, Any]) -> Page:
    page = Page(
        w=_number(data, "w", DEFAULT_PAGE_WIDTH),
        h=_number(data, "h", DEFAULT_PAGE_HEIGHT),
        page_id=data.get("id"),
    )
    for layer_data in data.get("layers") or []:
        layer = deserialize_layer(layer_data)
        if layer is not None:
            page.add_layer(layer)
    return page


def deserialize(data: dict[str, Any]) -> Project:
    """Rebuild a project from :func:`serialize` output.

    Decoded pixels are not part of the document; callers re-request
    decoding from each image layer's ``image_source``.
    """
    pages = [_page_from_dict(p) for p in data.get("pages") or []]
    return Project(
        title=data.get("title", ""),
        project_id=data.get("id"),
        created_at=data.get("createdAt"),
        pages=pages,
        active_page_index=int(data.get("activePageIndex", 0)),
    )


def save_project(project: Project, path: Path) -> None:
    """Write *project* to *path* as pretty-printed JSON."""
    Path(path).write_text(json.dumps(serialize(project), indent=2), encoding="utf-8")


def load_project(path: Path) -> Project:
    """Read a project written by :func:`save_project`."""
    return deserialize(json.loads(Path(path).read_text(encoding="utf-8")))
