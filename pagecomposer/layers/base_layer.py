"""Fields and identity rules shared by every layer variant."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


def new_layer_id() -> str:
    return f"layer_{uuid.uuid4().hex}"


@dataclass
class BaseLayer:
    """Common positional state for text and image layers.

    ``id`` is assigned once at construction and cannot be reassigned.
    ``angle`` rotates the layer about the center of its measured box.
    """

    id: str = field(default_factory=new_layer_id)
    x: float = 0.0
    y: float = 0.0
    z_index: int = 0
    visible: bool = True
    angle: float = 0.0

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("layer id is immutable")
        super().__setattr__(name, value)

    @property
    def type_name(self) -> str:
        return type(self).__name__
