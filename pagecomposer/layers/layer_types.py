"""The closed set of layer variants."""

from typing import Union

from pagecomposer.layers.image_layer import ImageLayer
from pagecomposer.layers.text_layer import TextLayer

Layer = Union[TextLayer, ImageLayer]
