"""ImageLoader — deferred decoding of image layer sources."""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtGui import QImage

from pagecomposer.layers.image_layer import ImageLayer

log = logging.getLogger(__name__)


def decode_image_source(source: str) -> QImage:
    """Decode a ``data:`` URL or a file path into a QImage.

    Returns a null QImage when the source cannot be decoded.
    """
    if source.startswith("data:"):
        header, _, payload = source.partition(",")
        try:
            if header.endswith(";base64"):
                data = base64.b64decode(payload, validate=True)
            else:
                data = payload.encode()
        except (binascii.Error, ValueError):
            return QImage()
        image = QImage()
        image.loadFromData(data)
        return image
    path = Path(source)
    if not path.is_file():
        return QImage()
    return QImage(str(path))


class ImageLoader(QObject):
    """Decodes image sources on a later event-loop turn.

    :meth:`request` returns immediately.  When decoding finishes the
    pixels are attached to the layer and ``image_ready`` is emitted with
    the layer id.  A request superseded by a newer one for the same layer
    is dropped.  Listeners must tolerate ids of layers deleted meanwhile.

    Signals
    -------
    image_ready(str)
        Emitted with the id of the layer whose image finished decoding.
    image_failed(str)
        Emitted with the layer id when the source could not be decoded.
    """

    image_ready = pyqtSignal(str)
    image_failed = pyqtSignal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending: dict[str, str] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request(self, layer: ImageLayer, source: str) -> None:
        """Schedule decoding of *source* for *layer*."""
        layer.image_source = source
        self._pending[layer.id] = source
        QTimer.singleShot(0, lambda: self._decode(layer, source))

    def _decode(self, layer: ImageLayer, source: str) -> None:
        if self._pending.get(layer.id) != source:
            log.debug("Dropping superseded decode for layer %s", layer.id)
            return
        del self._pending[layer.id]
        image = decode_image_source(source)
        if image.isNull():
            log.warning("Could not decode image for layer %s", layer.id)
            self.image_failed.emit(layer.id)
            return
        layer.apply_decoded_image(image)
        self.image_ready.emit(layer.id)
