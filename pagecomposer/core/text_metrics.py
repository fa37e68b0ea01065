"""Text measurement backends used by text layers to compute their box."""

from __future__ import annotations

from typing import Protocol

from PyQt6.QtGui import QFont, QFontMetricsF


class TextMetrics(Protocol):
    """Anything that can report the advance width of a string in a font."""

    def text_width(self, font: QFont, text: str) -> float: ...


class QtTextMetrics:
    """Measure with QFontMetricsF.  Requires a running QGuiApplication."""

    def text_width(self, font: QFont, text: str) -> float:
        return QFontMetricsF(font).horizontalAdvance(text)


_default_metrics: TextMetrics = QtTextMetrics()


def default_text_metrics() -> TextMetrics:
    return _default_metrics


def set_default_text_metrics(metrics: TextMetrics) -> TextMetrics:
    """Install *metrics* as the process default; return the previous one."""
    global _default_metrics
    previous = _default_metrics
    _default_metrics = metrics
    return previous
