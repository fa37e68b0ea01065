"""Shared pytest fixtures."""

import os
from collections.abc import Iterator

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from pagecomposer.core.command_stack import HistoryManager
from pagecomposer.core.project import Project
from pagecomposer.core.text_metrics import set_default_text_metrics


class FixedWidthMetrics:
    """Every character is half the pixel size wide."""

    def text_width(self, font: QFont, text: str) -> float:
        return 0.5 * font.pixelSize() * len(text)


@pytest.fixture(autouse=True)
def fixed_metrics(qapp: QApplication) -> Iterator[FixedWidthMetrics]:
    """Make text boxes independent of the fonts installed on the machine."""
    metrics = FixedWidthMetrics()
    previous = set_default_text_metrics(metrics)
    yield metrics
    set_default_text_metrics(previous)


@pytest.fixture()
def project() -> Project:
    """A single 900x1600 page project."""
    return Project(title="Test")


@pytest.fixture()
def history() -> HistoryManager:
    return HistoryManager()
