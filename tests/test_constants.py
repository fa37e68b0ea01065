"""Tests for application constants, shortcuts and settings."""

from pathlib import Path

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QKeySequence

from pagecomposer.config.constants import (
    APP_NAME,
    CARDINAL_GUIDE_TOLERANCE,
    CARDINAL_SNAP_TOLERANCE,
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    MIN_LAYER_SIZE,
    SNAP_THRESHOLD,
    UNDO_LIMIT,
)
from pagecomposer.config.settings import AppSettings
from pagecomposer.config.shortcuts import SHORTCUTS


def test_app_name() -> None:
    assert APP_NAME == "PageComposer"


def test_page_defaults() -> None:
    assert DEFAULT_PAGE_WIDTH == 900
    assert DEFAULT_PAGE_HEIGHT == 1600


def test_limits() -> None:
    assert UNDO_LIMIT == 400
    assert SNAP_THRESHOLD == 8
    assert MIN_LAYER_SIZE == 20
    assert CARDINAL_GUIDE_TOLERANCE < CARDINAL_SNAP_TOLERANCE


def test_shortcuts_parse() -> None:
    for action, sequences in SHORTCUTS.items():
        assert sequences, action
        for seq in sequences:
            assert not QKeySequence(seq).isEmpty(), f"{action}: {seq}"


def test_undo_redo_shortcuts() -> None:
    assert "Ctrl+Z" in SHORTCUTS["edit.undo"]
    assert "Ctrl+Shift+Z" in SHORTCUTS["edit.redo"]


def _settings(tmp_path: Path) -> AppSettings:
    return AppSettings(QSettings(str(tmp_path / "prefs.ini"), QSettings.Format.IniFormat))


def test_settings_defaults(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    assert settings.undo_limit() == UNDO_LIMIT
    assert settings.snap_threshold() == SNAP_THRESHOLD
    assert settings.snapping_enabled()


def test_settings_persist(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    settings.set_undo_limit(50)
    settings.set_snap_threshold(4)
    settings.set_snapping_enabled(False)
    reopened = _settings(tmp_path)
    assert reopened.undo_limit() == 50
    assert reopened.snap_threshold() == 4
    assert not reopened.snapping_enabled()


def test_non_positive_undo_limit_uses_default(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    settings.set_undo_limit(0)
    assert settings.undo_limit() == UNDO_LIMIT
