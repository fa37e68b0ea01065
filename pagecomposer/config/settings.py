"""Persistent application settings backed by QSettings."""

from PyQt6.QtCore import QSettings

from pagecomposer.config.constants import (
    APP_NAME,
    ORG_NAME,
    SNAP_THRESHOLD,
    UNDO_LIMIT,
)


class AppSettings:
    """Thin wrapper around QSettings for typed access to editor preferences."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings(ORG_NAME, APP_NAME)

    # --- history ---

    def undo_limit(self) -> int:
        val = int(self._qs.value("history/undoLimit", UNDO_LIMIT))
        return val if val > 0 else UNDO_LIMIT

    def set_undo_limit(self, limit: int) -> None:
        self._qs.setValue("history/undoLimit", limit)

    # --- snapping ---

    def snap_threshold(self) -> int:
        val = self._qs.value("snap/threshold", SNAP_THRESHOLD)
        return int(val)

    def set_snap_threshold(self, threshold: int) -> None:
        self._qs.setValue("snap/threshold", threshold)

    def snapping_enabled(self) -> bool:
        val = self._qs.value("snap/enabled", True)
        # INI-backed settings hand booleans back as strings
        if isinstance(val, str):
            return val.lower() in ("true", "1")
        return bool(val)

    def set_snapping_enabled(self, enabled: bool) -> None:
        self._qs.setValue("snap/enabled", enabled)
