"""QSettings-backed persistence adapter for application and metric settings.

This adapter provides persistent settings storage using Qt's QSettings,
allowing settings to persist across application restarts. This keeps
PySide6 dependencies out of the shared and core modules.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QSettings

from shared.app_settings import AppSettingsStore, SettingsPersistence


class QSettingsPersistence(SettingsPersistence):
    """QSettings-backed persistence for GUI mode.

    Keys containing ``/`` land in QSettings groups, so metric state is
    stored under ``plotValue/<key>/visible`` and ``plotValue/<key>/color``.
    """

    def __init__(
        self,
        organization: str = "TrackPlot",
        application: str = "TrackPlot",
        *,
        qsettings: Optional[QSettings] = None,
    ) -> None:
        self._qsettings = qsettings if qsettings is not None else QSettings(organization, application)

    def load(self) -> dict:
        """Load all settings from QSettings."""
        data = {}
        for name in self._qsettings.allKeys():
            val = self._qsettings.value(name)
            if val is not None:
                data[name] = val
        return data

    def save(self, data: dict) -> None:
        """Save settings to QSettings."""
        for key, val in data.items():
            if val is None:
                self._qsettings.remove(key)
            else:
                self._qsettings.setValue(key, val)
        self._qsettings.sync()


def create_gui_settings_store() -> AppSettingsStore:
    """Factory function to create a settings store with QSettings persistence."""
    return AppSettingsStore(persistence=QSettingsPersistence())


__all__ = ["QSettingsPersistence", "create_gui_settings_store"]
