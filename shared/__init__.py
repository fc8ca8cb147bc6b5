"""
Shared data structures available to both the plot controller and the GUI.
"""

from .app_settings import AppSettings, AppSettingsStore, InMemoryPersistence, SettingsPersistence
from .models import Sample, TimeWindow, Tool, UnitSystem

__all__ = [
    "AppSettings",
    "AppSettingsStore",
    "InMemoryPersistence",
    "Sample",
    "SettingsPersistence",
    "TimeWindow",
    "Tool",
    "UnitSystem",
]
