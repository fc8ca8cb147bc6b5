from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Optional, Protocol

from .models import Tool, UnitSystem

logger = logging.getLogger(__name__)


class SettingsPersistence(Protocol):
    """Flat key/value storage backing application and metric settings.

    Keys may contain ``/`` to express groups (``plotValue/elevation/color``).
    """

    def load(self) -> dict: ...

    def save(self, data: dict) -> None: ...


class InMemoryPersistence:
    """Dictionary-backed persistence for headless use and tests."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})

    def load(self) -> dict:
        return dict(self._data)

    def save(self, data: dict) -> None:
        for key, val in data.items():
            if val is None:
                self._data.pop(key, None)
            else:
                self._data[key] = val


def coerce_bool(value: Any, default: bool) -> bool:
    """Decode a persisted boolean; QSettings INI files hand back strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False
    return default


@dataclass(frozen=True)
class AppSettings:
    units: str = UnitSystem.METRIC.value
    tool: str = Tool.PAN.value
    x_axis_key: str = "time"

    @property
    def unit_system(self) -> UnitSystem:
        return UnitSystem(self.units)

    @property
    def selected_tool(self) -> Tool:
        return Tool(self.tool)


class AppSettingsStore:
    """Thread-safe persistent settings store for application-wide preferences."""

    def __init__(self, persistence: Optional[SettingsPersistence] = None) -> None:
        self._lock = threading.Lock()
        self._subscribers: Dict[int, Callable[[AppSettings], None]] = {}
        self._next_token = 0
        self._persistence: SettingsPersistence = persistence or InMemoryPersistence()
        self._settings = self._load_settings()

    @property
    def persistence(self) -> SettingsPersistence:
        return self._persistence

    def _load_settings(self) -> AppSettings:
        data = self._persistence.load()

        units = data.get("units", AppSettings.units)
        try:
            units = UnitSystem(str(units)).value
        except ValueError:
            logger.debug("Ignoring unknown unit system %r", units)
            units = AppSettings.units

        tool = data.get("tool", AppSettings.tool)
        try:
            tool = Tool(str(tool)).value
        except ValueError:
            logger.debug("Ignoring unknown tool %r", tool)
            tool = AppSettings.tool

        x_axis_key = data.get("x_axis_key", AppSettings.x_axis_key)
        x_axis_key = str(x_axis_key) if x_axis_key else AppSettings.x_axis_key

        return AppSettings(units=units, tool=tool, x_axis_key=x_axis_key)

    def get(self) -> AppSettings:
        with self._lock:
            return self._settings

    def update(self, **kwargs) -> AppSettings:
        for key in ("units", "tool"):
            # Accept enum members as well as their string values
            if key in kwargs and isinstance(kwargs[key], (UnitSystem, Tool)):
                kwargs[key] = kwargs[key].value
        with self._lock:
            new_settings = replace(self._settings, **kwargs)
            UnitSystem(new_settings.units)
            Tool(new_settings.tool)
            self._settings = new_settings
            callbacks = list(self._subscribers.values())
            self._persist(new_settings)
        for callback in callbacks:
            try:
                callback(new_settings)
            except Exception as exc:
                logger.debug("App settings subscriber callback failed: %s", exc)
                continue
        return new_settings

    def subscribe(self, callback: Callable[[AppSettings], None], *, replay: bool = True) -> Callable[[], None]:
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._subscribers[token] = callback
            snapshot = self._settings
        if replay:
            callback(snapshot)

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(token, None)

        return unsubscribe

    def _persist(self, settings: AppSettings) -> None:
        self._persistence.save({f.name: getattr(settings, f.name) for f in fields(settings)})


__all__ = [
    "AppSettings",
    "AppSettingsStore",
    "InMemoryPersistence",
    "SettingsPersistence",
    "coerce_bool",
]
