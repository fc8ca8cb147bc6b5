"""Qt signal adapter for interaction intents.

The headless state machine reports intents through the ``IntentSink``
callbacks; this adapter re-emits them as Qt signals so the main window
can wire them with signal/slot connections. This keeps PySide6
dependencies out of the core module.
"""
from __future__ import annotations

from PySide6 import QtCore

from shared.models import TimeWindow


class InteractionSignals(QtCore.QObject):
    """Qt signals for plot interaction intents."""

    windowShiftRequested = QtCore.Signal(float)
    windowReplaceRequested = QtCore.Signal(object)  # TimeWindow
    measureRequested = QtCore.Signal(float, float)
    cursorMarked = QtCore.Signal(float)
    cursorCleared = QtCore.Signal()
    zeroRequested = QtCore.Signal(float)
    groundRequested = QtCore.Signal(float)

    def on_window_shift(self, delta: float) -> None:
        self.windowShiftRequested.emit(float(delta))

    def on_window_replace(self, window: TimeWindow) -> None:
        self.windowReplaceRequested.emit(window)

    def on_measure(self, start: float, end: float) -> None:
        self.measureRequested.emit(float(start), float(end))

    def on_cursor_mark(self, coord: float) -> None:
        self.cursorMarked.emit(float(coord))

    def on_cursor_clear(self) -> None:
        self.cursorCleared.emit()

    def on_set_zero(self, coord: float) -> None:
        self.zeroRequested.emit(float(coord))

    def on_set_ground(self, coord: float) -> None:
        self.groundRequested.emit(float(coord))


__all__ = ["InteractionSignals"]
