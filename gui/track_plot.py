from __future__ import annotations

import logging
from typing import Callable, Optional

import pyqtgraph as pg
from PySide6 import QtCore, QtGui

from core.interaction import InteractionStateMachine, Pixel, PlotRect
from core.overlay import compute_overlay
from shared.models import TimeWindow, Tool

from .interaction_signals import InteractionSignals
from .overlay_renderer import paint_overlay

logger = logging.getLogger(__name__)


class TrackPlot(pg.PlotWidget):
    """
    Track plot surface with:
      • One shared horizontal axis, value axes added by PlotManager
      • Mouse tools (pan, zoom, measure, zero, ground) via the state machine
      • Crosshair and selection band painted over the curves

    Mouse positions are taken in scene coordinates, the same space as the
    view box geometry and the overlay painter.
    """

    def __init__(self, tool_source: Callable[[], Tool], parent=None):
        super().__init__(parent, enableMenu=False)
        self.setBackground("w")
        self.setMouseTracking(True)
        try:
            self.hideButtons()
        except Exception as exc:
            logger.debug("Failed to hide plot buttons: %s", exc)

        plot_item = self.getPlotItem()
        plot_item.setMenuEnabled(False)
        plot_item.hideAxis("left")
        plot_item.showGrid(x=True, y=False, alpha=0.25)
        plot_item.vb.setMouseEnabled(x=False, y=False)  # we manage dragging
        plot_item.vb.disableAutoRange()
        bottom = plot_item.getAxis("bottom")
        bottom.setPen(pg.mkPen("k"))
        bottom.setTextPen(pg.mkPen("k"))

        self.zero_line = pg.InfiniteLine(
            angle=90,
            pen=pg.mkPen((0, 0, 139), style=QtCore.Qt.DashLine),
            movable=False,
            label="Zero",
            labelOpts={"position": 0.95, "color": (0, 0, 139)},
        )
        self.zero_line.setVisible(False)
        self.addItem(self.zero_line, ignoreBounds=True)

        self.ground_line = pg.InfiniteLine(
            angle=90,
            pen=pg.mkPen((139, 69, 19), style=QtCore.Qt.DashLine),
            movable=False,
            label="Ground",
            labelOpts={"position": 0.05, "color": (139, 69, 19)},
        )
        self.ground_line.setVisible(False)
        self.addItem(self.ground_line, ignoreBounds=True)

        self.signals = InteractionSignals(self)
        self._machine = InteractionStateMachine(self, tool_source, self.signals)

    @property
    def machine(self) -> InteractionStateMachine:
        return self._machine

    # --- plot surface ---
    def plot_rect(self) -> PlotRect:
        rect = self.getPlotItem().vb.sceneBoundingRect()
        return PlotRect(rect.left(), rect.top(), rect.width(), rect.height())

    def pixel_to_coord(self, x: float) -> float:
        vb = self.getPlotItem().vb
        y = vb.sceneBoundingRect().center().y()
        return float(vb.mapSceneToView(QtCore.QPointF(x, y)).x())

    def coord_to_pixel(self, coord: float) -> float:
        vb = self.getPlotItem().vb
        return float(vb.mapViewToScene(QtCore.QPointF(coord, 0.0)).x())

    def time_window(self) -> TimeWindow:
        lo, hi = self.getPlotItem().vb.viewRange()[0]
        return TimeWindow.between(float(lo), float(hi))

    def set_time_window(self, window: TimeWindow) -> None:
        self.getPlotItem().vb.setXRange(window.lower, window.upper, padding=0.0)

    # --- reference markers ---
    def set_zero_marker(self, coord: Optional[float]) -> None:
        if coord is not None:
            self.zero_line.setValue(coord)
        self.zero_line.setVisible(coord is not None)

    def set_ground_marker(self, coord: Optional[float]) -> None:
        if coord is not None:
            self.ground_line.setValue(coord)
        self.ground_line.setVisible(coord is not None)

    # --- mouse interaction ---
    def _scene_pixel(self, ev) -> Pixel:
        pos = self.mapToScene(ev.position().toPoint())
        return Pixel(float(pos.x()), float(pos.y()))

    def mousePressEvent(self, ev):
        if ev.button() == QtCore.Qt.LeftButton:
            self._machine.press(self._scene_pixel(ev))
            self.viewport().update()
        super().mousePressEvent(ev)

    def mouseMoveEvent(self, ev):
        self._machine.move(self._scene_pixel(ev))
        self.viewport().update()
        super().mouseMoveEvent(ev)

    def mouseReleaseEvent(self, ev):
        if ev.button() == QtCore.Qt.LeftButton and self._machine.release(self._scene_pixel(ev)):
            self.viewport().update()
        super().mouseReleaseEvent(ev)

    def wheelEvent(self, ev):
        pos = self.mapToScene(ev.position().toPoint())
        if self._machine.wheel(Pixel(float(pos.x()), float(pos.y())), ev.angleDelta().y()):
            ev.accept()
        else:
            super().wheelEvent(ev)

    def leaveEvent(self, ev):
        self._machine.leave()
        self.viewport().update()
        super().leaveEvent(ev)

    def drawForeground(self, painter: QtGui.QPainter, rect) -> None:
        super().drawForeground(painter, rect)
        scene = compute_overlay(self._machine.state, self._machine.cursor, self.plot_rect())
        paint_overlay(painter, scene)
