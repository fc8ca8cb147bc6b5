from __future__ import annotations

from PySide6 import QtCore, QtGui

from core.overlay import BAND_COLOR, GUIDE_COLOR, OverlayScene

from .types import qcolor_from_rgb


def paint_overlay(painter: QtGui.QPainter, scene: OverlayScene) -> None:
    """Draw guide lines, crosshair and selection band with ``painter``."""
    if scene.empty:
        return
    painter.save()
    try:
        if scene.band is not None:
            band = scene.band
            painter.fillRect(
                QtCore.QRectF(band.left, band.top, band.width, band.height),
                qcolor_from_rgb(BAND_COLOR),
            )
        pen = QtGui.QPen(qcolor_from_rgb(GUIDE_COLOR))
        pen.setCosmetic(True)
        painter.setPen(pen)
        for line in scene.lines:
            painter.drawLine(QtCore.QLineF(line.x1, line.y1, line.x2, line.y2))
    finally:
        painter.restore()
