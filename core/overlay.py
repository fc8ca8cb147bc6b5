"""Geometry of the interaction overlay drawn on top of the curves."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from shared.models import Tool

from .interaction import DragState, Dragging, Pixel, PlotRect

GUIDE_COLOR = (0, 0, 0, 255)
BAND_COLOR = (181, 217, 42, 64)

BAND_TOOLS = (Tool.ZOOM, Tool.MEASURE)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class OverlayScene:
    lines: Tuple[Line, ...] = ()
    band: Optional[PlotRect] = None

    @property
    def empty(self) -> bool:
        return not self.lines and self.band is None


def _vertical(x: float, rect: PlotRect) -> Line:
    return Line(x, rect.top, x, rect.bottom)


def compute_overlay(state: DragState, cursor: Optional[Pixel], rect: PlotRect) -> OverlayScene:
    """Lines and shaded band for the current drag state and cursor.

    A zoom or measure drag shows guide lines at the anchor and (when it is
    horizontally inside the plot) the cursor, with a band between them.
    Otherwise a crosshair follows a cursor that is inside the plot.
    """
    if isinstance(state, Dragging) and state.tool in BAND_TOOLS:
        lines = [_vertical(state.anchor.x, rect)]
        band = None
        if cursor is not None:
            if rect.contains_x(cursor.x):
                lines.append(_vertical(cursor.x, rect))
            left = min(state.anchor.x, cursor.x)
            shading = PlotRect(left, rect.top, abs(state.anchor.x - cursor.x), rect.height)
            band = shading.intersected(rect)
        return OverlayScene(tuple(lines), band)

    if cursor is not None and rect.contains(cursor):
        return OverlayScene((
            _vertical(cursor.x, rect),
            Line(rect.left, cursor.y, rect.right, cursor.y),
        ))

    return OverlayScene()


__all__ = ["BAND_COLOR", "GUIDE_COLOR", "Line", "OverlayScene", "compute_overlay"]
