"""GUI type helpers shared by the plot widgets and the main window.

Colours travel through the headless core as RGB tuples; this module
converts them to and from ``QColor`` and holds the tool labels shown in
the tool bar.
"""
from __future__ import annotations

from typing import Dict, Sequence

from PySide6 import QtGui

from shared.models import Tool, UnitSystem

TOOL_LABELS: Dict[Tool, str] = {
    Tool.PAN: "Pan",
    Tool.ZOOM: "Zoom",
    Tool.MEASURE: "Measure",
    Tool.ZERO: "Set Zero",
    Tool.GROUND: "Set Ground",
}

TOOL_SHORTCUTS: Dict[Tool, str] = {
    Tool.PAN: "P",
    Tool.ZOOM: "Z",
    Tool.MEASURE: "M",
    Tool.ZERO: "O",
    Tool.GROUND: "G",
}

UNIT_LABELS: Dict[UnitSystem, str] = {
    UnitSystem.METRIC: "Metric",
    UnitSystem.IMPERIAL: "Imperial",
}


def qcolor_from_rgb(rgb: Sequence[int], alpha: int = 255) -> QtGui.QColor:
    if len(rgb) == 4:
        r, g, b, alpha = (int(c) for c in rgb)
    else:
        r, g, b = (int(c) for c in rgb)
    return QtGui.QColor(r, g, b, alpha)


def rgb_from_qcolor(color: QtGui.QColor) -> tuple[int, int, int]:
    return (color.red(), color.green(), color.blue())
