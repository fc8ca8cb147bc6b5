from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
import pyqtgraph as pg

from core.metrics import Metric
from shared.models import UnitSystem

from .types import qcolor_from_rgb

logger = logging.getLogger(__name__)


class TraceRenderer:
    """
    Manages the visualization of a single metric's curve.
    Owns the curve, the view box it lives in and the value axis linked to
    that view box. The view box shares the plot's horizontal axis and has
    its own vertical range.
    """

    def __init__(self, plot_item: pg.PlotItem, metric: Metric, units: UnitSystem):
        self._plot_item = plot_item
        self._metric = metric

        self.view_box = pg.ViewBox(enableMenu=False)
        self.view_box.setMouseEnabled(x=False, y=False)
        self.view_box.disableAutoRange()
        self._plot_item.scene().addItem(self.view_box)
        self.view_box.setXLink(self._plot_item.vb)

        self.axis = pg.AxisItem("right")
        self.axis.enableAutoSIPrefix(False)
        self.axis.linkToView(self.view_box)

        self.curve = pg.PlotDataItem(connect="finite")
        try:
            self.curve.setDownsampling(auto=True, method="peak")
            self.curve.setClipToView(True)
        except AttributeError:
            logger.debug("Curve downsampling unavailable for %s", metric.key)
        self.view_box.addItem(self.curve)

        self.apply_style(units)
        self.update_geometry()

    @property
    def metric(self) -> Metric:
        return self._metric

    def apply_style(self, units: UnitSystem) -> None:
        """Colour the axis and curve and label the axis with the metric's title."""
        color = qcolor_from_rgb(self._metric.color)
        pen = pg.mkPen(color, width=1)
        self.curve.setPen(pen)
        self.axis.setPen(pen)
        self.axis.setTextPen(pen)
        self.axis.setLabel(text=self._metric.title(units), color=color.name())

    def update_geometry(self) -> None:
        """Keep the view box over the main plot area after a resize."""
        self.view_box.setGeometry(self._plot_item.vb.sceneBoundingRect())
        self.view_box.linkedViewChanged(self._plot_item.vb, self.view_box.XAxis)

    def set_data(self, x: np.ndarray, y: np.ndarray) -> None:
        self.curve.setData(x, y)

    def set_range(self, value_range: Tuple[float, float]) -> None:
        lo, hi = value_range
        self.view_box.setYRange(lo, hi, padding=0.0)

    def y_range(self) -> Tuple[float, float]:
        lo, hi = self.view_box.viewRange()[1]
        return (float(lo), float(hi))

    def cleanup(self) -> None:
        """Remove curve, view box and axis from the plot."""
        try:
            self.view_box.removeItem(self.curve)
            if self.axis.parentLayoutItem() is not None:
                self._plot_item.layout.removeItem(self.axis)
            scene = self._plot_item.scene()
            if scene is not None:
                scene.removeItem(self.axis)
                scene.removeItem(self.view_box)
        except RuntimeError as exc:
            logger.debug("Trace cleanup for %s failed: %s", self._metric.key, exc)
