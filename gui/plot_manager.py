"""PlotManager - Manages metric curves, value axes and auto-ranging.

Keeps the trace renderers in step with metric visibility, feeds them the
sample columns and re-ranges every visible axis whenever the horizontal
window changes.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6 import QtCore

from core.axes import AxisTable
from core.metrics import Metric, MetricRegistry
from core.ranging import AxisRangeEngine, SampleIndex, normalize_range
from shared.models import Sample, TimeWindow, UnitSystem

from .trace_renderer import TraceRenderer
from .track_plot import TrackPlot

logger = logging.getLogger(__name__)

# First layout column free for extra axes in a PlotItem's grid
# (0: left axis, 1: view box, 2: right axis)
FIRST_AXIS_COLUMN = 3
AXIS_ROW = 2


class PlotManager(QtCore.QObject):
    """Manages trace renderers, their axes and per-metric ranges.

    Responsibilities:
    - Create a TraceRenderer when a metric becomes visible, drop it on hide
    - Stack value axes in registry order
    - Recompute value ranges for the visible window
    - Restyle axes when units, colours or the horizontal metric change
    """

    rangesUpdated = QtCore.Signal()

    def __init__(
        self,
        plot: TrackPlot,
        metrics: MetricRegistry,
        x_metric: Metric,
        units: UnitSystem = UnitSystem.METRIC,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._plot = plot
        self._metrics = metrics
        self._engine = AxisRangeEngine(units=units, x_metric=x_metric)
        self._axes: AxisTable[TraceRenderer] = AxisTable()

        plot_item = self._plot.getPlotItem()
        plot_item.vb.sigResized.connect(self._update_views)
        plot_item.vb.sigXRangeChanged.connect(self._on_x_range_changed)
        self._update_bottom_label()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def engine(self) -> AxisRangeEngine:
        return self._engine

    @property
    def index(self) -> SampleIndex:
        return self._engine.index

    @property
    def axes(self) -> AxisTable[TraceRenderer]:
        return self._axes

    @property
    def units(self) -> UnitSystem:
        return self._engine.units

    @property
    def x_metric(self) -> Metric:
        return self._engine.x_metric

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_samples(self, samples: Sequence[Sample]) -> None:
        self._engine.set_samples(samples)
        logger.debug("Plotting %d samples", len(self._engine.samples))
        self._refresh_curves()
        self.zoom_to_extent()

    def set_units(self, units: UnitSystem) -> None:
        self._engine.set_units(units)
        self._update_bottom_label()
        self.restyle()
        self._refresh_curves()
        self.zoom_to_extent()

    def set_x_metric(self, x_metric: Metric) -> None:
        self._engine.set_x_metric(x_metric)
        self._update_bottom_label()
        self._refresh_curves()
        self.zoom_to_extent()

    def zoom_to_extent(self) -> None:
        """Show the whole track on the horizontal axis."""
        extent = self._engine.data_extent()
        if extent is None:
            self.update_ranges()
            return
        lo, hi = normalize_range(extent.lower, extent.upper)
        self._plot.set_time_window(TimeWindow(lo, hi))
        self.update_ranges()

    # -------------------------------------------------------------------------
    # Renderer management
    # -------------------------------------------------------------------------

    def sync_metrics(self) -> None:
        """Synchronise renderers with metric visibility, then re-range."""
        before = set(self._axes.order)
        self._axes.sync(self._metrics, self._create_renderer, self._release_renderer)
        self._relayout_axes()
        for metric, renderer in self._axes:
            if metric not in before:
                self._load_curve(metric, renderer)
        self.update_ranges()

    def restyle(self, metric: Optional[Metric] = None) -> None:
        """Reapply colour and title to one metric's axis, or to all of them."""
        for candidate, renderer in self._axes:
            if metric is None or candidate is metric:
                renderer.apply_style(self.units)

    def _create_renderer(self, metric: Metric) -> TraceRenderer:
        return TraceRenderer(self._plot.getPlotItem(), metric, self.units)

    def _release_renderer(self, metric: Metric, renderer: TraceRenderer) -> None:
        renderer.cleanup()

    def _relayout_axes(self) -> None:
        layout = self._plot.getPlotItem().layout
        for _, renderer in self._axes:
            if renderer.axis.parentLayoutItem() is not None:
                layout.removeItem(renderer.axis)
        for position, (_, renderer) in enumerate(self._axes):
            layout.addItem(renderer.axis, AXIS_ROW, FIRST_AXIS_COLUMN + position)
        self._update_views()

    def _load_curve(self, metric: Metric, renderer: TraceRenderer) -> None:
        index = self._engine.index
        renderer.set_data(index.x, index.column(metric))

    def _refresh_curves(self) -> None:
        for metric, renderer in self._axes:
            self._load_curve(metric, renderer)

    # -------------------------------------------------------------------------
    # Ranging
    # -------------------------------------------------------------------------

    def update_ranges(self) -> None:
        """Fit every visible axis to its data inside the current window.

        Axes of metrics with no samples in the window keep their range.
        """
        window = self._plot.time_window()
        for metric, value_range in self._engine.axis_ranges(window, self._axes.order).items():
            self._axes.axis_for(metric).set_range(value_range)
        self.rangesUpdated.emit()

    def _on_x_range_changed(self, *_args) -> None:
        self.update_ranges()

    def _update_views(self, *_args) -> None:
        for _, renderer in self._axes:
            renderer.update_geometry()

    def _update_bottom_label(self) -> None:
        self._plot.setLabel("bottom", self.x_metric.title(self.units))
