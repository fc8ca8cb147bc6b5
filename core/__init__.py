"""Headless plot controller: metrics, ranging, interaction and overlay geometry."""

from .axes import AxisTable
from .interaction import (
    IDLE,
    Dragging,
    Idle,
    IntentSink,
    InteractionStateMachine,
    Pixel,
    PlotRect,
    PlotSurface,
)
from .measurement import Measurement, Readout, measure_span, readout_at
from .metrics import TIME, Metric, MetricRegistry, default_metrics, x_axis_metrics
from .overlay import OverlayScene, compute_overlay
from .ranging import AxisRangeEngine, SampleIndex, normalize_range, recompute_ranges

__all__ = [
    "AxisRangeEngine",
    "AxisTable",
    "Dragging",
    "IDLE",
    "Idle",
    "IntentSink",
    "InteractionStateMachine",
    "Measurement",
    "Metric",
    "MetricRegistry",
    "OverlayScene",
    "Pixel",
    "PlotRect",
    "PlotSurface",
    "Readout",
    "SampleIndex",
    "TIME",
    "compute_overlay",
    "default_metrics",
    "measure_span",
    "normalize_range",
    "readout_at",
    "recompute_ranges",
    "x_axis_metrics",
]
