"""Per-metric value ranges for the visible horizontal window."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from shared.models import Sample, TimeWindow, UnitSystem

from .metrics import TIME, Metric

logger = logging.getLogger(__name__)

ValueRange = Tuple[float, float]

DEGENERATE_PAD_FRACTION = 0.05
DEGENERATE_PAD_ZERO = 0.5


def normalize_range(lower: float, upper: float) -> ValueRange:
    """Return a range safe to hand to an axis: ordered and never zero-width."""
    lo, hi = (float(lower), float(upper)) if lower <= upper else (float(upper), float(lower))
    if hi > lo:
        return (lo, hi)
    pad = abs(lo) * DEGENERATE_PAD_FRACTION or DEGENERATE_PAD_ZERO
    return (lo - pad, hi + pad)


class SampleIndex:
    """Column cache over a sample sequence for one unit system and axis metric.

    The horizontal coordinate column is computed up front; value columns
    are computed the first time a metric is asked for and kept, so
    repeated range scans while panning cost one mask plus a min/max.
    """

    def __init__(self, samples: Sequence[Sample], units: UnitSystem, x_metric: Metric = TIME) -> None:
        self._samples = samples
        self._units = UnitSystem(units)
        self._x_metric = x_metric
        x = np.fromiter(
            (x_metric.value(s, self._units) for s in samples),
            dtype=np.float64,
            count=len(samples),
        )
        x.setflags(write=False)
        self._x = x
        self._columns: Dict[Metric, np.ndarray] = {}

    def __len__(self) -> int:
        return self._x.size

    @property
    def units(self) -> UnitSystem:
        return self._units

    @property
    def x_metric(self) -> Metric:
        return self._x_metric

    @property
    def x(self) -> np.ndarray:
        return self._x

    def sample(self, index: int) -> Sample:
        return self._samples[index]

    def column(self, metric: Metric) -> np.ndarray:
        col = self._columns.get(metric)
        if col is None:
            col = np.fromiter(
                (metric.value(s, self._units) for s in self._samples),
                dtype=np.float64,
                count=len(self._samples),
            )
            col.setflags(write=False)
            self._columns[metric] = col
        return col

    def mask(self, window: TimeWindow) -> np.ndarray:
        return (self._x >= window.lower) & (self._x <= window.upper)

    def range_of(self, metric: Metric, mask: np.ndarray) -> Optional[ValueRange]:
        if not mask.any():
            return None
        values = self.column(metric)[mask]
        values = values[np.isfinite(values)]
        if values.size == 0:
            return None
        return (float(values.min()), float(values.max()))

    def nearest(self, coord: float) -> Optional[int]:
        """Index of the sample whose horizontal coordinate is closest to ``coord``."""
        if self._x.size == 0:
            return None
        return int(np.argmin(np.abs(self._x - coord)))

    def extent(self) -> Optional[TimeWindow]:
        finite = self._x[np.isfinite(self._x)]
        if finite.size == 0:
            return None
        return TimeWindow(float(finite.min()), float(finite.max()))

    def ranges(self, window: TimeWindow, metrics: Iterable[Metric]) -> Dict[Metric, Optional[ValueRange]]:
        mask = self.mask(window)
        return {m: self.range_of(m, mask) for m in metrics if m.visible}


def recompute_ranges(
    window: TimeWindow,
    samples: Sequence[Sample],
    metrics: Iterable[Metric],
    units: UnitSystem,
    x_metric: Metric = TIME,
) -> Dict[Metric, Optional[ValueRange]]:
    """Min/max of every visible metric over the samples inside ``window``.

    The result keeps the order of ``metrics``; a metric with no sample in
    the window maps to ``None`` and its axis should be left alone.
    """
    return SampleIndex(samples, units, x_metric).ranges(window, metrics)


class AxisRangeEngine:
    """Holds the current sample index and answers range queries for it."""

    def __init__(self, units: UnitSystem = UnitSystem.METRIC, x_metric: Metric = TIME) -> None:
        self._samples: Sequence[Sample] = ()
        self._units = UnitSystem(units)
        self._x_metric = x_metric
        self._index: Optional[SampleIndex] = None

    @property
    def samples(self) -> Sequence[Sample]:
        return self._samples

    @property
    def units(self) -> UnitSystem:
        return self._units

    @property
    def x_metric(self) -> Metric:
        return self._x_metric

    @property
    def index(self) -> SampleIndex:
        if self._index is None:
            self._index = SampleIndex(self._samples, self._units, self._x_metric)
            logger.debug(
                "Built sample index: %d samples, units=%s, x=%s",
                len(self._index), self._units.value, self._x_metric.key,
            )
        return self._index

    def set_samples(self, samples: Sequence[Sample]) -> None:
        self._samples = tuple(samples)
        self._index = None

    def set_units(self, units: UnitSystem) -> None:
        units = UnitSystem(units)
        if units != self._units:
            self._units = units
            self._index = None

    def set_x_metric(self, x_metric: Metric) -> None:
        if x_metric is not self._x_metric:
            self._x_metric = x_metric
            self._index = None

    def recompute(self, window: TimeWindow, metrics: Iterable[Metric]) -> Dict[Metric, Optional[ValueRange]]:
        return self.index.ranges(window, metrics)

    def axis_ranges(self, window: TimeWindow, metrics: Iterable[Metric]) -> Dict[Metric, ValueRange]:
        """Normalised ranges for metrics that have data in ``window``."""
        return {
            metric: normalize_range(*rng)
            for metric, rng in self.recompute(window, metrics).items()
            if rng is not None
        }

    def data_extent(self) -> Optional[TimeWindow]:
        return self.index.extent()


__all__ = [
    "AxisRangeEngine",
    "SampleIndex",
    "ValueRange",
    "normalize_range",
    "recompute_ranges",
]
