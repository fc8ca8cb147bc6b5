"""Values under the cursor and statistics across a measured span."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from shared.models import TimeWindow

from .metrics import Metric
from .ranging import SampleIndex


@dataclass(frozen=True)
class ReadoutRow:
    metric: Metric
    value: float


@dataclass(frozen=True)
class Readout:
    """Visible metric values at the sample nearest the cursor."""

    index: int
    coord: float
    rows: Tuple[ReadoutRow, ...]


@dataclass(frozen=True)
class MeasureRow:
    metric: Metric
    start: float
    end: float
    change: float
    minimum: Optional[float]
    mean: Optional[float]
    maximum: Optional[float]


@dataclass(frozen=True)
class Measurement:
    start_coord: float
    end_coord: float
    rows: Tuple[MeasureRow, ...]

    @property
    def span(self) -> float:
        return self.end_coord - self.start_coord


def readout_at(index: SampleIndex, metrics: Iterable[Metric], coord: float) -> Optional[Readout]:
    i = index.nearest(coord)
    if i is None:
        return None
    rows = tuple(ReadoutRow(m, float(index.column(m)[i])) for m in metrics if m.visible)
    return Readout(i, float(index.x[i]), rows)


def measure_span(
    index: SampleIndex,
    metrics: Iterable[Metric],
    start: float,
    end: float,
) -> Optional[Measurement]:
    """Compare the samples nearest ``start`` and ``end``.

    ``start`` and ``end`` may come in either order (a drag to the left);
    change is always end minus start, while min/mean/max cover every
    sample between them.
    """
    i0 = index.nearest(start)
    i1 = index.nearest(end)
    if i0 is None or i1 is None:
        return None
    mask = index.mask(TimeWindow.between(start, end))

    rows = []
    for metric in metrics:
        if not metric.visible:
            continue
        col = index.column(metric)
        v0 = float(col[i0])
        v1 = float(col[i1])
        span_values = col[mask]
        span_values = span_values[np.isfinite(span_values)]
        if span_values.size:
            lo = float(span_values.min())
            mean = float(span_values.mean())
            hi = float(span_values.max())
        else:
            lo = mean = hi = None
        rows.append(MeasureRow(metric, v0, v1, v1 - v0, lo, mean, hi))

    return Measurement(float(index.x[i0]), float(index.x[i1]), tuple(rows))


__all__ = [
    "MeasureRow",
    "Measurement",
    "Readout",
    "ReadoutRow",
    "measure_span",
    "readout_at",
]
