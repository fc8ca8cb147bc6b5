"""Side table assigning one value-axis handle to each visible metric."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Generic, Iterable, Iterator, List, Tuple, TypeVar

from .metrics import Metric

logger = logging.getLogger(__name__)

H = TypeVar("H")


class AxisTable(Generic[H]):
    """Maps visible metrics to the axis handles the rendering layer owns.

    Handles are created when a metric becomes visible and released when it
    is hidden, so a metric has a handle exactly while it is visible.
    """

    def __init__(self) -> None:
        self._handles: Dict[Metric, H] = {}
        self._order: List[Metric] = []

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, metric: object) -> bool:
        return metric in self._handles

    def __iter__(self) -> Iterator[Tuple[Metric, H]]:
        return ((m, self._handles[m]) for m in self._order)

    @property
    def order(self) -> Tuple[Metric, ...]:
        return tuple(self._order)

    def axis_for(self, metric: Metric) -> H:
        try:
            return self._handles[metric]
        except KeyError:
            raise KeyError(f"no axis assigned to {metric.key!r}; is it visible?") from None

    def position(self, metric: Metric) -> int:
        """Stacking position of ``metric`` among the assigned axes."""
        self.axis_for(metric)
        return self._order.index(metric)

    def sync(
        self,
        metrics: Iterable[Metric],
        create: Callable[[Metric], H],
        release: Callable[[Metric, H], None],
    ) -> Tuple[Metric, ...]:
        """Bring the table in line with the visibility flags of ``metrics``.

        ``metrics`` must be given in registry order; the returned tuple is
        the visible subset in that order.
        """
        metrics = list(metrics)
        visible = [m for m in metrics if m.visible]
        visible_set = set(visible)

        for metric in list(self._order):
            if metric not in visible_set:
                handle = self._handles.pop(metric)
                self._order.remove(metric)
                logger.debug("Releasing axis for %s", metric.key)
                release(metric, handle)

        for metric in visible:
            if metric not in self._handles:
                logger.debug("Creating axis for %s", metric.key)
                self._handles[metric] = create(metric)

        self._order = visible
        return tuple(visible)

    def clear(self, release: Callable[[Metric, H], None]) -> None:
        for metric in list(self._order):
            release(metric, self._handles.pop(metric))
        self._order = []


__all__ = ["AxisTable"]
