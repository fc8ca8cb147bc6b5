"""Mouse-driven tool state machine for the track plot.

The state machine translates press/move/release/wheel/leave events into
intents for the application shell (shift or replace the window, measure,
mark or clear the cursor, set the zero or ground reference). It never
changes the window itself; the shell applies intents and the plot
re-ranges afterwards.

It is deliberately free of Qt so the press/move/release contract can be
exercised with plain objects.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

from shared.models import TimeWindow, Tool

logger = logging.getLogger(__name__)

WHEEL_ZOOM_SCALE = 500.0


@dataclass(frozen=True)
class Pixel:
    x: float
    y: float


@dataclass(frozen=True)
class PlotRect:
    """The plotting rectangle in the same pixel space as mouse events."""

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must be non-negative")

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains_x(self, x: float) -> bool:
        return self.left <= x <= self.right

    def contains(self, pixel: Pixel) -> bool:
        return self.contains_x(pixel.x) and self.top <= pixel.y <= self.bottom

    def intersected(self, other: "PlotRect") -> Optional["PlotRect"]:
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return None
        return PlotRect(left, top, right - left, bottom - top)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    tool: Tool
    anchor: Pixel


DragState = Union[Idle, Dragging]
IDLE = Idle()


class PlotSurface(Protocol):
    """Geometry of the plot as currently laid out and ranged."""

    def plot_rect(self) -> PlotRect: ...

    def pixel_to_coord(self, x: float) -> float: ...

    def time_window(self) -> TimeWindow: ...


class IntentSink(Protocol):
    """Receiver of the requests the state machine makes of the shell."""

    def on_window_shift(self, delta: float) -> None: ...

    def on_window_replace(self, window: TimeWindow) -> None: ...

    def on_measure(self, start: float, end: float) -> None: ...

    def on_cursor_mark(self, coord: float) -> None: ...

    def on_cursor_clear(self) -> None: ...

    def on_set_zero(self, coord: float) -> None: ...

    def on_set_ground(self, coord: float) -> None: ...


def wheel_factor(delta_y: float) -> float:
    """Exponential zoom response; positive deltas (wheel forward) zoom in."""
    return math.exp(-float(delta_y) / WHEEL_ZOOM_SCALE)


class InteractionStateMachine:
    """Idle/Dragging state machine over a :class:`PlotSurface`.

    The tool is read from ``tool_source`` when a drag starts and stays
    fixed until release. Geometry is re-queried from the surface on every
    event because panning and zooming change it between events.
    """

    def __init__(
        self,
        surface: PlotSurface,
        tool_source: Callable[[], Tool],
        sink: IntentSink,
    ) -> None:
        self._surface = surface
        self._tool_source = tool_source
        self._sink = sink
        self._state: DragState = IDLE
        self._cursor: Optional[Pixel] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def cursor(self) -> Optional[Pixel]:
        return self._cursor

    @property
    def dragging(self) -> bool:
        return isinstance(self._state, Dragging)

    def _coord(self, pixel: Pixel) -> float:
        return self._surface.pixel_to_coord(pixel.x)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def press(self, pixel: Pixel) -> bool:
        """Start a drag if ``pixel`` is inside the plot; return whether it did."""
        self._cursor = pixel
        if not self._surface.plot_rect().contains(pixel):
            logger.debug("Press outside plot rect at (%.1f, %.1f) ignored", pixel.x, pixel.y)
            return False
        self._state = Dragging(Tool(self._tool_source()), pixel)
        return True

    def move(self, pixel: Pixel) -> None:
        self._cursor = pixel
        state = self._state

        if isinstance(state, Dragging) and state.tool is Tool.PAN:
            delta = self._coord(state.anchor) - self._coord(pixel)
            self._sink.on_window_shift(delta)
            state = self._state = Dragging(state.tool, pixel)

        if self._surface.plot_rect().contains(pixel):
            if isinstance(state, Dragging) and state.tool is Tool.MEASURE:
                self._sink.on_measure(self._coord(state.anchor), self._coord(pixel))
            else:
                self._sink.on_cursor_mark(self._coord(pixel))
        else:
            self._sink.on_cursor_clear()

    def release(self, pixel: Pixel) -> bool:
        """Finish a drag; return True when one was active (repaint needed)."""
        self._cursor = pixel
        state = self._state
        if not isinstance(state, Dragging):
            return False
        self._state = IDLE

        if state.tool is Tool.ZOOM:
            window = TimeWindow.between(self._coord(state.anchor), self._coord(pixel))
            if window.width > 0:
                self._sink.on_window_replace(window)
            else:
                logger.debug("Zero-width zoom selection ignored")
        elif state.tool is Tool.ZERO:
            self._sink.on_set_zero(self._coord(pixel))
        elif state.tool is Tool.GROUND:
            self._sink.on_set_ground(self._coord(pixel))
        return True

    def leave(self) -> None:
        """Pointer left the widget; an active drag survives until release."""
        if not self.dragging:
            self._cursor = None
        self._sink.on_cursor_clear()

    def wheel(self, pixel: Pixel, delta_y: float) -> bool:
        """Zoom about the coordinate under ``pixel``; return whether it did."""
        if not self._surface.plot_rect().contains(pixel):
            return False
        x = self._coord(pixel)
        window = self._surface.time_window().zoomed(x, wheel_factor(delta_y))
        self._sink.on_window_replace(window)
        return True


__all__ = [
    "DragState",
    "Dragging",
    "IDLE",
    "Idle",
    "IntentSink",
    "InteractionStateMachine",
    "Pixel",
    "PlotRect",
    "PlotSurface",
    "WHEEL_ZOOM_SCALE",
    "wheel_factor",
]
