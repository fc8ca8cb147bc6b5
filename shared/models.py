from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class UnitSystem(str, Enum):
    """Unit system passed explicitly into every value and title computation."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Tool(str, Enum):
    """Interaction mode governing what a mouse drag on the plot means."""

    PAN = "pan"
    ZOOM = "zoom"
    MEASURE = "measure"
    ZERO = "zero"
    GROUND = "ground"


# ----------------------------
# Track samples
# ----------------------------

@dataclass(frozen=True)
class Sample:
    """One timestamped observation from a recorded track.

    Raw receiver fields come first; the remaining fields are derived once
    over the whole track (elevation above ground, cumulative distances,
    curvature, acceleration and aerodynamic coefficients).
    """

    t: float
    lat: float = 0.0
    lon: float = 0.0
    h_msl: float = 0.0
    vel_n: float = 0.0
    vel_e: float = 0.0
    vel_d: float = 0.0
    h_acc: float = 0.0
    v_acc: float = 0.0
    s_acc: float = 0.0
    num_sv: int = 0
    z: float = 0.0
    dist_2d: float = 0.0
    dist_3d: float = 0.0
    curv: float = 0.0
    accel: float = 0.0
    lift: float = 0.0
    drag: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.t):
            raise ValueError("t must be finite")
        if self.num_sv < 0:
            raise ValueError("num_sv must be non-negative")


# ----------------------------
# Horizontal axis window
# ----------------------------

@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [lower, upper] bounds currently shown on the shared axis."""

    lower: float
    upper: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lower) and math.isfinite(self.upper)):
            raise ValueError("window bounds must be finite")
        if self.lower > self.upper:
            raise ValueError("lower must not exceed upper")
        object.__setattr__(self, "lower", float(self.lower))
        object.__setattr__(self, "upper", float(self.upper))

    @classmethod
    def between(cls, a: float, b: float) -> "TimeWindow":
        """Build a window from two coordinates given in either order."""
        return cls(min(a, b), max(a, b))

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def shifted(self, delta: float) -> "TimeWindow":
        return TimeWindow(self.lower + delta, self.upper + delta)

    def zoomed(self, about: float, factor: float) -> "TimeWindow":
        """Scale the window about ``about``; ``factor`` < 1 zooms in."""
        if not factor > 0:
            raise ValueError("factor must be positive")
        return TimeWindow(
            about + (self.lower - about) * factor,
            about + (self.upper - about) * factor,
        )


__all__ = ["Sample", "TimeWindow", "Tool", "UnitSystem"]
