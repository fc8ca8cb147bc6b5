"""Derived-metric catalogue.

A :class:`Metric` turns a raw :class:`~shared.models.Sample` into a plotted
scalar with a unit-aware title, a colour, a visibility flag and persisted
state. Metrics live in an ordered :class:`MetricRegistry`; the order is
the display order and the left-to-right stacking order of value axes.

New metrics are added by building another ``Metric`` from a value
function; consumers iterate the registry and never switch on the kind of
metric.
"""
from __future__ import annotations

import logging
import string
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from shared import kinematics as kin
from shared.app_settings import SettingsPersistence, coerce_bool
from shared.models import Sample, UnitSystem

logger = logging.getLogger(__name__)

Rgb = Tuple[int, int, int]
ValueFn = Callable[[Sample, UnitSystem], float]
UnitSuffix = Union[None, str, Mapping[UnitSystem, str]]

SETTINGS_GROUP = "plotValue"

BLACK: Rgb = (0, 0, 0)
RED: Rgb = (255, 0, 0)
GREEN: Rgb = (0, 255, 0)
BLUE: Rgb = (0, 0, 255)
MAGENTA: Rgb = (255, 0, 255)
DARK_RED: Rgb = (128, 0, 0)
DARK_GREEN: Rgb = (0, 128, 0)
DARK_BLUE: Rgb = (0, 0, 128)
DARK_CYAN: Rgb = (0, 128, 128)
DARK_MAGENTA: Rgb = (128, 0, 128)
DARK_YELLOW: Rgb = (128, 128, 0)

LENGTH_UNITS: Mapping[UnitSystem, str] = {UnitSystem.METRIC: "m", UnitSystem.IMPERIAL: "ft"}
SPEED_UNITS: Mapping[UnitSystem, str] = {UnitSystem.METRIC: "km/h", UnitSystem.IMPERIAL: "mph"}


def validate_color(color: Iterable[int]) -> Rgb:
    """Return ``color`` as an RGB tuple of three ints in 0..255."""
    try:
        r, g, b = (int(c) for c in color)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"color must be three integers, got {color!r}") from exc
    for component in (r, g, b):
        if not 0 <= component <= 255:
            raise ValueError(f"color components must be within 0..255, got {color!r}")
    return (r, g, b)


def color_to_hex(color: Rgb) -> str:
    r, g, b = validate_color(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def color_from_hex(text: str) -> Rgb:
    text = str(text).strip()
    if len(text) != 7 or not text.startswith("#") or not all(c in string.hexdigits for c in text[1:]):
        raise ValueError(f"expected #rrggbb, got {text!r}")
    return (int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))


class Metric:
    """A derived, unit-aware quantity plotted against the shared axis.

    Instances are compared and hashed by identity so they can key the
    axis side table and range mappings directly.
    """

    def __init__(
        self,
        key: str,
        name: str,
        value_fn: ValueFn,
        *,
        units: UnitSuffix = None,
        visible: bool = False,
        color: Rgb = BLACK,
        has_optimal: bool = False,
    ) -> None:
        if not key:
            raise ValueError("metric key must be a non-empty string")
        self.key = key
        self.name = name
        self._value_fn = value_fn
        self._units = units
        self.has_optimal = bool(has_optimal)
        self.default_visible = bool(visible)
        self.default_color = validate_color(color)
        self._visible = self.default_visible
        self._color = self.default_color

    def __repr__(self) -> str:
        return f"Metric({self.key!r}, visible={self._visible})"

    def value(self, sample: Sample, units: UnitSystem) -> float:
        return float(self._value_fn(sample, units))

    def unit_suffix(self, units: UnitSystem) -> Optional[str]:
        if self._units is None or isinstance(self._units, str):
            return self._units
        return self._units[UnitSystem(units)]

    def title(self, units: UnitSystem) -> str:
        suffix = self.unit_suffix(units)
        if suffix:
            return f"{self.name} ({suffix})"
        return self.name

    @property
    def visible(self) -> bool:
        return self._visible

    def set_visible(self, visible: bool) -> None:
        self._visible = bool(visible)

    @property
    def color(self) -> Rgb:
        return self._color

    def set_color(self, color: Iterable[int]) -> None:
        self._color = validate_color(color)

    def reset(self) -> None:
        self._visible = self.default_visible
        self._color = self.default_color

    def settings_key(self, name: str) -> str:
        return f"{SETTINGS_GROUP}/{self.key}/{name}"


class MetricRegistry:
    """Ordered, key-addressable collection of metrics."""

    def __init__(self, metrics: Iterable[Metric]) -> None:
        self._metrics: Tuple[Metric, ...] = tuple(metrics)
        self._by_key: Dict[str, Metric] = {}
        for metric in self._metrics:
            if metric.key in self._by_key:
                raise ValueError(f"duplicate metric key {metric.key!r}")
            self._by_key[metric.key] = metric

    def __iter__(self) -> Iterator[Metric]:
        return iter(self._metrics)

    def __len__(self) -> int:
        return len(self._metrics)

    def __getitem__(self, key: str) -> Metric:
        return self._by_key[key]

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str, default: Optional[Metric] = None) -> Optional[Metric]:
        return self._by_key.get(key, default)

    def keys(self) -> Tuple[str, ...]:
        return tuple(m.key for m in self._metrics)

    def index_of(self, metric: Metric) -> int:
        for i, candidate in enumerate(self._metrics):
            if candidate is metric:
                return i
        raise ValueError(f"{metric!r} is not in this registry")

    def visible(self) -> Tuple[Metric, ...]:
        return tuple(m for m in self._metrics if m.visible)

    def reset_defaults(self) -> None:
        for metric in self._metrics:
            metric.reset()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save_settings(self, persistence: SettingsPersistence) -> None:
        data = {}
        for metric in self._metrics:
            data[metric.settings_key("visible")] = int(metric.visible)
            data[metric.settings_key("color")] = color_to_hex(metric.color)
        persistence.save(data)

    def load_settings(self, persistence: SettingsPersistence) -> None:
        """Restore visibility and colour; missing or bad entries keep defaults."""
        data = persistence.load()
        for metric in self._metrics:
            visible = metric.default_visible
            raw_visible = data.get(metric.settings_key("visible"))
            if raw_visible is not None:
                visible = coerce_bool(raw_visible, metric.default_visible)

            color = metric.default_color
            raw_color = data.get(metric.settings_key("color"))
            if raw_color is not None:
                try:
                    color = color_from_hex(raw_color)
                except ValueError as exc:
                    logger.debug("Ignoring stored color for %s: %s", metric.key, exc)

            metric.set_visible(visible)
            metric.set_color(color)


# ----------------------------
# Catalogue
# ----------------------------

def _scaled(fn: Callable[[Sample], float], metric_factor: float, imperial_factor: float) -> ValueFn:
    def value(sample: Sample, units: UnitSystem) -> float:
        factor = metric_factor if units == UnitSystem.METRIC else imperial_factor
        return fn(sample) * factor

    return value


def _invariant(fn: Callable[[Sample], float]) -> ValueFn:
    def value(sample: Sample, units: UnitSystem) -> float:
        return fn(sample)

    return value


def _length(fn: Callable[[Sample], float]) -> ValueFn:
    return _scaled(fn, 1.0, kin.METERS_TO_FEET)


def _speed(fn: Callable[[Sample], float]) -> ValueFn:
    return _scaled(fn, kin.MPS_TO_KMH, kin.MPS_TO_MPH)


def default_metrics() -> MetricRegistry:
    """Build a fresh registry of the plotted metrics in display order."""
    return MetricRegistry([
        Metric("elevation", "Elevation", _length(kin.elevation),
               units=LENGTH_UNITS, visible=True, color=BLACK, has_optimal=True),
        Metric("vertical_speed", "Vertical Speed", _speed(kin.vertical_speed),
               units=SPEED_UNITS, color=GREEN, has_optimal=True),
        Metric("horizontal_speed", "Horizontal Speed", _speed(kin.horizontal_speed),
               units=SPEED_UNITS, color=RED, has_optimal=True),
        Metric("total_speed", "Total Speed", _speed(kin.total_speed),
               units=SPEED_UNITS, color=BLUE, has_optimal=True),
        Metric("dive_angle", "Dive Angle", _invariant(kin.dive_angle),
               units="deg", color=MAGENTA, has_optimal=True),
        Metric("curvature", "Dive Rate", _invariant(kin.curvature),
               units="deg/s", color=DARK_YELLOW, has_optimal=True),
        Metric("glide_ratio", "Glide Ratio", _invariant(kin.glide_ratio),
               color=DARK_CYAN, has_optimal=True),
        Metric("horizontal_accuracy", "Horizontal Accuracy", _length(kin.horizontal_accuracy),
               units=LENGTH_UNITS, color=DARK_RED),
        Metric("vertical_accuracy", "Vertical Accuracy", _length(kin.vertical_accuracy),
               units=LENGTH_UNITS, color=DARK_GREEN),
        Metric("speed_accuracy", "Speed Accuracy", _speed(kin.speed_accuracy),
               units=SPEED_UNITS, color=DARK_BLUE),
        Metric("num_satellites", "Number of Satellites", _invariant(kin.number_of_satellites),
               color=DARK_MAGENTA),
        Metric("acceleration", "Acceleration", _invariant(kin.acceleration),
               units="m/s^2", color=DARK_RED, has_optimal=True),
        Metric("total_energy", "Total Energy", _invariant(kin.total_energy),
               units="J/kg", color=DARK_GREEN, has_optimal=True),
        Metric("energy_rate", "Energy Rate", _invariant(kin.energy_rate),
               units="J/kg/s", color=DARK_BLUE, has_optimal=True),
        Metric("lift_coefficient", "Lift Coefficient", _invariant(kin.lift_coefficient),
               color=DARK_GREEN, has_optimal=True),
        Metric("drag_coefficient", "Drag Coefficient", _invariant(kin.drag_coefficient),
               color=DARK_BLUE, has_optimal=True),
    ])


def x_axis_metrics() -> MetricRegistry:
    """Quantities that can drive the shared horizontal axis."""
    return MetricRegistry([
        Metric("time", "Time", _invariant(kin.time), units="s", has_optimal=True),
        Metric("distance_2d", "Horizontal Distance", _length(kin.distance_2d),
               units=LENGTH_UNITS, has_optimal=True),
        Metric("distance_3d", "Total Distance", _length(kin.distance_3d),
               units=LENGTH_UNITS, has_optimal=True),
    ])


TIME = x_axis_metrics()["time"]


__all__ = [
    "Metric",
    "MetricRegistry",
    "Rgb",
    "SETTINGS_GROUP",
    "TIME",
    "color_from_hex",
    "color_to_hex",
    "default_metrics",
    "validate_color",
    "x_axis_metrics",
]
