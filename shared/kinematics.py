"""Physical quantities computed from a single track sample.

All functions are pure and return SI units (metres, metres per second,
degrees for angles). Unit conversion is the caller's business.
"""
from __future__ import annotations

import math

from .models import Sample

A_GRAVITY = 9.80665

METERS_TO_FEET = 3.28084
MPS_TO_MPH = 2.23694
MPS_TO_KMH = 3.6


def time(s: Sample) -> float:
    return s.t


def elevation(s: Sample) -> float:
    return s.z


def vertical_speed(s: Sample) -> float:
    return s.vel_d


def horizontal_speed(s: Sample) -> float:
    return math.hypot(s.vel_e, s.vel_n)


def total_speed(s: Sample) -> float:
    return math.sqrt(s.vel_e * s.vel_e + s.vel_n * s.vel_n + s.vel_d * s.vel_d)


def dive_angle(s: Sample) -> float:
    return math.degrees(math.atan2(s.vel_d, horizontal_speed(s)))


def curvature(s: Sample) -> float:
    return s.curv


def glide_ratio(s: Sample) -> float:
    # Level flight has no defined ratio; report zero rather than infinity
    if s.vel_d == 0:
        return 0.0
    return horizontal_speed(s) / s.vel_d


def horizontal_accuracy(s: Sample) -> float:
    return s.h_acc


def vertical_accuracy(s: Sample) -> float:
    return s.v_acc


def speed_accuracy(s: Sample) -> float:
    return s.s_acc


def number_of_satellites(s: Sample) -> float:
    return float(s.num_sv)


def distance_2d(s: Sample) -> float:
    return s.dist_2d


def distance_3d(s: Sample) -> float:
    return s.dist_3d


def acceleration(s: Sample) -> float:
    return s.accel


def total_energy(s: Sample) -> float:
    """Kinetic plus potential energy per unit mass (J/kg)."""
    v = total_speed(s)
    return v * v / 2.0 + A_GRAVITY * elevation(s)


def energy_rate(s: Sample) -> float:
    """Rate of change of specific energy (J/kg/s); vel_d is positive downward."""
    return total_speed(s) * s.accel - A_GRAVITY * s.vel_d


def lift_coefficient(s: Sample) -> float:
    return s.lift


def drag_coefficient(s: Sample) -> float:
    return s.drag


__all__ = [
    "A_GRAVITY",
    "METERS_TO_FEET",
    "MPS_TO_KMH",
    "MPS_TO_MPH",
    "acceleration",
    "curvature",
    "distance_2d",
    "distance_3d",
    "dive_angle",
    "drag_coefficient",
    "elevation",
    "energy_rate",
    "glide_ratio",
    "horizontal_accuracy",
    "horizontal_speed",
    "lift_coefficient",
    "number_of_satellites",
    "speed_accuracy",
    "time",
    "total_energy",
    "total_speed",
    "vertical_accuracy",
    "vertical_speed",
]
