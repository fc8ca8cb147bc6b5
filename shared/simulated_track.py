"""Synthetic skydive track used by the demo shell and the test suite."""
from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from .kinematics import A_GRAVITY
from .models import Sample

EARTH_RADIUS_M = 6_371_000.0


def simulate_track(
    duration_s: float = 180.0,
    rate_hz: float = 5.0,
    *,
    exit_altitude_m: float = 4000.0,
    ground_m: float = 300.0,
    deploy_time_s: Optional[float] = None,
    origin: tuple[float, float] = (42.44, -76.50),
    seed: Optional[int] = 0,
) -> List[Sample]:
    """Generate a freefall followed by a canopy descent.

    Vertical speed approaches a terminal velocity, then decays to canopy
    descent rate after deployment. Horizontal speed starts at the
    aircraft's forward throw and settles to a steady drift.
    """
    if duration_s <= 0:
        raise ValueError("duration_s must be positive")
    if rate_hz <= 0:
        raise ValueError("rate_hz must be positive")

    rng = np.random.default_rng(seed)
    n = int(duration_s * rate_hz) + 1
    dt = 1.0 / rate_hz
    t = np.arange(n, dtype=np.float64) * dt
    if deploy_time_s is None:
        deploy_time_s = 0.35 * duration_s

    terminal = 55.0
    vel_d = terminal * np.tanh(A_GRAVITY * t / terminal)
    deployed = t >= deploy_time_s
    if deployed.any():
        v0 = terminal * math.tanh(A_GRAVITY * deploy_time_s / terminal)
        canopy = 5.0
        vel_d[deployed] = canopy + (v0 - canopy) * np.exp(-(t[deployed] - deploy_time_s) / 2.0)

    vel_n = 35.0 * np.exp(-t / 8.0) + 4.0
    vel_n[deployed] += 6.0 * (1.0 - np.exp(-(t[deployed] - deploy_time_s) / 3.0))
    vel_e = 2.0 * np.sin(2.0 * math.pi * t / 60.0)

    north = np.cumsum(vel_n) * dt
    east = np.cumsum(vel_e) * dt
    h_msl = exit_altitude_m - np.cumsum(vel_d) * dt
    z = h_msl - ground_m

    lat0, lon0 = origin
    lat = lat0 + np.degrees(north / EARTH_RADIUS_M)
    lon = lon0 + np.degrees(east / (EARTH_RADIUS_M * math.cos(math.radians(lat0))))

    h_speed = np.hypot(vel_n, vel_e)
    speed = np.sqrt(h_speed ** 2 + vel_d ** 2)
    step_2d = h_speed * dt
    step_3d = speed * dt
    dist_2d = np.concatenate(([0.0], np.cumsum(step_2d[1:])))
    dist_3d = np.concatenate(([0.0], np.cumsum(step_3d[1:])))

    dive = np.degrees(np.arctan2(vel_d, h_speed))
    curv = np.gradient(dive, dt)
    accel = np.gradient(speed, dt)

    # Aerodynamic acceleration (total minus gravity) split along and
    # across the velocity vector, normalised by g
    a_n = np.gradient(vel_n, dt)
    a_e = np.gradient(vel_e, dt)
    a_d = np.gradient(vel_d, dt) - A_GRAVITY
    safe_speed = np.where(speed > 0, speed, 1.0)
    along = (a_n * vel_n + a_e * vel_e + a_d * vel_d) / safe_speed
    total = np.sqrt(a_n ** 2 + a_e ** 2 + a_d ** 2)
    across = np.sqrt(np.maximum(total ** 2 - along ** 2, 0.0))
    drag = -along / A_GRAVITY
    lift = across / A_GRAVITY

    h_acc = 1.5 + rng.random(n) * 2.0
    v_acc = 2.0 + rng.random(n) * 3.0
    s_acc = 0.3 + rng.random(n) * 0.5
    num_sv = rng.integers(7, 14, size=n)

    return [
        Sample(
            t=float(t[i]),
            lat=float(lat[i]),
            lon=float(lon[i]),
            h_msl=float(h_msl[i]),
            vel_n=float(vel_n[i]),
            vel_e=float(vel_e[i]),
            vel_d=float(vel_d[i]),
            h_acc=float(h_acc[i]),
            v_acc=float(v_acc[i]),
            s_acc=float(s_acc[i]),
            num_sv=int(num_sv[i]),
            z=float(z[i]),
            dist_2d=float(dist_2d[i]),
            dist_3d=float(dist_3d[i]),
            curv=float(curv[i]),
            accel=float(accel[i]),
            lift=float(lift[i]),
            drag=float(drag[i]),
        )
        for i in range(n)
    ]


__all__ = ["simulate_track"]
