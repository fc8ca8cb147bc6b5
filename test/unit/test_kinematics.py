import math

import pytest

from shared import kinematics as kin
from shared.models import Sample


def test_speeds_and_angle():
    s = Sample(t=0.0, vel_n=3.0, vel_e=4.0, vel_d=12.0)
    assert kin.horizontal_speed(s) == pytest.approx(5.0)
    assert kin.total_speed(s) == pytest.approx(13.0)
    assert kin.vertical_speed(s) == 12.0
    assert kin.dive_angle(s) == pytest.approx(math.degrees(math.atan2(12.0, 5.0)))


def test_climbing_gives_negative_dive_angle():
    s = Sample(t=0.0, vel_n=10.0, vel_d=-10.0)
    assert kin.dive_angle(s) == pytest.approx(-45.0)


def test_glide_ratio_handles_level_flight():
    assert kin.glide_ratio(Sample(t=0.0, vel_n=20.0, vel_d=10.0)) == pytest.approx(2.0)
    assert kin.glide_ratio(Sample(t=0.0, vel_n=20.0, vel_d=0.0)) == 0.0


def test_energy_terms():
    s = Sample(t=0.0, z=100.0, vel_n=10.0, accel=2.0)
    assert kin.total_energy(s) == pytest.approx(50.0 + kin.A_GRAVITY * 100.0)
    assert kin.energy_rate(s) == pytest.approx(20.0)

    falling = Sample(t=0.0, vel_d=10.0)
    # Losing height at constant speed bleeds potential energy
    assert kin.energy_rate(falling) == pytest.approx(-kin.A_GRAVITY * 10.0)


def test_pass_through_fields():
    s = Sample(t=7.0, h_acc=1.0, v_acc=2.0, s_acc=3.0, num_sv=8, dist_2d=4.0, dist_3d=5.0,
               curv=6.0, lift=0.4, drag=0.2)
    assert kin.time(s) == 7.0
    assert (kin.horizontal_accuracy(s), kin.vertical_accuracy(s), kin.speed_accuracy(s)) == (1.0, 2.0, 3.0)
    assert kin.number_of_satellites(s) == 8.0
    assert isinstance(kin.number_of_satellites(s), float)
    assert (kin.distance_2d(s), kin.distance_3d(s)) == (4.0, 5.0)
    assert kin.curvature(s) == 6.0
    assert (kin.lift_coefficient(s), kin.drag_coefficient(s)) == (0.4, 0.2)
