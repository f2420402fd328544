"""
Tests for PendulumState: initialisation, validation, getters/setters and
the drag coefficient.
"""

import numpy as np
import pytest

from pendulum_state import (
    PendulumState,
    InvalidParameter,
    Fluid,
    AIR_RHO,
    WATER_RHO,
    SPHERE_CD,
    POINT_MASS,
    sphere_mass,
)


def test_init_sets_initial_condition():
    s = PendulumState(1.0, 0.05, 0.7)
    assert s.theta == 0.7
    assert s.theta0 == 0.7
    assert s.omega == 0.0
    assert s.elapsed_time == 0.0
    assert s.consider_drag is False
    assert s.fluid is Fluid.AIR


@pytest.mark.parametrize("length", [0.0, -1.0, float("nan"), float("inf")])
def test_non_positive_arm_length_is_rejected(length):
    with pytest.raises(InvalidParameter):
        PendulumState(length, 0.05, 0.3)


def test_invalid_parameter_is_a_value_error():
    with pytest.raises(ValueError):
        PendulumState(-2.0, 0.05, 0.3)


def test_negative_radius_and_mass_are_rejected():
    with pytest.raises(InvalidParameter):
        PendulumState(1.0, -0.01, 0.3)
    with pytest.raises(InvalidParameter):
        PendulumState(1.0, 0.05, 0.3, mass=0.0)


def test_default_mass_is_aluminium_sphere():
    s = PendulumState(1.0, 0.05, 0.3)
    assert np.isclose(s.mass, 4.0 / 3.0 * np.pi * 0.05**3 * 2698.9)
    assert np.isclose(s.mass, sphere_mass(0.05))


def test_zero_radius_falls_back_to_point_mass():
    s = PendulumState(1.0, 0.0, 0.3)
    assert s.mass == POINT_MASS


def test_explicit_mass_wins():
    s = PendulumState(1.0, 0.05, 0.3, mass=2.5)
    assert s.mass == 2.5


def test_setters_touch_only_their_field():
    s = PendulumState(1.0, 0.05, 0.3)
    s.elapsed_time = 4.0

    s.set_theta(1.1)
    assert s.theta == 1.1
    assert s.theta0 == 0.3
    assert s.elapsed_time == 4.0

    s.set_theta0(-0.2)
    assert s.theta0 == -0.2
    assert s.theta == 1.1

    s.set_omega(2.0)
    assert s.omega == 2.0
    assert s.theta == 1.1
    assert s.elapsed_time == 4.0

    s.set_drag_enabled(True)
    assert s.consider_drag is True
    assert (s.theta, s.omega, s.elapsed_time) == (1.1, 2.0, 4.0)


def test_time_reset_only_clears_time():
    s = PendulumState(1.0, 0.05, 0.3)
    s.set_theta(0.9)
    s.set_omega(-1.5)
    s.elapsed_time = 3.0

    s.time_reset()

    assert s.get_elapsed_time() == 0.0
    assert s.get_theta() == 0.9
    assert s.get_omega() == -1.5


def test_reset_restores_initial_condition():
    s = PendulumState(1.0, 0.05, 0.3)
    s.set_theta(0.9)
    s.set_omega(-1.5)
    s.elapsed_time = 3.0

    s.reset()

    assert (s.theta, s.omega, s.elapsed_time) == (0.3, 0.0, 0.0)


def test_fluid_accepts_enum_and_code():
    s = PendulumState(1.0, 0.05, 0.3)
    s.set_fluid(1)
    assert s.fluid is Fluid.WATER
    s.set_fluid(Fluid.AIR)
    assert s.fluid is Fluid.AIR
    with pytest.raises(InvalidParameter):
        s.set_fluid(2)


def test_drag_coefficient():
    s = PendulumState(2.0, 0.05, 0.3, mass=1.5)
    expected = SPHERE_CD * AIR_RHO * np.pi * 2.0 / (2.0 * 1.5)
    assert np.isclose(s.drag_coefficient, expected)

    s.set_fluid(Fluid.WATER)
    assert np.isclose(s.drag_coefficient, expected * WATER_RHO / AIR_RHO)
