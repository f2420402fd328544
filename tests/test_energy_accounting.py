import numpy as np

from pendulum_state import G
from energy_accounting import linear_speed, kinetic_energy, potential_energy, total_energy


def test_kinetic_energy():
    assert kinetic_energy(2.0, 3.0) == 6.0
    assert kinetic_energy(-2.0, 3.0) == 6.0
    assert kinetic_energy(0.0, 3.0) == 0.0


def test_potential_energy_zero_at_bottom():
    assert potential_energy(0.0, 2.0, 1.5) == 0.0
    assert np.isclose(potential_energy(np.pi / 2, 2.0, 1.5), 2.0 * G * 1.5)
    assert np.isclose(potential_energy(np.pi, 2.0, 1.5), 2.0 * 2.0 * G * 1.5)
    assert np.isclose(potential_energy(-0.4, 2.0, 1.5), potential_energy(0.4, 2.0, 1.5))


def test_total_energy_is_the_sum():
    theta, v, m, L = 0.7, 1.3, 0.9, 1.2
    assert np.isclose(total_energy(theta, v, m, L), kinetic_energy(v, m) + potential_energy(theta, m, L))


def test_linear_speed():
    assert linear_speed(2.0, 1.5) == 3.0


def test_works_on_arrays():
    theta = np.linspace(-1.0, 1.0, 5)
    v = np.linspace(0.0, 2.0, 5)
    e = total_energy(theta, v, 1.0, 1.0)
    assert e.shape == (5,)
    assert np.all(e >= 0.0)
