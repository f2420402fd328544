# energy_accounting.py
# mechanical energy of the bob - display only, never fed back into the solvers
# works the same on numeric or approximate output, as long as theta and v come from the same path

import numpy as np

from pendulum_state import G


def linear_speed(omega, arm_length):
    # v = L·θ'
    return arm_length * omega


def kinetic_energy(v, mass):
    # T = ½·m·v²
    return 0.5 * mass * v**2


def potential_energy(theta, mass, arm_length):
    # U = m·g·L·(1 − cos θ), zero at the lowest point
    return mass * G * arm_length * (1.0 - np.cos(theta))


def total_energy(theta, v, mass, arm_length):
    return kinetic_energy(v, mass) + potential_energy(theta, mass, arm_length)
