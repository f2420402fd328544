# pendulum_state.py
# physical state + constants for the simple pendulum (shared by every solver module)

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

import numpy as np

# physical constants, defined once here so the numeric and approximate paths always agree
G = 9.80665             # standard gravitational acceleration m/s^2

# fluid properties (density kg/m^3)
AIR_RHO   = 1.205
WATER_RHO = 998.203

ALUMINIUM_RHO = 2698.9  # density of the bob material kg/m^3
SPHERE_CD     = 0.47    # drag coefficient of a smooth sphere (Re ~ 1e3..1e5)
POINT_MASS    = 1.0     # kg, used when the bob has no radius and no mass is given


class InvalidParameter(ValueError):
    """Raised when a pendulum is initialised with non-physical parameters."""


class Fluid(IntEnum):
    AIR = 0
    WATER = 1


FLUID_RHO = {Fluid.AIR: AIR_RHO, Fluid.WATER: WATER_RHO}


def sphere_mass(radius, density=ALUMINIUM_RHO):
    # m = 4/3 * pi * r^3 * rho
    return 4.0 / 3.0 * np.pi * radius**3 * density


def as_fluid(fluid):
    """Accepts a Fluid or its integer code (0 = air, 1 = water)."""
    try:
        return Fluid(fluid)
    except ValueError:
        raise InvalidParameter(f"unknown fluid {fluid!r}, expected 0 (air) or 1 (water)") from None


@dataclass
class PendulumState:
    """
    Everything the solvers need to know about one pendulum.

    theta is the signed angle between the arm and the downward vertical (rad),
    omega the angular velocity (rad/s). theta0 is the angle at the last reset or
    retarget and is the time origin of the analytic approximation.

    Constructing a state is the Init step: arm_length must be > 0, otherwise
    InvalidParameter is raised and nothing is built.
    """
    arm_length: float
    bob_radius: float
    theta0: float
    consider_drag: bool = False
    mass: Optional[float] = None
    fluid: Fluid = Fluid.AIR

    theta: float = field(init=False, default=0.0)
    omega: float = field(init=False, default=0.0)
    elapsed_time: float = field(init=False, default=0.0)

    def __post_init__(self):
        if not np.isfinite(self.arm_length) or self.arm_length <= 0.0:
            raise InvalidParameter(f"arm_length must be > 0, got {self.arm_length}")
        if not np.isfinite(self.bob_radius) or self.bob_radius < 0.0:
            raise InvalidParameter(f"bob_radius must be >= 0, got {self.bob_radius}")

        if self.mass is None:
            # solid aluminium sphere; a zero-radius bob is treated as a 1 kg point mass
            self.mass = sphere_mass(self.bob_radius) if self.bob_radius > 0.0 else POINT_MASS
        elif not np.isfinite(self.mass) or self.mass <= 0.0:
            raise InvalidParameter(f"mass must be > 0, got {self.mass}")

        self.arm_length = float(self.arm_length)
        self.bob_radius = float(self.bob_radius)
        self.theta0 = float(self.theta0)
        self.mass = float(self.mass)
        self.fluid = as_fluid(self.fluid)
        self.consider_drag = bool(self.consider_drag)

        self.theta = self.theta0
        self.omega = 0.0
        self.elapsed_time = 0.0

    @property
    def drag_coefficient(self):
        """
        k in the drag deceleration k * r^2 * omega * |omega|.

        Quadratic drag on the bob: F = 1/2 * Cd * rho * (pi r^2) * (L omega)^2,
        acting at lever arm L against inertia m L^2, so
        omega_dot = -(Cd * rho * pi * L / (2 m)) * r^2 * omega * |omega|.
        The bob is treated as a point mass (no rotational inertia of the sphere).
        """
        return SPHERE_CD * FLUID_RHO[self.fluid] * np.pi * self.arm_length / (2.0 * self.mass)

    # getters
    def get_theta(self):
        return self.theta

    def get_omega(self):
        return self.omega

    def get_elapsed_time(self):
        return self.elapsed_time

    # setters only touch the named field
    def set_theta(self, theta):
        self.theta = float(theta)

    def set_theta0(self, theta0):
        self.theta0 = float(theta0)

    def set_omega(self, omega):
        self.omega = float(omega)

    def set_drag_enabled(self, enabled):
        self.consider_drag = bool(enabled)

    def set_fluid(self, fluid):
        self.fluid = as_fluid(fluid)

    def time_reset(self):
        self.elapsed_time = 0.0

    def reset(self):
        # back to the initial physical condition (theta0, at rest, t = 0)
        self.theta = self.theta0
        self.omega = 0.0
        self.elapsed_time = 0.0
