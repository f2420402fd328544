# equations_of_motion.py
# numeric path: nonlinear simple pendulum EOM + fixed-step RK4 integrator

import math

import numpy as np

from pendulum_state import G

# longest single RK4 step (s) - a frame delta larger than this is split into equal sub-steps
# 1 ms keeps the RK4 energy error far below anything visible at 60 fps
MAX_SUBSTEP = 1e-3
# most RK4 steps a single advance() may take; a longer delta (pause/resume hitch)
# only integrates MAX_SUBSTEPS * max_substep seconds of motion
MAX_SUBSTEPS = 1000


def equations_of_motion(state, arm_length, drag=0.0):
    th, w = state  # defines state to be [θ, θ']

    # gravity: restoring torque per unit inertia
    th_acc = -G / arm_length * np.sin(th)

    # quadratic drag opposes motion: w*|w| keeps the sign of w
    # drag is the lumped factor k * r^2 (zero when drag is switched off)
    th_acc -= drag * w * np.abs(w)

    # returns an array with angular velocity and acceleration
    return np.array([w, th_acc])


def rk4_step(state, h, arm_length, drag=0.0):
    """Single classical Runge-Kutta step of size h on [θ, θ']."""
    k1 = equations_of_motion(state, arm_length, drag)
    k2 = equations_of_motion(state + 0.5 * h * k1, arm_length, drag)
    k3 = equations_of_motion(state + 0.5 * h * k2, arm_length, drag)
    k4 = equations_of_motion(state + h * k3, arm_length, drag)
    return state + (h / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


class NumericIntegrator:
    """
    Advances a PendulumState by integrating

        θ'' = -(g/L)·sin θ - k·r²·θ'·|θ'|

    with fixed-step RK4. The drag term is only present while
    state.consider_drag is set.

    The integrator holds no physics of its own - theta, omega and elapsed
    time all live on the state object it was given, so a host can swap the
    state's setters in between calls (angle slider, reset button) and the
    next advance() picks them up.
    """

    def __init__(self, state, max_substep=MAX_SUBSTEP, max_substeps=MAX_SUBSTEPS):
        self.state = state
        self.max_substep = max_substep
        self.max_substeps = max_substeps

    def drag_factor(self):
        s = self.state
        if not s.consider_drag:
            return 0.0
        return s.drag_coefficient * s.bob_radius**2

    def advance(self, dt):
        """
        Integrates forward by dt seconds and returns the new theta.

        Frame deltas from a host clock may be zero or, across pauses and clock
        resets, negative. Those are treated as zero: state is left untouched and
        the current theta is returned.

        A delta longer than max_substeps * max_substep (a hitch after the host
        was paused) advances the clock by the full dt but only integrates that
        much motion, so one call never takes more than max_substeps RK4 steps.
        """
        s = self.state
        if not math.isfinite(dt) or dt <= 0.0:
            return s.theta

        span = min(dt, self.max_substeps * self.max_substep)
        n = min(self.max_substeps, max(1, math.ceil(span / self.max_substep)))
        h = span / n
        drag = self.drag_factor()

        y = np.array([s.theta, s.omega])
        for _ in range(n):
            y = rk4_step(y, h, s.arm_length, drag)

        s.theta = float(y[0])
        s.omega = float(y[1])
        s.elapsed_time += dt
        return s.theta

    def get_theta(self):
        return self.state.theta

    def get_omega(self):
        return self.state.omega
