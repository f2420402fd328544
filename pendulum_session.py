# pendulum_session.py
# one independently owned pendulum: a PendulumState plus both solving strategies
#
# A host (renderer / UI) creates one session per pendulum, feeds it frame deltas
# through advance() (numeric) or evaluate() (approximation), and reads angles,
# velocities and energies back. The run flag (Start/Stop) belongs to the host.

import numpy as np

from pendulum_state import PendulumState, Fluid, InvalidParameter
from equations_of_motion import NumericIntegrator, MAX_SUBSTEP
from analytic_approximation import AnalyticApproximator
from energy_accounting import linear_speed, kinetic_energy, potential_energy, total_energy


class PendulumSession:

    def __init__(self, arm_length, bob_radius, theta0, consider_drag=False,
                 mass=None, fluid=Fluid.AIR, max_substep=MAX_SUBSTEP):
        # raises InvalidParameter before anything else is built
        self.state = PendulumState(arm_length, bob_radius, theta0, consider_drag,
                                   mass=mass, fluid=fluid)
        self.integrator = NumericIntegrator(self.state, max_substep=max_substep)
        self.approximator = AnalyticApproximator(self.state)

    # stepping
    def advance(self, dt):
        return self.integrator.advance(dt)

    def evaluate(self, dt_delta):
        return self.approximator.evaluate(dt_delta)

    # numeric path
    def get_theta(self):
        return self.integrator.get_theta()

    def get_omega(self):
        return self.integrator.get_omega()

    def get_v(self):
        return linear_speed(self.get_omega(), self.state.arm_length)

    def get_elapsed_time(self):
        return self.state.get_elapsed_time()

    # approximation path
    def get_theta_approx(self):
        return self.approximator.get_theta_approx()

    def get_omega_approx(self):
        return self.approximator.get_omega_approx()

    def get_v_approx(self):
        return linear_speed(self.get_omega_approx(), self.state.arm_length)

    def get_elapsed_time_approx(self):
        return self.approximator.get_elapsed_time()

    # setters
    def set_theta(self, theta):
        self.state.set_theta(theta)

    def set_theta0(self, theta0):
        self.approximator.set_theta0(theta0)

    def set_omega(self, omega):
        self.state.set_omega(omega)

    def set_drag_enabled(self, enabled):
        self.state.set_drag_enabled(enabled)

    def set_fluid(self, fluid):
        self.state.set_fluid(fluid)

    def time_reset(self):
        self.state.time_reset()
        self.approximator.time_reset()

    def reset(self, theta0=None):
        """
        Returns both strategies to (theta0, at rest, t = 0).

        Passing an angle retargets theta0 first - that is what the host does
        when the user drags the angle slider.
        """
        if theta0 is not None:
            self.state.set_theta0(theta0)
        self.state.reset()
        self.approximator.time_reset()

    # energies
    @property
    def mass(self):
        return self.state.mass

    def kinetic_energy(self, v):
        return kinetic_energy(v, self.state.mass)

    def potential_energy(self, theta):
        return potential_energy(theta, self.state.mass, self.state.arm_length)

    def total_energy(self):
        return total_energy(self.get_theta(), self.get_v(), self.state.mass, self.state.arm_length)

    def total_energy_approx(self):
        return total_energy(self.get_theta_approx(), self.get_v_approx(),
                            self.state.mass, self.state.arm_length)

    def save_result(self, dt, filename, t_end):
        """
        Runs both paths side by side in fixed steps of dt for t_end seconds and
        writes "t, theta_numeric, theta_approx" rows to a CSV file.

        Starts from the session's current state and leaves it at the end of
        the run. Returns the three columns as arrays; with filename=None
        nothing is written.
        """
        if not (np.isfinite(dt) and dt > 0.0) or not (np.isfinite(t_end) and t_end >= 0.0):
            raise InvalidParameter(f"need dt > 0 and t_end >= 0, got dt={dt}, t_end={t_end}")
        n = int(round(t_end / dt))

        t = np.empty(n + 1)
        th_num = np.empty(n + 1)
        th_apx = np.empty(n + 1)

        t[0] = self.get_elapsed_time()
        th_num[0] = self.get_theta()
        th_apx[0] = self.get_theta_approx()
        for i in range(1, n + 1):
            th_num[i] = self.advance(dt)
            th_apx[i] = self.evaluate(dt)
            t[i] = self.get_elapsed_time()

        if filename is not None:
            np.savetxt(filename, np.column_stack([t, th_num, th_apx]), fmt="%.3f, %.15f, %.15f")
        return t, th_num, th_apx
