import numpy as np
from scipy.special import ellipj, ellipk

from pendulum_state import G


# Closed-form approximation
def approx_frequency(theta0, arm_length):
    """
    Angular frequency of the large-angle fit.

    The exact period of an undamped pendulum grows with amplitude
    (elliptic integral K). The fit keeps a pure cosine but lowers the
    frequency with the amplitude:

        Ω(θ0) = ω0 · sqrt(3 + cos θ0) / 2,     ω0 = sqrt(g / L)

    For θ0 → 0 this is ω0 (simple harmonic limit); at θ0 = π it is ω0/√2.
    """
    omega0_2 = G / arm_length
    return np.sqrt(omega0_2 * (3.0 + np.cos(theta0))) / 2.0


def approx_theta(theta0, t, arm_length):
    # θ(t) = θ0 · cos(Ω t)
    return theta0 * np.cos(approx_frequency(theta0, arm_length) * t)


def approx_omega(theta0, t, arm_length):
    # time derivative of approx_theta, not a finite difference
    w = approx_frequency(theta0, arm_length)
    return -theta0 * w * np.sin(w * t)


# Exact reference solution
def exact_theta(theta0, t, arm_length):
    """
    Exact undamped large-angle solution released from rest at θ0:

        θ(t) = 2·arcsin( k · sn(ω0 t + K(m), m) ),   k = sin(θ0/2),  m = k²

    sn is the Jacobi elliptic function and K the complete elliptic integral
    of the first kind (scipy uses the parameter m = k²). Adding K shifts the
    phase so θ(0) = θ0 with zero velocity. A negative θ0 gives a negative k,
    which mirrors the whole curve.

    θ0 = ±π is the inverted equilibrium (K diverges); the pendulum stays there.
    """
    k = np.sin(theta0 / 2.0)
    m = k * k
    if m >= 1.0:
        return np.full_like(np.asarray(t, dtype=float), theta0)

    omega0 = np.sqrt(G / arm_length)
    sn, _, _, _ = ellipj(omega0 * np.asarray(t, dtype=float) + ellipk(m), m)
    return 2.0 * np.arcsin(np.clip(k * sn, -1.0, 1.0))


class AnalyticApproximator:
    """
    Evaluates the pendulum directly from the closed-form fit instead of
    stepping an ODE. Drag is ignored on this path.

    theta0 is read from the shared PendulumState; time is this object's own
    accumulator, independent of state.elapsed_time on the numeric path.
    """

    def __init__(self, state):
        self.state = state
        self.elapsed_time = 0.0

    def evaluate(self, dt_delta):
        """Adds dt_delta (negative treated as 0) to the clock, returns θ there."""
        if np.isfinite(dt_delta) and dt_delta > 0.0:
            self.elapsed_time += dt_delta
        return self.get_theta_approx()

    def time_reset(self):
        self.elapsed_time = 0.0

    def set_theta0(self, theta0):
        # retarget only; pair with time_reset() for a clean restart
        self.state.set_theta0(theta0)

    def get_theta_approx(self):
        s = self.state
        return float(approx_theta(s.theta0, self.elapsed_time, s.arm_length))

    def get_omega_approx(self):
        s = self.state
        return float(approx_omega(s.theta0, self.elapsed_time, s.arm_length))

    def get_elapsed_time(self):
        return self.elapsed_time


# Verification helper
def verify_approximation(theta0, arm_length=1.0, t_end=2.0, tol=0.05, n=2001):
    """
    Compares the closed-form fit with the exact elliptic solution over
    [0, t_end]. Prints a pass/fail report and returns whether the largest
    deviation stays below tol (radians).
    """
    t = np.linspace(0.0, t_end, n)
    err = np.max(np.abs(approx_theta(theta0, t, arm_length) - exact_theta(theta0, t, arm_length)))

    print("── Approximation Verification ──────────────────────")
    print(f"  θ0 = {np.degrees(theta0):.1f}°, L = {arm_length} m, t = 0..{t_end} s")
    print(f"  Max |θ_approx − θ_exact| = {err:.2e} rad  ", end="")
    print("✓ PASS" if err < tol else "✗ FAIL")
    print("────────────────────────────────────────────────────\n")

    return bool(err < tol)
