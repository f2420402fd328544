"""
Simple Pendulum — Numeric vs Approximate
========================================
Drives one PendulumSession the way a renderer would: every frame the host
samples a frame-time delta and hands it to the solver, then redraws the bob
from the returned angle. Two ways of getting that angle are run side by side:

 - Numeric: RK4 integration of θ'' = -(g/L)·sin θ - k·r²·θ'·|θ'|
   (drag optional, air or water)
 - Approximate: closed-form fit θ0·cos(Ω(θ0)·t), no stepping, no drag

Nothing is rendered in 3-D here — the "frames" are just a clock. The run
summary is printed and the two angle curves plus their energies are plotted.

 python simple_pendulum_sim.py                        # 60°, 1 m arm, 10 s
 python simple_pendulum_sim.py --theta0-deg 150 --drag --fluid water
 python simple_pendulum_sim.py --csv deg_60.csv --dt 0.001 --t-end 30 --no-show
 python simple_pendulum_sim.py --jitter 0.3 --seed 7  # uneven frame times
"""

import argparse
import time

import numpy as np
import matplotlib.pyplot as plt

from pendulum_state import Fluid, InvalidParameter
from pendulum_session import PendulumSession
from analytic_approximation import verify_approximation

# Defaults: 1 m arm, 5 cm aluminium bob released at 60°
LENGTH = 1.0     # m — arm length, pivot to bob centre
RADIUS = 0.05    # m — bob radius
THETA0_DEG = 60.0
FPS = 60.0       # host frame rate
T_SIM = 10.0     # s — total simulated time


class HostShell:
    """
    Minimal stand-in for the visualisation shell.

    Owns the Start/Stop flag (the solver never sees it) and decides which
    strategy a frame delta goes to. Stopped frames still consume clock time
    but never reach the solver.
    """

    MODES = ("numeric", "approx")

    def __init__(self, session, mode="numeric"):
        if mode not in self.MODES:
            raise ValueError(f"mode must be one of {self.MODES}, got {mode!r}")
        self.session = session
        self.mode = mode
        self.running = False

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def toggle(self):
        self.running = not self.running

    def reset(self, theta0=None):
        # Reset button / angle slider: works from either state, keeps the mode
        self.session.reset(theta0)

    def tick(self, frame_time):
        if not self.running:
            return None
        if self.mode == "numeric":
            return self.session.advance(frame_time)
        return self.session.evaluate(frame_time)


def frame_deltas(t_end, fps=FPS, jitter=0.0, seed=0):
    """
    Frame-time deltas a host clock would report over t_end seconds.

    jitter > 0 makes each frame last (1 ± jitter)/fps, like a renderer that
    hitches now and then. The deltas are rescaled so they still sum to t_end.
    """
    rng = np.random.default_rng(seed)
    n = max(1, int(round(t_end * fps)))
    dts = np.full(n, 1.0 / fps)
    if jitter > 0.0:
        dts *= 1.0 + rng.uniform(-jitter, jitter, size=n)
    return dts * (t_end / dts.sum())


def simulate(length=LENGTH, radius=RADIUS, theta0=np.radians(THETA0_DEG), drag=False,
             fluid=Fluid.AIR, t_end=T_SIM, fps=FPS, jitter=0.0, seed=0):
    """
    Runs a numeric and an approximate shell on the same frame clock.

    Returns a dict of arrays: time, both angles, both linear speeds and both
    total energies, one entry per frame (plus the initial frame).
    """
    numeric = HostShell(PendulumSession(length, radius, theta0, drag, fluid=fluid), mode="numeric")
    approx = HostShell(PendulumSession(length, radius, theta0, drag, fluid=fluid), mode="approx")
    numeric.start()
    approx.start()

    dts = frame_deltas(t_end, fps, jitter, seed)
    n = len(dts) + 1
    log = {key: np.empty(n) for key in
           ("t", "theta_num", "theta_apx", "v_num", "v_apx", "E_num", "E_apx")}

    def record(i):
        s_num, s_apx = numeric.session, approx.session
        log["t"][i] = s_num.get_elapsed_time()
        log["theta_num"][i] = s_num.get_theta()
        log["theta_apx"][i] = s_apx.get_theta_approx()
        log["v_num"][i] = s_num.get_v()
        log["v_apx"][i] = s_apx.get_v_approx()
        log["E_num"][i] = s_num.total_energy()
        log["E_apx"][i] = s_apx.total_energy_approx()

    record(0)
    for i, dt in enumerate(dts, start=1):
        numeric.tick(dt)
        approx.tick(dt)
        record(i)

    return log


def plot_run(log, title, filename=None, show=True):
    fig, axes = plt.subplots(2, 1, figsize=(11, 8), sharex=True)
    fig.suptitle(title, fontsize=13)

    # Panel 1: angle in degrees (the shell converts for display)
    axes[0].plot(log["t"], np.degrees(log["theta_num"]), color="steelblue", lw=1.2, label="Numeric (RK4)")
    axes[0].plot(log["t"], np.degrees(log["theta_apx"]), color="darkorange", lw=1.0, ls="--",
                 label="Approximation")
    axes[0].set_ylabel("θ (deg)")
    axes[0].legend(); axes[0].grid(alpha=0.4)

    # Panel 2: total energy
    axes[1].plot(log["t"], log["E_num"], color="steelblue", lw=1.2, label="Numeric")
    axes[1].plot(log["t"], log["E_apx"], color="darkorange", lw=1.0, ls="--", label="Approximation")
    axes[1].set_ylabel("Total energy (J)")
    axes[1].set_xlabel("Time (s)")
    axes[1].legend(); axes[1].grid(alpha=0.4)

    plt.tight_layout()
    if filename:
        plt.savefig(filename, dpi=150)
    if show:
        plt.show()
    plt.close(fig)


def build_parser():
    parser = argparse.ArgumentParser(description="Simple pendulum: numeric vs approximate solution")
    parser.add_argument("--length", type=float, default=LENGTH, help="arm length in m (> 0)")
    parser.add_argument("--radius", type=float, default=RADIUS, help="bob radius in m (>= 0)")
    parser.add_argument("--theta0-deg", type=float, default=THETA0_DEG, help="release angle in degrees, (-180, 180]")
    parser.add_argument("--drag", action="store_true", help="include quadratic drag on the numeric path")
    parser.add_argument("--fluid", choices=[f.name.lower() for f in Fluid], default="air")
    parser.add_argument("--t-end", type=float, default=T_SIM, help="simulated time in s")
    parser.add_argument("--fps", type=float, default=FPS, help="host frame rate")
    parser.add_argument("--jitter", type=float, default=0.0,
                        help="relative frame-time jitter, e.g. 0.3 for ±30%%")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the frame jitter (default: random each run)")
    parser.add_argument("--csv", default=None,
                        help="also write a fixed-step 't, theta_numeric, theta_approx' table here")
    parser.add_argument("--dt", type=float, default=0.001, help="fixed step for --csv")
    parser.add_argument("--plot", default="pendulum_result.png", help="where to save the figure")
    parser.add_argument("--no-show", action="store_true", help="save the figure without opening a window")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # clock-based seed by default, printed so a run can be reproduced
    seed = args.seed if args.seed is not None else int(time.time()) % 100_000
    fluid = Fluid[args.fluid.upper()]
    theta0 = np.radians(args.theta0_deg)
    if args.t_end <= 0.0 or args.fps <= 0.0 or args.dt <= 0.0:
        parser.error("--t-end, --fps and --dt must be positive")
    if not 0.0 <= args.jitter < 1.0:
        parser.error("--jitter must be in [0, 1)")
    # the angle slider's range; outside it the release angle is ambiguous
    if not -180.0 < args.theta0_deg <= 180.0:
        parser.error("--theta0-deg must be in (-180, 180]")

    try:
        log = simulate(args.length, args.radius, theta0, args.drag, fluid,
                       t_end=args.t_end, fps=args.fps, jitter=args.jitter, seed=seed)
    except InvalidParameter as e:
        parser.error(str(e))

    if args.jitter > 0.0:
        print(f"Using seed = {seed} (pass --seed {seed} to reproduce this exact run)\n")

    # how far the closed-form fit is from the exact solution at this amplitude
    verify_approximation(theta0, args.length)

    drift = (log["E_num"][-1] - log["E_num"][0]) / max(log["E_num"][0], 1e-12)
    print("=" * 40)
    print(" SIMPLE PENDULUM RUN")
    print("=" * 40)
    print(f"L = {args.length} m, r = {args.radius} m, θ0 = {args.theta0_deg:.1f}°")
    print(f"Drag: {'on (' + args.fluid + ')' if args.drag else 'off'}")
    print(f"Frames: {len(log['t']) - 1} over {log['t'][-1]:.3f} s")
    print(f"Final θ numeric: {np.degrees(log['theta_num'][-1]):8.3f}°")
    print(f"Final θ approx:  {np.degrees(log['theta_apx'][-1]):8.3f}°")
    print(f"Max |Δθ|:        {np.degrees(np.max(np.abs(log['theta_num'] - log['theta_apx']))):8.3f}°")
    print(f"Energy change (numeric): {drift * 100:.4f}%")
    print("=" * 40)

    if args.csv:
        session = PendulumSession(args.length, args.radius, theta0, args.drag, fluid=fluid)
        session.save_result(args.dt, args.csv, args.t_end)
        print(f"\nTable saved to: {args.csv}")

    title = f"Simple pendulum — θ0 = {args.theta0_deg:.0f}°, drag {'on' if args.drag else 'off'}"
    plot_run(log, title, filename=args.plot, show=not args.no_show)
    print(f"Plot saved to: {args.plot}")


if __name__ == "__main__":
    main()
