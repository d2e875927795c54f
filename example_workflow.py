#!/usr/bin/env python3
"""
Minimal phaseflow Example

This example walks through the core phaseflow workflow:
1. Enter a planar system (damped oscillator with forcing)
2. Pick initial points and integrate forward/backward in time
3. Sample the 2D vector field at t0 and the 3D director field
4. Replay the trajectories and save static plots

For an interactive replay, install the plotly extra and open the figure
returned by animate_trajectories_plotly.
"""

import numpy as np
from pathlib import Path

import phaseflow as pf
from phaseflow.visualization import plot_trajectories_3d, plot_vector_field_2d


def main():
    print("phaseflow Minimal Example")
    print("=" * 30)

    # Configuration
    pf.configure(dt=0.05, steps=200, verbose=True)
    dx, dy = "y", "-x - 0.2 y + 0.5 cos(t)"
    seeds = [(1.0, 0.0), (-2.0, 1.5), (0.5, -3.0)]

    # 1. Session with the forced oscillator
    print(f"Equations: dx/dt = {dx}, dy/dt = {dy}")
    session = pf.Session(dx, dy)

    # 2. Trajectories through each seed at t0 = 0
    for x0, y0 in seeds:
        session.add_trajectory(x0, y0)
    # a click in the middle of the picker canvas
    session.select_point(300, 100)
    print(f"✅ Built {len(session.trajectories)} trajectories")

    # 3. Overlays
    session.update_vector_field_2d(visible=True, density=1.0, scale=0.4)
    session.update_director_field(
        visible=True, scale=0.3,
        grid={"xMin": -4, "xMax": 4, "yMin": -4, "yMax": 4, "tMin": -10, "tMax": 10,
              "xSpacing": 2, "ySpacing": 2, "tSpacing": 2},
    )
    arrows = session.vector_field_2d_arrows()
    director = session.director_field_arrows()
    print(f"✅ Sampled {len(arrows)} field arrows and {len(director)} director arrows")

    # 4. Replay half a second of playback
    cursors = session.playback()
    counts = [c.advance(0.5) for c in cursors]
    print(f"Visible points after 0.5 s: {counts}")

    output_dir = Path("output_minimal")
    output_dir.mkdir(exist_ok=True)

    plot_trajectories_3d(
        session.trajectories, arrows, director,
        title="Trajectories in (x, y, t)", show=False,
        save_path=str(output_dir / "trajectories_3d.png"),
    )
    plot_vector_field_2d(
        arrows, session.trajectories, bounds=(-5, 5, -5, 5),
        title="Vector field at t = 0", show=False,
        save_path=str(output_dir / "vector_field_2d.png"),
    )
    print(f"✅ Saved plots to {output_dir.absolute()}")

    # Summary statistics
    print("\nSummary:")
    for i, traj in enumerate(session.trajectories):
        fwd, bwd = traj.forward, traj.backward
        radius = np.hypot(fwd.x, fwd.y)
        print(f"  [{i}] start {tuple(traj.initial)}: forward {len(fwd)} pts, backward {len(bwd)} pts, "
              f"max |r| forward {radius.max():.3f}")


if __name__ == "__main__":
    main()
