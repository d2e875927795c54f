# phaseflow/visualization/static.py
from __future__ import annotations
from typing import Iterable, Optional, Sequence

try:
    import matplotlib.pyplot as plt
    from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers 3D projection)
    from mpl_toolkits.mplot3d.art3d import Line3DCollection
    from matplotlib.collections import LineCollection
    MPL_AVAILABLE = True
except Exception:
    MPL_AVAILABLE = False

from ..fields import ArrowGeometry, arrows_to_segments
from ..tracking import Trajectory

FORWARD_COLOR = "#4CAF50"
BACKWARD_COLOR = "#e91e63"
INITIAL_COLOR = "#2196F3"


def _ensure_mpl():
    if not MPL_AVAILABLE:
        raise RuntimeError("Matplotlib is required (pip install matplotlib)")


def _arrow_style(arrows: Sequence[ArrowGeometry], color: Optional[str], width: Optional[float]):
    first = arrows[0]
    return (color or first.color), (width if width is not None else first.width)


def _finish(fig, title, save_path, show):
    if title:
        fig.axes[0].set_title(title)
    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight")
    if show:
        plt.show()


def plot_trajectories_3d(
    trajectories: Iterable[Trajectory],
    arrows: Optional[Sequence[ArrowGeometry]] = None,
    director: Optional[Sequence[ArrowGeometry]] = None,
    counts: Optional[Sequence[int]] = None,
    linewidth: float = 2.0,
    elev: float = 25.0,
    azim: float = 45.0,
    title: Optional[str] = None,
    ax: Optional["plt.Axes"] = None,
    show: bool = True,
    save_path: Optional[str] = None,
):
    """
    Draw trajectories in (x, y, t) space with optional field overlays.

    trajectories: forward drawn green, backward magenta, initial point blue
    arrows: 2D vector field arrows (already placed on t = t0)
    director: 3D director field arrows
    counts: visible point count per trajectory (e.g. from PlaybackCursor);
            None draws complete sequences
    """
    _ensure_mpl()
    trajectories = list(trajectories)
    if counts is not None and len(counts) != len(trajectories):
        raise ValueError("counts must have one entry per trajectory")

    if ax is None:
        fig = plt.figure(figsize=(8, 7), dpi=120)
        ax = fig.add_subplot(111, projection="3d")
    else:
        fig = ax.figure

    for i, traj in enumerate(trajectories):
        n = None if counts is None else counts[i]
        fwd = traj.points("forward", n).positions
        bwd = traj.points("backward", n).positions
        if fwd.shape[0] > 1:
            ax.plot(fwd[:, 0], fwd[:, 1], fwd[:, 2], color=FORWARD_COLOR, lw=linewidth)
        if bwd.shape[0] > 1:
            ax.plot(bwd[:, 0], bwd[:, 1], bwd[:, 2], color=BACKWARD_COLOR, lw=linewidth)
        if traj.initial is not None and (n is None or n > 0):
            x0, y0, t0 = traj.initial
            ax.scatter([x0], [y0], [t0], color=INITIAL_COLOR, s=25, depthshade=False)

    for overlay in (arrows, director):
        if overlay:
            color, width = _arrow_style(overlay, None, None)
            ax.add_collection3d(Line3DCollection(arrows_to_segments(overlay), colors=color, linewidths=width))

    ax.set_xlabel("x"); ax.set_ylabel("y"); ax.set_zlabel("t")
    ax.view_init(elev=elev, azim=azim)
    _finish(fig, title, save_path, show)
    return fig, ax


def plot_vector_field_2d(
    arrows: Sequence[ArrowGeometry],
    trajectories: Optional[Iterable[Trajectory]] = None,
    bounds: Optional[Sequence[float]] = None,
    color: Optional[str] = None,
    width: Optional[float] = None,
    equal: bool = True,
    title: Optional[str] = None,
    ax: Optional["plt.Axes"] = None,
    show: bool = True,
    save_path: Optional[str] = None,
):
    """
    Draw 2D field arrows on the (x, y) plane, optionally with trajectory projections.

    bounds: (xmin, xmax, ymin, ymax) or None to autoscale
    """
    _ensure_mpl()
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 7), dpi=120)
    else:
        fig = ax.figure

    if arrows:
        c, w = _arrow_style(arrows, color, width)
        segs = arrows_to_segments(arrows)[:, :, :2]
        ax.add_collection(LineCollection(segs, colors=c, linewidths=w))

    for traj in (trajectories or []):
        ax.plot(traj.forward.x, traj.forward.y, color=FORWARD_COLOR, lw=1.5)
        ax.plot(traj.backward.x, traj.backward.y, color=BACKWARD_COLOR, lw=1.5)
        if traj.initial is not None:
            ax.plot([traj.initial.x], [traj.initial.y], "o", color=INITIAL_COLOR, ms=4)

    if bounds is not None:
        ax.set_xlim(bounds[0], bounds[1]); ax.set_ylim(bounds[2], bounds[3])
    else:
        ax.autoscale_view()
    if equal:
        ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("x"); ax.set_ylabel("y")
    _finish(fig, title, save_path, show)
    return fig, ax
