# phaseflow/visualization/dynamic.py
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence
import numpy as np

try:
    import plotly.graph_objects as go
    PLOTLY_AVAILABLE = True
except Exception:
    PLOTLY_AVAILABLE = False

from ..fields import ArrowGeometry, arrows_to_segments
from ..tracking import PlaybackCursor, Trajectory
from ..utils.config import DEFAULT_POINTS_PER_SECOND, require_positive
from .static import BACKWARD_COLOR, FORWARD_COLOR, INITIAL_COLOR


def _ensure_plotly():
    if not PLOTLY_AVAILABLE:
        raise RuntimeError("Plotly is required for dynamic visualization (pip install plotly)")


def _segments_trace(arrows: Sequence[ArrowGeometry], name: str) -> "go.Scatter3d":
    # One polyline with None breaks between segments
    segs = arrows_to_segments(arrows)
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    zs: List[Optional[float]] = []
    for (a, b) in segs:
        xs += [a[0], b[0], None]
        ys += [a[1], b[1], None]
        zs += [a[2], b[2], None]
    return go.Scatter3d(
        x=xs, y=ys, z=zs, mode="lines", name=name,
        line=dict(color=arrows[0].color, width=max(1.0, float(arrows[0].width))),
        hoverinfo="skip",
    )


def _trajectory_traces(cursors: Sequence[PlaybackCursor]) -> List["go.Scatter3d"]:
    traces = []
    for i, cur in enumerate(cursors):
        fwd = cur.visible_forward().positions
        bwd = cur.visible_backward().positions
        traces.append(go.Scatter3d(
            x=fwd[:, 0], y=fwd[:, 1], z=fwd[:, 2], mode="lines",
            line=dict(color=FORWARD_COLOR, width=4), name=f"forward {i}", showlegend=False,
        ))
        traces.append(go.Scatter3d(
            x=bwd[:, 0], y=bwd[:, 1], z=bwd[:, 2], mode="lines",
            line=dict(color=BACKWARD_COLOR, width=4), name=f"backward {i}", showlegend=False,
        ))
    return traces


def animate_trajectories_plotly(
    trajectories: Iterable[Trajectory],
    arrows: Optional[Sequence[ArrowGeometry]] = None,
    director: Optional[Sequence[ArrowGeometry]] = None,
    fps: float = 25.0,
    points_per_second: float = DEFAULT_POINTS_PER_SECOND,
    max_frames: int = 500,
    width: int = 900,
    height: int = 750,
    title: Optional[str] = None,
) -> "go.Figure":
    """
    Interactive replay of trajectories in (x, y, t) space.

    Each frame advances every trajectory's PlaybackCursor by 1/fps seconds, so
    trajectories with a higher speed reveal their points faster. Frames stop
    once every cursor has finished or ``max_frames`` is reached. Overlays are
    static traces.
    """
    _ensure_plotly()
    trajectories = list(trajectories)
    cursors = [PlaybackCursor(t, points_per_second) for t in trajectories]
    delta = 1.0 / require_positive("fps", fps)
    max_frames = max(1, int(max_frames))

    static_traces = []
    for overlay, name in ((arrows, "vector field"), (director, "director field")):
        if overlay:
            static_traces.append(_segments_trace(overlay, name))
    initial = np.array([t.initial for t in trajectories if t.initial is not None], dtype=float).reshape(-1, 3)
    static_traces.append(go.Scatter3d(
        x=initial[:, 0], y=initial[:, 1], z=initial[:, 2], mode="markers",
        marker=dict(color=INITIAL_COLOR, size=4), name="initial points",
    ))

    n_static = len(static_traces)
    dynamic_idx = list(range(n_static, n_static + 2 * len(cursors)))

    frames = []
    for k in range(max_frames):
        frames.append(go.Frame(data=_trajectory_traces(cursors), traces=dynamic_idx, name=str(k)))
        if all(c.finished for c in cursors):
            break
        for c in cursors:
            c.advance(delta)

    fig = go.Figure(data=static_traces + list(frames[0].data), frames=frames)
    fig.update_layout(
        width=width, height=height,
        title=title or "Trajectories",
        scene=dict(xaxis_title="x", yaxis_title="y", zaxis_title="t", aspectmode="cube"),
        updatemenus=[dict(
            type="buttons", showactive=False,
            buttons=[
                dict(label="Play", method="animate",
                     args=[None, dict(frame=dict(duration=1000.0 / fps, redraw=True), fromcurrent=True)]),
                dict(label="Pause", method="animate",
                     args=[[None], dict(frame=dict(duration=0, redraw=False), mode="immediate")]),
            ],
        )],
        sliders=[dict(
            steps=[dict(method="animate", label=f.name,
                        args=[[f.name], dict(mode="immediate", frame=dict(duration=0, redraw=True))])
                   for f in frames],
            currentvalue=dict(prefix="frame "),
        )],
    )
    return fig
