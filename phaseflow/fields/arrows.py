# phaseflow/fields/arrows.py
"""
Arrow geometry for field overlays.

An arrow is a shaft segment plus two head segments meeting at the shaft end
(a chevron). Points are (x, y, t) triples so 2D overlays drawn on the plane
t = t0 and 3D director arrows share one representation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
import math
import numpy as np

from ..utils.config import HEAD_ANGLE, HEAD_LENGTH_FRACTION, ZERO_TOLERANCE

Point3 = Tuple[float, float, float]
Segment = Tuple[Point3, Point3]


@dataclass(frozen=True)
class FieldSample:
    """
    Field value at one grid point.

    ``valid`` is False when evaluation failed; ``dx``/``dy`` are NaN then and
    ``error`` holds the message.
    """
    x: float
    y: float
    t: float
    dx: float = math.nan
    dy: float = math.nan
    valid: bool = True
    error: Optional[str] = None

    @property
    def magnitude(self) -> float:
        return math.hypot(self.dx, self.dy)


@dataclass(frozen=True)
class ArrowGeometry:
    """
    Line-segment arrow with a color/width hint for the renderer.

    Attributes
    ----------
    shaft : Segment
        (start, end)
    heads : (Segment, Segment)
        Right and left head segments, both starting at the shaft end
    sample : FieldSample, optional
        Field value the arrow was built from
    color : str
        Hex color hint
    width : float
        Line width hint
    """
    shaft: Segment
    heads: Tuple[Segment, Segment]
    sample: Optional[FieldSample] = None
    color: str = "#00ffff"
    width: float = 1.0

    @property
    def start(self) -> Point3:
        return self.shaft[0]

    @property
    def end(self) -> Point3:
        return self.shaft[1]

    def segments(self) -> Tuple[Segment, Segment, Segment]:
        """Shaft, right head, left head."""
        return (self.shaft, self.heads[0], self.heads[1])

    def as_array(self) -> np.ndarray:
        """Segments as an array of shape (3, 2, 3)."""
        return np.asarray(self.segments(), dtype=np.float64)


def arrows_to_segments(arrows: Iterable[ArrowGeometry]) -> np.ndarray:
    """
    Stack every segment of ``arrows`` for line renderers.

    Returns
    -------
    np.ndarray
        Shape (3 * M, 2, 3); (0, 2, 3) for no arrows
    """
    parts = [a.as_array() for a in arrows]
    if not parts:
        return np.empty((0, 2, 3), dtype=np.float64)
    return np.concatenate(parts, axis=0)


def _pt(v) -> Point3:
    return (float(v[0]), float(v[1]), float(v[2]))


def make_arrow_2d(
    sample: FieldSample,
    scale: float,
    *,
    head_fraction: float = HEAD_LENGTH_FRACTION,
    head_angle: float = HEAD_ANGLE,
    zero_tol: float = ZERO_TOLERANCE,
    color: str = "#00ffff",
    width: float = 1.0,
) -> Optional[ArrowGeometry]:
    """
    Unit-direction arrow of length ``scale`` in the plane t = sample.t.

    Returns None for invalid samples, for (near) zero vectors with both
    components below ``zero_tol``, and for non-finite components.
    """
    if not sample.valid:
        return None
    dx, dy = sample.dx, sample.dy
    if abs(dx) < zero_tol and abs(dy) < zero_tol:
        return None
    mag = math.hypot(dx, dy)
    if not math.isfinite(mag) or mag == 0.0:
        return None

    ux, uy = dx / mag, dy / mag
    px, py = -uy, ux
    x, y, t = sample.x, sample.y, sample.t

    end = (x + ux * scale, y + uy * scale, t)
    head_len = head_fraction * scale
    c, s = math.cos(head_angle), math.sin(head_angle)

    right = (end[0] - (ux * c + px * s) * head_len, end[1] - (uy * c + py * s) * head_len, t)
    left = (end[0] - (ux * c - px * s) * head_len, end[1] - (uy * c - py * s) * head_len, t)

    return ArrowGeometry(
        shaft=((x, y, t), end),
        heads=((end, right), (end, left)),
        sample=sample,
        color=color,
        width=width,
    )


def perpendicular(direction: np.ndarray) -> np.ndarray:
    """
    Unit vector perpendicular to ``direction`` (a unit 3-vector).

    Crosses with the coordinate axis least aligned with ``direction`` so the
    result never degenerates.
    """
    ref = np.zeros(3)
    ref[int(np.argmin(np.abs(direction)))] = 1.0
    perp = np.cross(direction, ref)
    return perp / np.linalg.norm(perp)


def make_arrow_3d(
    sample: FieldSample,
    scale: float,
    *,
    head_fraction: float = HEAD_LENGTH_FRACTION,
    head_angle: float = HEAD_ANGLE,
    color: str = "#ff0000",
    width: float = 0.05,
) -> Optional[ArrowGeometry]:
    """
    Director arrow in (x, y, t) space.

    The shaft is ``(dx * scale, dy * scale, scale)``: the t component always
    advances by ``scale``, so the arrow shows the flow direction through the
    extended phase space rather than a literal (dx, dy, dt) vector. The head
    lies in the plane spanned by the shaft and ``perpendicular(shaft)``.
    """
    if not sample.valid:
        return None
    vec = np.array([sample.dx * scale, sample.dy * scale, scale], dtype=np.float64)
    mag = float(np.linalg.norm(vec))
    if not math.isfinite(mag) or mag == 0.0:
        return None

    start = np.array([sample.x, sample.y, sample.t], dtype=np.float64)
    end = start + vec
    d = vec / mag
    perp = perpendicular(d)

    head_len = head_fraction * scale
    c, s = math.cos(head_angle), math.sin(head_angle)
    right = end - (d * c + perp * s) * head_len
    left = end - (d * c - perp * s) * head_len

    end_pt = _pt(end)
    return ArrowGeometry(
        shaft=(_pt(start), end_pt),
        heads=((end_pt, _pt(right)), (end_pt, _pt(left))),
        sample=sample,
        color=color,
        width=width,
    )
