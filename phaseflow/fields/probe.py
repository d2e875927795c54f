# phaseflow/fields/probe.py
"""
Initial-point picker canvas.

Maps between canvas pixels (origin top-left, y down) and the plane
[-extent, extent]^2 (y up), and probes the field on a fine interior grid so
the picker can show flow direction under the cursor.
"""

from __future__ import annotations
from typing import List, Tuple
import math

from ..expressions import FieldLike
from ..utils.config import HEAD_ANGLE, require_positive
from .arrows import ArrowGeometry, make_arrow_2d
from .sampler import sample_field


class SelectorCanvas:
    """
    Square picker canvas.

    Parameters
    ----------
    size : int
        Canvas edge in pixels
    extent : float
        Half-width of the plane shown; the canvas covers [-extent, extent]
    probes_per_unit : int
        Probe arrows per plane unit along each axis
    arrow_length : float
        Probe arrow length in plane units
    head_fraction : float
        Head length relative to ``arrow_length``
    """

    def __init__(
        self,
        size: int = 400,
        extent: float = 5.0,
        probes_per_unit: int = 4,
        arrow_length: float = 0.125,
        head_fraction: float = 0.4,
    ):
        self.size = int(require_positive("size", size))
        self.extent = require_positive("extent", extent)
        self.probes_per_unit = int(require_positive("probes_per_unit", probes_per_unit))
        self.arrow_length = require_positive("arrow_length", arrow_length)
        self.head_fraction = head_fraction

    @property
    def pixels_per_unit(self) -> float:
        return self.size / (2.0 * self.extent)

    def pixel_to_point(self, px: float, py: float) -> Tuple[float, float]:
        """Canvas pixel to plane (x, y)."""
        ppu = self.pixels_per_unit
        return px / ppu - self.extent, -(py / ppu - self.extent)

    def point_to_pixel(self, x: float, y: float) -> Tuple[float, float]:
        """Plane (x, y) to canvas pixel."""
        ppu = self.pixels_per_unit
        return (x + self.extent) * ppu, (self.extent - y) * ppu

    def probe_points(self) -> List[Tuple[float, float]]:
        """Interior probe locations, borders excluded, x outermost."""
        step = 1.0 / self.probes_per_unit
        n = int(round(2.0 * self.extent * self.probes_per_unit))
        coords = [-self.extent + i * step for i in range(1, n)]
        return [(x, -y) for x in coords for y in coords]

    def sample_arrows(
        self,
        field: FieldLike,
        t: float,
        color: str = "#00ffff",
        width: float = 1.5,
    ) -> List[ArrowGeometry]:
        """
        Probe arrows at time ``t`` in plane coordinates.

        Only exactly-zero vectors are dropped, unlike ``sample_2d``; failing
        points are skipped.
        """
        t = float(t)
        samples = sample_field(field, ((x, y, t) for x, y in self.probe_points()))
        arrows = []
        for sample in samples:
            if not sample.valid or math.hypot(sample.dx, sample.dy) == 0.0:
                continue
            arrow = make_arrow_2d(
                sample, self.arrow_length,
                head_fraction=self.head_fraction, head_angle=HEAD_ANGLE, zero_tol=0.0,
                color=color, width=width,
            )
            if arrow is not None:
                arrows.append(arrow)
        return arrows
