# phaseflow/fields/sampler.py
"""
Vector field overlays: evaluate the field on a grid and build arrows.

- sample_2d: unit arrows on the plane t = t0 over an (x, y) grid
- sample_3d: director arrows over an (x, y, t) lattice

A grid point whose evaluation fails is left out; the sweep continues.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Mapping, Tuple, Union
import math

from ..expressions import FieldLike, FormulaEvaluationError, as_vector_field
from ..utils.config import HEAD_ANGLE, HEAD_LENGTH_FRACTION, ZERO_TOLERANCE, require_positive
from .arrows import ArrowGeometry, FieldSample, make_arrow_2d, make_arrow_3d
from .grids import Grid2DSpec, Grid3DSpec

GridLike2D = Union[Grid2DSpec, Mapping[str, Any]]
GridLike3D = Union[Grid3DSpec, Mapping[str, Any]]


def sample_field(field: FieldLike, points: Iterable[Tuple[float, float, float]]) -> List[FieldSample]:
    """
    Evaluate ``field`` at each (x, y, t).

    Failed or non-finite evaluations are returned as samples with
    ``valid=False`` instead of raising.
    """
    field_fn = as_vector_field(field)
    samples = []
    for x, y, t in points:
        try:
            dx, dy = field_fn(x, y, t)
        except FormulaEvaluationError as exc:
            samples.append(FieldSample(x, y, t, valid=False, error=str(exc)))
            continue
        dx, dy = float(dx), float(dy)
        if not (math.isfinite(dx) and math.isfinite(dy)):
            samples.append(FieldSample(x, y, t, dx, dy, valid=False, error="non-finite value"))
            continue
        samples.append(FieldSample(x, y, t, dx, dy))
    return samples


def _coerce_grid(grid, cls):
    if isinstance(grid, cls):
        return grid
    if isinstance(grid, Mapping):
        return cls.from_dict(grid)
    raise TypeError(f"grid must be a {cls.__name__} or a mapping, got {type(grid).__name__}")


def sample_2d(
    field: FieldLike,
    t: float,
    grid: GridLike2D,
    scale: float,
    *,
    width: float = 1.0,
    color: str = "#00ffff",
    head_fraction: float = HEAD_LENGTH_FRACTION,
    head_angle: float = HEAD_ANGLE,
    zero_tol: float = ZERO_TOLERANCE,
    sweep: str = "index",
) -> List[ArrowGeometry]:
    """
    Instantaneous vector field at time ``t``.

    Parameters
    ----------
    field : VectorField, (dx, dy) strings, or callable
        Field to draw
    t : float
        Time slice; every arrow lies in the plane t
    grid : Grid2DSpec or mapping
        Bounds and spacing; mappings may use ``xMin``-style keys
    scale : float
        Arrow length, > 0. Vectors are normalized first.
    width, color
        Render hints copied onto each arrow
    head_fraction, head_angle
        Head length as a fraction of ``scale`` and head half-angle (radians)
    zero_tol : float
        Points with |dx| and |dy| both below this get no arrow
    sweep : {'index', 'accumulate'}
        Grid axis generation, see ``grid_axis``

    Returns
    -------
    list of ArrowGeometry
        x-major order; skipped points leave no entry
    """
    grid = _coerce_grid(grid, Grid2DSpec)
    scale = require_positive("scale", scale)
    t = float(t)

    samples = sample_field(field, ((x, y, t) for x, y in grid.points(sweep)))
    arrows = []
    for sample in samples:
        arrow = make_arrow_2d(
            sample, scale,
            head_fraction=head_fraction, head_angle=head_angle, zero_tol=zero_tol,
            color=color, width=width,
        )
        if arrow is not None:
            arrows.append(arrow)
    return arrows


def sample_3d(
    field: FieldLike,
    grid: GridLike3D,
    scale: float,
    width: float = 0.05,
    color: str = "#ff0000",
    *,
    head_fraction: float = HEAD_LENGTH_FRACTION,
    head_angle: float = HEAD_ANGLE,
    sweep: str = "index",
) -> List[ArrowGeometry]:
    """
    Director field over an (x, y, t) lattice.

    Each arrow starts at a lattice point and runs along
    ``(dx * scale, dy * scale, scale)``. Failed points are skipped.

    Returns
    -------
    list of ArrowGeometry
        x-major, t-minor order
    """
    grid = _coerce_grid(grid, Grid3DSpec)
    scale = require_positive("scale", scale)

    samples = sample_field(field, grid.points(sweep))
    arrows = []
    for sample in samples:
        arrow = make_arrow_3d(
            sample, scale,
            head_fraction=head_fraction, head_angle=head_angle,
            color=color, width=width,
        )
        if arrow is not None:
            arrows.append(arrow)
    return arrows
