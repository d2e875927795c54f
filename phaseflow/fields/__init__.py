"""
phaseflow Fields

Grid specifications, field sampling and arrow geometry for the 2D vector
field overlay, the 3D director field and the initial-point picker.
"""

from .grids import Grid2DSpec, Grid3DSpec, grid_axis
from .arrows import (
    ArrowGeometry,
    FieldSample,
    arrows_to_segments,
    make_arrow_2d,
    make_arrow_3d,
    perpendicular,
)
from .sampler import sample_field, sample_2d, sample_3d
from .probe import SelectorCanvas

__all__ = [
    "Grid2DSpec",
    "Grid3DSpec",
    "grid_axis",
    "ArrowGeometry",
    "FieldSample",
    "arrows_to_segments",
    "make_arrow_2d",
    "make_arrow_3d",
    "perpendicular",
    "sample_field",
    "sample_2d",
    "sample_3d",
    "SelectorCanvas",
]
