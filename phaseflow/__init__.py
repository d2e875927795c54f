"""
phaseflow: trajectories of planar ODE systems in (x, y, t) space.

A package for exploring user-defined systems dx/dt = f(x, y, t),
dy/dt = g(x, y, t) with:
- Formula parsing and evaluation (SymPy)
- Fixed-step RK4 integration forward and backward in time
- Instantaneous 2D vector field and 3D director field arrow overlays
- Progressive trajectory playback
- Static and interactive visualization

Core workflow:
1. Enter equations → VectorField
2. Pick an initial point → build_trajectory / Session.add_trajectory
3. Sample overlays → sample_2d / sample_3d
4. Replay and plot → PlaybackCursor, visualization functions
"""

from __future__ import annotations

# Version info
__version__ = "0.1.0"
__author__ = "phaseflow Contributors"

from .expressions import (
    Formula,
    FormulaEvaluationError,
    VectorField,
    evaluate,
)
from .integrators import (
    Direction,
    SampleSequence,
    State,
    euler_step,
    integrate,
    rk2_step,
    rk4_step,
)
from .tracking import PlaybackCursor, Trajectory, build_trajectory
from .fields import (
    ArrowGeometry,
    FieldSample,
    Grid2DSpec,
    Grid3DSpec,
    SelectorCanvas,
    arrows_to_segments,
    grid_axis,
    sample_2d,
    sample_3d,
)
from .session import DirectorFieldSettings, Session, VectorField2DSettings
from .utils.config import (
    InvalidConfigurationError,
    PackageConfig,
    configure,
    get_config,
    reset_config,
)

__all__ = [
    # Version
    "__version__",
    # Expressions
    "Formula",
    "FormulaEvaluationError",
    "VectorField",
    "evaluate",
    # Integrators
    "Direction",
    "SampleSequence",
    "State",
    "euler_step",
    "integrate",
    "rk2_step",
    "rk4_step",
    # Tracking
    "PlaybackCursor",
    "Trajectory",
    "build_trajectory",
    # Fields
    "ArrowGeometry",
    "FieldSample",
    "Grid2DSpec",
    "Grid3DSpec",
    "SelectorCanvas",
    "arrows_to_segments",
    "grid_axis",
    "sample_2d",
    "sample_3d",
    # Session
    "DirectorFieldSettings",
    "Session",
    "VectorField2DSettings",
    # Configuration
    "InvalidConfigurationError",
    "PackageConfig",
    "configure",
    "get_config",
    "reset_config",
]
