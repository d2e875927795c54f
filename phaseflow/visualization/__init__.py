"""
Visualization utilities for phaseflow.

- static: Matplotlib plots of trajectories and field overlays
- dynamic: Plotly playback animation (optional, guarded)
"""

from .static import (
    plot_trajectories_3d,
    plot_vector_field_2d,
)

# Plotly backend; raises RuntimeError at call time when plotly is missing
from .dynamic import animate_trajectories_plotly

__all__ = [
    # static
    "plot_trajectories_3d",
    "plot_vector_field_2d",
    # dynamic
    "animate_trajectories_plotly",
]
