# phaseflow/session.py
"""
Interactive session state.

The session owns the current equations, the trajectory collection and the
overlay settings a front end edits. It reads the package configuration for
policy values and passes everything to the numeric core explicitly.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from .expressions import VectorField
from .fields import ArrowGeometry, Grid2DSpec, Grid3DSpec, SelectorCanvas, sample_2d, sample_3d
from .tracking import PlaybackCursor, Trajectory, build_trajectory
from .utils.config import (
    InvalidConfigurationError,
    PackageConfig,
    get_config,
    require_non_negative,
    require_positive,
)
from .utils.logging import timeit


@dataclass(frozen=True)
class VectorField2DSettings:
    """
    Instantaneous field overlay drawn on the plane t = t0.

    Grid spacing is ``base_spacing / density`` over ``bounds``.
    """
    visible: bool = False
    scale: float = 1.0
    width: float = 1.0
    density: float = 1.0
    color: str = "#00ffff"
    bounds: Tuple[float, float, float, float] = (-5.0, 5.0, -5.0, 5.0)
    base_spacing: float = 0.5

    def __post_init__(self):
        require_positive("scale", self.scale)
        require_positive("density", self.density)
        require_positive("base_spacing", self.base_spacing)
        require_non_negative("width", self.width)

    @property
    def spacing(self) -> float:
        return self.base_spacing / self.density

    def grid(self) -> Grid2DSpec:
        x_min, x_max, y_min, y_max = self.bounds
        return Grid2DSpec(x_min, x_max, y_min, y_max, self.spacing)


@dataclass(frozen=True)
class DirectorFieldSettings:
    """3D director field overlay over an (x, y, t) lattice."""
    visible: bool = False
    density: float = 1.0
    scale: float = 1.0
    width: float = 0.05
    color: str = "#ff0000"
    grid: Grid3DSpec = field(default_factory=Grid3DSpec)

    def __post_init__(self):
        require_positive("scale", self.scale)
        require_positive("density", self.density)
        require_non_negative("width", self.width)
        if isinstance(self.grid, dict):
            object.__setattr__(self, "grid", Grid3DSpec.from_dict(self.grid))


class Session:
    """
    Top-level owner of equations, trajectories and overlay settings.

    Parameters
    ----------
    dx, dy : str
        Initial equations
    config : PackageConfig, optional
        Policy values; the global configuration when omitted
    canvas : SelectorCanvas, optional
        Picker geometry used by ``select_point``

    Example
    -------
    >>> s = Session("y", "-x")
    >>> traj = s.add_trajectory(1.0, 0.0)
    >>> len(traj.forward)
    200
    """

    def __init__(
        self,
        dx: str = "y",
        dy: str = "-x",
        config: Optional[PackageConfig] = None,
        canvas: Optional[SelectorCanvas] = None,
    ):
        self._config = config
        self.field = VectorField(dx, dy)
        self.speed = self.config.speed
        self.t0 = 0.0
        self.canvas = canvas if canvas is not None else SelectorCanvas()
        self.vector_field_2d = VectorField2DSettings()
        self.director_field = DirectorFieldSettings()
        self._trajectories: List[Trajectory] = []

    @property
    def config(self) -> PackageConfig:
        """Session configuration, or the current global one when none was given."""
        return self._config if self._config is not None else get_config()

    # ---------- Trajectories ----------

    @property
    def trajectories(self) -> Tuple[Trajectory, ...]:
        """Current trajectory collection, oldest first."""
        return tuple(self._trajectories)

    @property
    def equations(self) -> Tuple[str, str]:
        return self.field.equations

    def add_trajectory(self, x0: float, y0: float, t0: Optional[float] = None) -> Trajectory:
        """
        Integrate forward and backward from (x0, y0) and keep the result.

        ``t0`` becomes the session time when given; the current session time
        is used otherwise. The trajectory gets the current speed.
        """
        if t0 is not None:
            self.set_t0(t0)

        cfg = self.config
        with timeit(f"Trajectory from ({x0:.3f}, {y0:.3f}, {self.t0:.3f})", enabled=cfg.verbose):
            traj = build_trajectory(
                self.field, (x0, y0), self.t0,
                dt=cfg.dt, steps=cfg.steps, speed=self.speed, method=cfg.integrator,
            )

        if cfg.verbose and traj.is_partial:
            print(
                f"  partial trajectory: forward {len(traj.forward)}, "
                f"backward {len(traj.backward)} of {cfg.steps} states"
            )
        self._trajectories.append(traj)
        return traj

    def select_point(self, px: float, py: float) -> Trajectory:
        """Add a trajectory at the picker pixel (px, py) and the session time."""
        x, y = self.canvas.pixel_to_point(px, py)
        return self.add_trajectory(x, y)

    def reset_trajectories(self) -> None:
        """Drop every trajectory."""
        self._trajectories.clear()

    def update_equations(self, dx: str, dy: str) -> None:
        """Replace the equations; existing trajectories are discarded."""
        self.field = VectorField(dx, dy)
        self.reset_trajectories()

    def update_speed(self, speed: float) -> None:
        """Speed for trajectories added from now on."""
        self.speed = require_non_negative("speed", speed)

    def set_t0(self, t0: float) -> None:
        try:
            self.t0 = float(t0)
        except (TypeError, ValueError):
            raise InvalidConfigurationError(f"t0 must be a number, got {t0!r}")

    def playback(self) -> List[PlaybackCursor]:
        """Fresh playback cursors, one per trajectory."""
        pps = self.config.points_per_second
        return [PlaybackCursor(traj, pps) for traj in self._trajectories]

    # ---------- Overlays ----------

    def update_vector_field_2d(self, **changes) -> VectorField2DSettings:
        self.vector_field_2d = replace(self.vector_field_2d, **changes)
        return self.vector_field_2d

    def update_director_field(self, **changes) -> DirectorFieldSettings:
        self.director_field = replace(self.director_field, **changes)
        return self.director_field

    def vector_field_2d_arrows(self) -> List[ArrowGeometry]:
        """Arrows of the instantaneous field at the session time; [] when hidden."""
        settings = self.vector_field_2d
        if not settings.visible:
            return []
        cfg = self.config
        with timeit("2D vector field", enabled=cfg.verbose):
            return sample_2d(
                self.field, self.t0, settings.grid(), settings.scale,
                width=settings.width, color=settings.color,
                head_fraction=cfg.head_length_fraction, head_angle=cfg.head_angle,
                zero_tol=cfg.zero_tolerance, sweep=cfg.grid_sweep,
            )

    def director_field_arrows(self) -> List[ArrowGeometry]:
        """Director arrows over the configured lattice; [] when hidden."""
        settings = self.director_field
        if not settings.visible:
            return []
        cfg = self.config
        with timeit("Director field", enabled=cfg.verbose):
            return sample_3d(
                self.field, settings.grid, settings.scale, settings.width, settings.color,
                head_fraction=cfg.head_length_fraction, head_angle=cfg.head_angle,
                sweep=cfg.grid_sweep,
            )

    def selector_arrows(self) -> List[ArrowGeometry]:
        """Probe arrows for the picker at the session time."""
        return self.canvas.sample_arrows(self.field, self.t0)

    def __repr__(self) -> str:
        return (
            f"Session(dx={self.field.dx!r}, dy={self.field.dy!r}, t0={self.t0}, "
            f"trajectories={len(self._trajectories)})"
        )
