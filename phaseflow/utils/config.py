# phaseflow/utils/config.py
"""
Global package configuration.

Holds the application policy values (integration step, step count, playback
rate, arrow geometry, grid sweep mode) that the session layer feeds into the
numeric core. The core functions themselves take every parameter explicitly
and never read this module.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Dict, Any
import math
import warnings


class InvalidConfigurationError(ValueError):
    """Raised when a parameter is rejected before any work is done."""


# Policy defaults shared by the core signatures and PackageConfig
DEFAULT_DT = 0.05
DEFAULT_STEPS = 200
DEFAULT_SPEED = 1.0
DEFAULT_POINTS_PER_SECOND = 50.0
ZERO_TOLERANCE = 1e-10
HEAD_LENGTH_FRACTION = 0.2
HEAD_ANGLE = math.pi / 6

GRID_SWEEPS = ("index", "accumulate")
INTEGRATOR_NAMES = ("rk4", "rk2", "euler")


def require_positive(name: str, value: Any) -> float:
    """Return ``value`` as float, rejecting non-finite or non-positive input."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(v) or v <= 0.0:
        raise InvalidConfigurationError(f"{name} must be finite and > 0, got {value!r}")
    return v


def require_non_negative(name: str, value: Any) -> float:
    """Return ``value`` as float, rejecting non-finite or negative input."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(v) or v < 0.0:
        raise InvalidConfigurationError(f"{name} must be finite and >= 0, got {value!r}")
    return v


def require_count(name: str, value: Any) -> int:
    """Return ``value`` as int, rejecting bools, floats and negatives."""
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if not isinstance(value, int):
        # numpy integers expose __index__
        try:
            value = value.__index__()
        except (AttributeError, TypeError):
            raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidConfigurationError(f"{name} must be >= 0, got {value}")
    return int(value)


@dataclass
class PackageConfig:
    """
    Global configuration for phaseflow.

    Controls the defaults the session layer uses when it builds trajectories
    and overlays. All values are plain in-memory settings; nothing is persisted.
    """
    # Integration
    dt: float = DEFAULT_DT              # step size, > 0
    steps: int = DEFAULT_STEPS          # steps per direction, >= 0
    integrator: str = "rk4"             # 'rk4' | 'rk2' | 'euler'

    # Playback
    speed: float = DEFAULT_SPEED        # speed given to new trajectories
    points_per_second: float = DEFAULT_POINTS_PER_SECOND

    # Arrow overlays
    zero_tolerance: float = ZERO_TOLERANCE
    head_length_fraction: float = HEAD_LENGTH_FRACTION
    head_angle: float = HEAD_ANGLE
    grid_sweep: str = "index"           # 'index' | 'accumulate'

    # Output
    verbose: bool = False

    def __post_init__(self):
        self._validate_config()

    def _validate_config(self):
        """Validate configuration settings."""
        self.dt = require_positive("dt", self.dt)
        self.steps = require_count("steps", self.steps)
        self.speed = require_non_negative("speed", self.speed)
        self.points_per_second = require_positive("points_per_second", self.points_per_second)
        self.zero_tolerance = require_non_negative("zero_tolerance", self.zero_tolerance)
        self.head_length_fraction = require_non_negative("head_length_fraction", self.head_length_fraction)
        self.head_angle = require_non_negative("head_angle", self.head_angle)

        if self.integrator not in INTEGRATOR_NAMES:
            raise InvalidConfigurationError(
                f"integrator must be one of {INTEGRATOR_NAMES}, got '{self.integrator}'"
            )
        if self.grid_sweep not in GRID_SWEEPS:
            raise InvalidConfigurationError(
                f"grid_sweep must be one of {GRID_SWEEPS}, got '{self.grid_sweep}'"
            )

    def as_dict(self) -> Dict[str, Any]:
        """Return the settings as a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Global configuration instance
_global_config = PackageConfig()


def get_config() -> PackageConfig:
    """Get global package configuration."""
    return _global_config


def configure(**kwargs) -> None:
    """
    Configure package settings.

    Parameters
    ----------
    **kwargs : dict
        Configuration parameters to update

    Raises
    ------
    InvalidConfigurationError
        If an updated value fails validation. The previous settings are kept.
    """
    global _global_config

    updated = _global_config.as_dict()
    for key, value in kwargs.items():
        if key in updated:
            updated[key] = value
        else:
            warnings.warn(f"Unknown configuration parameter: {key}")

    # Re-validate as a whole before swapping in
    _global_config = PackageConfig(**updated)


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _global_config
    _global_config = PackageConfig()
