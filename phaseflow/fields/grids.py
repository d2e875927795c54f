# phaseflow/fields/grids.py
"""
Regular sampling grids for field overlays.

Bounds are inclusive. Axis values are generated from an integer index,
``lo + i * spacing`` for ``i = 0 .. floor((hi - lo) / spacing)``, so the point
count does not depend on how ``spacing`` rounds in binary. The ``'accumulate'``
sweep reproduces the repeated-addition loop ``v += spacing`` for comparison;
it can gain or lose the last point.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Iterator, Mapping, Tuple
import math
import numpy as np

from ..utils.config import GRID_SWEEPS, InvalidConfigurationError, require_positive

# Absorbs representation error in (hi - lo) / spacing
_INDEX_EPS = 1e-9

# Accepted camelCase aliases for settings coming from a UI layer
_ALIASES = {
    "xMin": "x_min", "xMax": "x_max",
    "yMin": "y_min", "yMax": "y_max",
    "tMin": "t_min", "tMax": "t_max",
    "xSpacing": "x_spacing", "ySpacing": "y_spacing", "tSpacing": "t_spacing",
}


def grid_axis(lo: float, hi: float, spacing: float, sweep: str = "index") -> np.ndarray:
    """
    Axis values from ``lo`` to ``hi`` inclusive.

    Parameters
    ----------
    lo, hi : float
        Axis bounds; ``lo > hi`` gives an empty axis
    spacing : float
        Step between values, > 0
    sweep : {'index', 'accumulate'}
        Value generation scheme, see module docstring

    Returns
    -------
    np.ndarray
        Axis values, float64
    """
    spacing = require_positive("spacing", spacing)
    lo, hi = float(lo), float(hi)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidConfigurationError(f"axis bounds must be finite, got ({lo}, {hi})")
    if sweep not in GRID_SWEEPS:
        raise InvalidConfigurationError(f"sweep must be one of {GRID_SWEEPS}, got '{sweep}'")

    if hi < lo:
        return np.empty(0, dtype=np.float64)

    if sweep == "index":
        n = int(math.floor((hi - lo) / spacing + _INDEX_EPS))
        return lo + spacing * np.arange(n + 1, dtype=np.float64)

    values = []
    v = lo
    while v <= hi:
        values.append(v)
        v += spacing
    return np.asarray(values, dtype=np.float64)


def _normalize_keys(data: Mapping[str, Any]) -> dict:
    return {_ALIASES.get(k, k): v for k, v in data.items()}


def _check_bounds(spec) -> None:
    for f in fields(spec):
        raw = getattr(spec, f.name)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise InvalidConfigurationError(f"{f.name} must be a number, got {raw!r}")
        if not math.isfinite(value):
            raise InvalidConfigurationError(f"{f.name} must be finite, got {value}")
        object.__setattr__(spec, f.name, value)


@dataclass(frozen=True)
class Grid2DSpec:
    """Planar grid: x and y share one spacing."""
    x_min: float = -5.0
    x_max: float = 5.0
    y_min: float = -5.0
    y_max: float = 5.0
    spacing: float = 0.5

    def __post_init__(self):
        _check_bounds(self)
        require_positive("spacing", self.spacing)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Grid2DSpec":
        """Build from snake_case or camelCase keys (``xMin``, ``spacing``...)."""
        return cls(**_normalize_keys(data))

    def axes(self, sweep: str = "index") -> Tuple[np.ndarray, np.ndarray]:
        return (
            grid_axis(self.x_min, self.x_max, self.spacing, sweep),
            grid_axis(self.y_min, self.y_max, self.spacing, sweep),
        )

    def points(self, sweep: str = "index") -> Iterator[Tuple[float, float]]:
        """Yield (x, y), x outermost."""
        xs, ys = self.axes(sweep)
        for x in xs:
            for y in ys:
                yield float(x), float(y)

    def size(self, sweep: str = "index") -> int:
        xs, ys = self.axes(sweep)
        return xs.size * ys.size


@dataclass(frozen=True)
class Grid3DSpec:
    """Lattice in (x, y, t) with a spacing per axis."""
    x_min: float = -5.0
    x_max: float = 5.0
    y_min: float = -5.0
    y_max: float = 5.0
    t_min: float = -5.0
    t_max: float = 5.0
    x_spacing: float = 1.0
    y_spacing: float = 1.0
    t_spacing: float = 1.0

    def __post_init__(self):
        _check_bounds(self)
        for name in ("x_spacing", "y_spacing", "t_spacing"):
            require_positive(name, getattr(self, name))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Grid3DSpec":
        """Build from snake_case or camelCase keys (``tMin``, ``tSpacing``...)."""
        return cls(**_normalize_keys(data))

    def axes(self, sweep: str = "index") -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return (
            grid_axis(self.x_min, self.x_max, self.x_spacing, sweep),
            grid_axis(self.y_min, self.y_max, self.y_spacing, sweep),
            grid_axis(self.t_min, self.t_max, self.t_spacing, sweep),
        )

    def points(self, sweep: str = "index") -> Iterator[Tuple[float, float, float]]:
        """Yield (x, y, t), x outermost and t innermost."""
        xs, ys, ts = self.axes(sweep)
        for x in xs:
            for y in ys:
                for t in ts:
                    yield float(x), float(y), float(t)

    def size(self, sweep: str = "index") -> int:
        xs, ys, ts = self.axes(sweep)
        return xs.size * ys.size * ts.size
