# phaseflow/tracking/trajectory.py
"""
Forward/backward trajectory records.

A Trajectory bundles the two sample sequences integrated from one initial
point, with the playback speed the renderer should replay it at. Records are
immutable; changing the equations means building new ones.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union
import time

from ..expressions import FieldLike, VectorField, as_vector_field
from ..integrators import Direction, SampleSequence, State, integrate
from ..utils.config import (
    DEFAULT_DT,
    DEFAULT_SPEED,
    DEFAULT_STEPS,
    require_non_negative,
)


@dataclass(frozen=True)
class Trajectory:
    """
    Container for one forward and one backward integration.

    Attributes
    ----------
    forward : SampleSequence
        States advancing with +dt, forward[0] is the initial state
    backward : SampleSequence
        States advancing with -dt, backward[0] is the initial state
    speed : float
        Playback speed, >= 0
    equations : tuple of str, optional
        The (dx, dy) formulas the trajectory was computed from
    created : float
        Wall-clock creation time (``time.time()``)
    """
    forward: SampleSequence
    backward: SampleSequence
    speed: float = DEFAULT_SPEED
    equations: Optional[Tuple[str, str]] = None
    created: float = field(default_factory=time.time, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "speed", require_non_negative("speed", self.speed))
        if len(self.forward) and len(self.backward) and self.forward[0] != self.backward[0]:
            raise ValueError(
                f"forward and backward sequences must share the initial state, "
                f"got {self.forward[0]} and {self.backward[0]}"
            )

    # ---------- Accessors ----------

    @property
    def initial(self) -> Optional[State]:
        """The shared initial state."""
        if len(self.forward):
            return self.forward[0]
        return self.backward.initial

    @property
    def dt(self) -> float:
        return self.forward.dt

    @property
    def steps(self) -> int:
        return self.forward.requested_steps

    @property
    def is_partial(self) -> bool:
        """True when either direction stopped early."""
        return self.forward.is_partial or self.backward.is_partial

    def sequence(self, direction: Union[Direction, str]) -> SampleSequence:
        """Return the sequence for ``direction``."""
        if Direction.coerce(direction) is Direction.FORWARD:
            return self.forward
        return self.backward

    def points(self, direction: Union[Direction, str], count: Optional[int] = None) -> SampleSequence:
        """
        First ``count`` states of one direction, for progressive playback.

        ``count=None`` returns the whole sequence; counts past the end are clipped.
        """
        seq = self.sequence(direction)
        if count is None:
            return seq
        return seq[:max(0, int(count))]

    def summary(self) -> dict:
        """Lengths, termination reasons and endpoints of both directions."""
        return {
            "initial": self.initial,
            "speed": self.speed,
            "dt": self.dt,
            "steps": self.steps,
            "forward_len": len(self.forward),
            "backward_len": len(self.backward),
            "forward_termination": self.forward.termination,
            "backward_termination": self.backward.termination,
            "forward_final": self.forward.final,
            "backward_final": self.backward.final,
        }


def build_trajectory(
    field: FieldLike,
    initial: Tuple[float, float],
    t0: float = 0.0,
    dt: float = DEFAULT_DT,
    steps: int = DEFAULT_STEPS,
    speed: float = DEFAULT_SPEED,
    *,
    method: str = "rk4",
) -> Trajectory:
    """
    Integrate forward and backward from ``(x0, y0)`` at time ``t0``.

    Parameters
    ----------
    field : VectorField, (dx, dy) strings, or callable
        Right-hand side of the system
    initial : (float, float)
        Initial point (x0, y0)
    t0 : float
        Initial time
    dt : float
        Unsigned step size, shared by both directions
    steps : int
        Step count, shared by both directions
    speed : float
        Playback speed stored on the record
    method : str
        Stepper name passed to ``integrate``

    Returns
    -------
    Trajectory
    """
    x0, y0 = initial
    start = State(float(x0), float(y0), float(t0))
    field_fn = as_vector_field(field)

    # Both runs are independent; neither sees the other's state
    forward = integrate(field_fn, start, dt, steps, Direction.FORWARD, method=method)
    backward = integrate(field_fn, start, dt, steps, Direction.BACKWARD, method=method)

    equations = field_fn.equations if isinstance(field_fn, VectorField) else None
    return Trajectory(forward=forward, backward=backward, speed=speed, equations=equations)
