# phaseflow/integrators/base.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, NamedTuple, Optional, Protocol, Tuple, Union, overload
import numpy as np

from ..utils.config import InvalidConfigurationError

# Field function signature: (x, y, t) -> (dx/dt, dy/dt)
FieldFn = Callable[[float, float, float], Tuple[float, float]]
"""
Field function protocol.

Parameters
----------
x, y : float
    Planar position
t : float
    Current time

Returns
-------
tuple of float
    Rates (dx/dt, dy/dt). May raise FormulaEvaluationError.
"""


class State(NamedTuple):
    """A point (x, y, t) of the extended phase space."""
    x: float
    y: float
    t: float


class Direction(str, Enum):
    """Integration direction in time."""
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def sign(self) -> float:
        return 1.0 if self is Direction.FORWARD else -1.0

    @classmethod
    def coerce(cls, value: Union["Direction", str]) -> "Direction":
        """Accept a Direction or its string name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidConfigurationError(
                f"direction must be 'forward' or 'backward', got {value!r}"
            )


class StepperFn(Protocol):
    """
    Protocol for single-step integrators.

    All steppers share this signature so ``integrate`` can swap them by name.
    """

    def __call__(self, state: State, h: float, field_fn: FieldFn) -> State:
        """
        Advance one step of signed size ``h``.

        Parameters
        ----------
        state : State
            Current (x, y, t)
        h : float
            Signed step; negative integrates backward in time
        field_fn : FieldFn
            Rates at (x, y, t)

        Returns
        -------
        State
            State at t + h
        """
        ...


# Why an integration stopped
COMPLETED = "completed"
EVALUATION_ERROR = "evaluation_error"
CANCELLED = "cancelled"


@dataclass(frozen=True)
class SampleSequence:
    """
    Ordered states produced by one integration run.

    Attributes
    ----------
    positions : np.ndarray
        Recorded states, shape (T, 3), columns (x, y, t), float64
    direction : Direction
        Direction the run advanced in
    dt : float
        Unsigned step size
    requested_steps : int
        Step count that was asked for; ``len(self)`` may be smaller
    termination : str
        'completed' | 'evaluation_error' | 'cancelled'
    error : str, optional
        Evaluation error message when termination is 'evaluation_error'
    """
    positions: np.ndarray
    direction: Direction = Direction.FORWARD
    dt: float = 0.0
    requested_steps: int = 0
    termination: str = COMPLETED
    error: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        pos = np.array(self.positions, dtype=np.float64)
        if pos.size == 0:
            pos = pos.reshape(0, 3)
        if pos.ndim != 2 or pos.shape[1] != 3:
            raise ValueError(f"positions must have shape (T, 3), got {pos.shape}")
        pos.setflags(write=False)
        object.__setattr__(self, "positions", pos)

    # ---------- Sequence protocol ----------

    def __len__(self) -> int:
        return self.positions.shape[0]

    @overload
    def __getitem__(self, key: int) -> State: ...

    @overload
    def __getitem__(self, key: slice) -> "SampleSequence": ...

    def __getitem__(self, key):
        if isinstance(key, slice):
            return SampleSequence(
                positions=self.positions[key],
                direction=self.direction,
                dt=self.dt,
                requested_steps=self.requested_steps,
                termination=self.termination,
                error=self.error,
            )
        row = self.positions[key]
        return State(float(row[0]), float(row[1]), float(row[2]))

    def __iter__(self) -> Iterator[State]:
        for row in self.positions:
            yield State(float(row[0]), float(row[1]), float(row[2]))

    def __eq__(self, other) -> bool:
        if not isinstance(other, SampleSequence):
            return NotImplemented
        return (
            self.direction == other.direction
            and self.dt == other.dt
            and self.requested_steps == other.requested_steps
            and self.termination == other.termination
            and np.array_equal(self.positions, other.positions)
        )

    # ---------- Accessors ----------

    @property
    def x(self) -> np.ndarray:
        return self.positions[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.positions[:, 1]

    @property
    def t(self) -> np.ndarray:
        return self.positions[:, 2]

    @property
    def is_partial(self) -> bool:
        """True when fewer states than requested were recorded."""
        return self.termination != COMPLETED

    @property
    def initial(self) -> Optional[State]:
        return self[0] if len(self) else None

    @property
    def final(self) -> Optional[State]:
        return self[-1] if len(self) else None

    def to_list(self) -> list:
        """States as a list of [x, y, t] lists, the format line renderers take."""
        return self.positions.tolist()
