# phaseflow/integrators/solver.py
"""
Fixed-step integration of a planar vector field from one initial state.

The loop records the current state before each step, so a run of ``steps``
steps yields ``steps`` states beginning with the initial one. An evaluation
failure ends the run and the states gathered so far are returned.
"""

from __future__ import annotations
from typing import Callable, Dict, Optional, Sequence, Union
import warnings

from ..expressions import FieldLike, FormulaEvaluationError, as_vector_field
from ..utils.config import InvalidConfigurationError, require_count, require_positive
from ..utils.logging import ProgressCallback
from .base import (
    CANCELLED,
    COMPLETED,
    EVALUATION_ERROR,
    Direction,
    SampleSequence,
    State,
    StepperFn,
)
from .euler import euler_step
from .rk2 import rk2_step
from .rk4 import rk4_step

STEPPERS: Dict[str, StepperFn] = {
    "rk4": rk4_step,
    "rk2": rk2_step,
    "euler": euler_step,
}


def get_stepper(name: str) -> StepperFn:
    """Look up a stepper by name ('rk4', 'rk2', 'euler')."""
    try:
        return STEPPERS[str(name).lower()]
    except KeyError:
        raise InvalidConfigurationError(
            f"Unknown integrator '{name}'. Available: {sorted(STEPPERS)}"
        )


def _as_state(start: Union[State, Sequence[float]]) -> State:
    if len(start) != 3:
        raise InvalidConfigurationError(f"start must be (x, y, t), got {start!r}")
    return State(float(start[0]), float(start[1]), float(start[2]))


def integrate(
    field: FieldLike,
    start: Union[State, Sequence[float]],
    dt: float,
    steps: int,
    direction: Union[Direction, str] = Direction.FORWARD,
    *,
    method: str = "rk4",
    should_cancel: Optional[Callable[[], bool]] = None,
    progress: Optional[ProgressCallback] = None,
) -> SampleSequence:
    """
    Integrate ``field`` from ``start`` with a fixed step.

    Parameters
    ----------
    field : VectorField, (dx, dy) strings, or callable(x, y, t) -> (dx, dy)
        Right-hand side of the system
    start : State or (x, y, t)
        Initial state, always the first recorded entry
    dt : float
        Unsigned step size, > 0
    steps : int
        Number of steps, >= 0
    direction : Direction or {'forward', 'backward'}
        Sign of the applied step: +dt forward, -dt backward
    method : str
        Stepper name, 'rk4' by default
    should_cancel : callable() -> bool, optional
        Checked after each recorded state; returning True ends the run
    progress : ProgressCallback, optional
        Called as ``progress(step, steps)`` after each completed step

    Returns
    -------
    SampleSequence
        ``steps`` states, or fewer if evaluation failed or the run was
        cancelled. ``steps == 0`` yields just the initial state.

    Raises
    ------
    InvalidConfigurationError
        For a non-positive ``dt``, a negative or non-integer ``steps``, an
        unknown ``direction`` or ``method``. Nothing is evaluated in that case.
    """
    dt = require_positive("dt", dt)
    steps = require_count("steps", steps)
    direction = Direction.coerce(direction)
    stepper = get_stepper(method)
    field_fn = as_vector_field(field)
    state = _as_state(start)

    if steps == 0:
        return SampleSequence([state], direction=direction, dt=dt, requested_steps=0)

    h = direction.sign * dt
    states = []
    termination = COMPLETED
    error: Optional[str] = None

    for i in range(steps):
        states.append(state)

        if should_cancel is not None and should_cancel():
            termination = CANCELLED
            break

        try:
            state = stepper(state, h, field_fn)
        except FormulaEvaluationError as exc:
            termination = EVALUATION_ERROR
            error = str(exc)
            break

        if progress is not None:
            progress(i + 1, steps)

    if termination == EVALUATION_ERROR:
        warnings.warn(
            f"{direction.value} integration stopped after {len(states)} of {steps} states: {error}",
            RuntimeWarning,
            stacklevel=2,
        )

    return SampleSequence(
        states,
        direction=direction,
        dt=dt,
        requested_steps=steps,
        termination=termination,
        error=error,
    )
