"""
phaseflow Integrators

Explicit fixed-step methods for planar systems dx/dt = f(x, y, t),
dy/dt = g(x, y, t). Each stepper follows the signature:

    new_state = step(state, h, field_fn)

where:
- state: State(x, y, t)
- h: signed step size (negative for backward integration)
- field_fn: callable (x, y, t) -> (dx, dy)

``integrate`` drives a stepper over a number of steps and returns the
recorded SampleSequence.
"""

from .base import (
    FieldFn,
    StepperFn,
    State,
    Direction,
    SampleSequence,
    COMPLETED,
    EVALUATION_ERROR,
    CANCELLED,
)
from .euler import euler_step
from .rk2 import rk2_step
from .rk4 import rk4_step
from .solver import STEPPERS, get_stepper, integrate

__all__ = [
    "FieldFn",
    "StepperFn",
    "State",
    "Direction",
    "SampleSequence",
    "COMPLETED",
    "EVALUATION_ERROR",
    "CANCELLED",
    "euler_step",
    "rk2_step",
    "rk4_step",
    "STEPPERS",
    "get_stepper",
    "integrate",
]
