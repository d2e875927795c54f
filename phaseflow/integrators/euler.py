# phaseflow/integrators/euler.py

from __future__ import annotations

from .base import FieldFn, State


def euler_step(state: State, h: float, field_fn: FieldFn) -> State:
    """
    Forward Euler step: x_{n+1} = x_n + h * f(x_n, t_n).

    First order; kept for comparison against ``rk4_step`` on the same field.
    """
    x, y, t = state
    vx, vy = field_fn(x, y, t)
    return State(x + h * vx, y + h * vy, t + h)
