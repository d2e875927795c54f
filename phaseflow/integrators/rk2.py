# phaseflow/integrators/rk2.py
"""
Second-order Runge-Kutta (midpoint) integration.
"""

from __future__ import annotations

from .base import FieldFn, State


def rk2_step(state: State, h: float, field_fn: FieldFn) -> State:
    """
    Midpoint rule: slope at the half step predicted by an Euler half step.

    Parameters
    ----------
    state : State
        Current (x, y, t)
    h : float
        Signed step size
    field_fn : callable(x, y, t) -> (dx, dy)

    Returns
    -------
    State
        State at t + h
    """
    x, y, t = state
    h_half = 0.5 * h

    v1x, v1y = field_fn(x, y, t)
    v2x, v2y = field_fn(x + h_half * v1x, y + h_half * v1y, t + h_half)

    return State(x + h * v2x, y + h * v2y, t + h)
