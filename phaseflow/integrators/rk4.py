# phaseflow/integrators/rk4.py

from __future__ import annotations

from .base import FieldFn, State


def _rk4_combine(v: float, h: float, k1: float, k2: float, k3: float, k4: float) -> float:
    return v + h * (k1 + 2.0 * k2 + 2.0 * k3 + k4) / 6.0


def rk4_step(state: State, h: float, field_fn: FieldFn) -> State:
    """
    Classical fourth-order Runge-Kutta step.

    Parameters
    ----------
    state : State
        Current (x, y, t)
    h : float
        Signed step size; negative integrates backward in time
    field_fn : callable(x, y, t) -> (dx, dy)

    Returns
    -------
    State
        State at t + h

    Raises
    ------
    FormulaEvaluationError
        Propagated from ``field_fn`` unchanged; the caller decides what to keep.
    """
    x, y, t = state
    h_half = 0.5 * h
    t_half = t + h_half
    t_full = t + h

    # k1 at (x, t)
    k1x, k1y = field_fn(x, y, t)

    k2x, k2y = field_fn(x + h_half * k1x, y + h_half * k1y, t_half)

    k3x, k3y = field_fn(x + h_half * k2x, y + h_half * k2y, t_half)

    k4x, k4y = field_fn(x + h * k3x, y + h * k3y, t_full)

    return State(
        _rk4_combine(x, h, k1x, k2x, k3x, k4x),
        _rk4_combine(y, h, k1y, k2y, k3y, k4y),
        t_full,
    )
