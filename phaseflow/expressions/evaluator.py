# phaseflow/expressions/evaluator.py
"""
Expression evaluation for user-entered vector fields.

Formulas are parsed once with SymPy and compiled with ``lambdify`` onto the
``math`` module, then evaluated many times with plain floats. Anything that
goes wrong, at parse time or at a particular point, surfaces as
``FormulaEvaluationError`` when the formula is evaluated, so a bad formula
never prevents a ``VectorField`` from being constructed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Mapping, Optional, Tuple, Union

import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication,
    implicit_application,
    convert_xor,
)

X, Y, T = sp.symbols("x y t")
VARIABLES: Tuple[str, ...] = ("x", "y", "t")

_TRANSFORMATIONS = standard_transformations + (
    convert_xor,
    implicit_multiplication,
    implicit_application,
)


def _log10(arg):
    return sp.log(arg, 10)


# Names a formula may use besides x, y, t
_NAMESPACE = {
    "x": X,
    "y": Y,
    "t": T,
    "pi": sp.pi,
    "e": sp.E,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "atan2": sp.atan2,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "asinh": sp.asinh,
    "acosh": sp.acosh,
    "atanh": sp.atanh,
    "exp": sp.exp,
    "log": sp.log,
    "ln": sp.log,
    "log10": _log10,
    "sqrt": sp.sqrt,
    "abs": sp.Abs,
    "sign": sp.sign,
    "floor": sp.floor,
    "ceil": sp.ceiling,
    "min": sp.Min,
    "max": sp.Max,
}

# Only what the parser's own transformations emit
_PARSER_GLOBALS = {
    "Symbol": sp.Symbol,
    "Function": sp.Function,
    "Integer": sp.Integer,
    "Float": sp.Float,
    "Rational": sp.Rational,
    "factorial": sp.factorial,
}


class FormulaEvaluationError(ValueError):
    """
    A formula could not be evaluated at a point.

    Attributes
    ----------
    formula : str
        Source text of the formula
    reason : str
        Human readable cause (parse error, unknown identifier, domain error)
    """

    def __init__(self, formula: str, reason: str):
        self.formula = formula
        self.reason = reason
        super().__init__(f"cannot evaluate '{formula}': {reason}")


def _parse(text: str) -> sp.Expr:
    """Parse ``text`` into a SymPy expression over x, y, t or raise with a reason."""
    if not isinstance(text, str):
        raise FormulaEvaluationError(str(text), "formula must be a string")
    if not text.strip():
        raise FormulaEvaluationError(text, "empty formula")

    try:
        expr = parse_expr(
            text,
            local_dict=dict(_NAMESPACE),
            global_dict=dict(_PARSER_GLOBALS),
            transformations=_TRANSFORMATIONS,
        )
    except Exception as exc:  # tokenizer and parser raise many unrelated types
        raise FormulaEvaluationError(text, f"parse error ({type(exc).__name__}: {exc})") from exc

    if not isinstance(expr, sp.Expr):
        raise FormulaEvaluationError(text, "not a scalar expression")

    unknown = sorted(str(s) for s in expr.free_symbols - {X, Y, T})
    if unknown:
        raise FormulaEvaluationError(text, f"unknown identifier(s): {', '.join(unknown)}")

    undefined = sorted(str(f.func) for f in expr.atoms(AppliedUndef))
    if undefined:
        raise FormulaEvaluationError(text, f"unknown function(s): {', '.join(undefined)}")

    if expr.has(sp.zoo) or expr.has(sp.nan):
        raise FormulaEvaluationError(text, "expression is undefined")

    return expr


class Formula:
    """
    A single compiled scalar formula in x, y and t.

    Construction never fails on bad input; the compile error is kept and
    reported by every call instead.

    Parameters
    ----------
    text : str
        Formula source, e.g. ``"y"``, ``"-x + sin(t)"``, ``"x^2 - 2xy"``
    """

    def __init__(self, text: str):
        self.text = text
        self.expression: Optional[sp.Expr] = None
        self.error: Optional[str] = None
        self._fn: Optional[Callable[[float, float, float], object]] = None

        try:
            self.expression = _parse(text)
            self._fn = sp.lambdify((X, Y, T), self.expression, modules="math")
        except FormulaEvaluationError as exc:
            self.error = exc.reason
        except Exception as exc:  # code generation failures
            self.error = f"compile error ({type(exc).__name__}: {exc})"

    @property
    def is_valid(self) -> bool:
        """Whether the formula parsed and compiled."""
        return self.error is None

    def __call__(self, x: float, y: float, t: float) -> float:
        """
        Evaluate at (x, y, t).

        Raises
        ------
        FormulaEvaluationError
            On compile errors, arithmetic or domain errors, and non-real results.
        """
        if self._fn is None:
            raise FormulaEvaluationError(self.text, self.error or "not compiled")

        try:
            value = self._fn(float(x), float(y), float(t))
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise FormulaEvaluationError(self.text, f"{type(exc).__name__}: {exc}") from exc

        if isinstance(value, complex):
            raise FormulaEvaluationError(self.text, f"non-real result {value}")
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise FormulaEvaluationError(self.text, f"non-numeric result {value!r}") from exc

    def __repr__(self) -> str:
        status = "ok" if self.is_valid else f"error={self.error!r}"
        return f"Formula({self.text!r}, {status})"


@lru_cache(maxsize=256)
def compile_formula(text: str) -> Formula:
    """Compile ``text`` once; repeated requests share the same ``Formula``."""
    return Formula(text)


def evaluate(formula: str, bindings: Mapping[str, float]) -> float:
    """
    Evaluate a formula string with named variable bindings.

    Parameters
    ----------
    formula : str
        Formula in x, y, t
    bindings : mapping
        Must provide 'x', 'y' and 't'; extra names are ignored

    Returns
    -------
    float

    Raises
    ------
    FormulaEvaluationError
    """
    missing = [name for name in VARIABLES if name not in bindings]
    if missing:
        raise FormulaEvaluationError(formula, f"missing binding(s): {', '.join(missing)}")
    return compile_formula(formula)(bindings["x"], bindings["y"], bindings["t"])


@dataclass(frozen=True)
class VectorField:
    """
    Planar vector field dx/dt = f(x, y, t), dy/dt = g(x, y, t).

    Attributes
    ----------
    dx : str
        Formula for the x component
    dy : str
        Formula for the y component
    """
    dx: str
    dy: str
    fx: Formula = field(init=False, repr=False, compare=False)
    fy: Formula = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "fx", compile_formula(self.dx))
        object.__setattr__(self, "fy", compile_formula(self.dy))

    @property
    def is_valid(self) -> bool:
        """Whether both components compiled."""
        return self.fx.is_valid and self.fy.is_valid

    @property
    def equations(self) -> Tuple[str, str]:
        return (self.dx, self.dy)

    def evaluate(self, x: float, y: float, t: float) -> Tuple[float, float]:
        """Return (dx, dy) at (x, y, t); raises ``FormulaEvaluationError``."""
        return self.fx(x, y, t), self.fy(x, y, t)

    def __call__(self, x: float, y: float, t: float) -> Tuple[float, float]:
        return self.evaluate(x, y, t)


FieldLike = Union[VectorField, Tuple[str, str], Callable[[float, float, float], Tuple[float, float]]]


def as_vector_field(field_like: FieldLike) -> Callable[[float, float, float], Tuple[float, float]]:
    """
    Normalize the accepted field inputs to a callable ``(x, y, t) -> (dx, dy)``.

    A ``(dx, dy)`` pair of strings becomes a ``VectorField``; callables pass through.
    """
    if isinstance(field_like, VectorField):
        return field_like
    if isinstance(field_like, (tuple, list)) and len(field_like) == 2 \
            and all(isinstance(s, str) for s in field_like):
        return VectorField(field_like[0], field_like[1])
    if callable(field_like):
        return field_like
    raise TypeError(
        f"field must be a VectorField, a (dx, dy) pair of strings, or a callable; got {type(field_like).__name__}"
    )
