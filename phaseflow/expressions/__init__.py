"""
phaseflow Expressions

Formula parsing and evaluation for user-entered planar vector fields.
Formulas are functions of the free variables x, y and t:

    field = VectorField("y", "-x")
    dx, dy = field(1.0, 0.0, 0.0)

Failures are reported per evaluation as FormulaEvaluationError.
"""

from .evaluator import (
    Formula,
    FormulaEvaluationError,
    VectorField,
    FieldLike,
    VARIABLES,
    as_vector_field,
    compile_formula,
    evaluate,
)

__all__ = [
    "Formula",
    "FormulaEvaluationError",
    "VectorField",
    "FieldLike",
    "VARIABLES",
    "as_vector_field",
    "compile_formula",
    "evaluate",
]
