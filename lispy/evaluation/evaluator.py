"""Core evaluator for the Lispy interpreter.

Symbols resolve through the environment chain, S-expressions reduce by
evaluating their children and applying the head, and everything else is
self-evaluating. Failures are returned as Error values.
"""

from __future__ import annotations

from lispy.errors import LispyError
from lispy.evaluation.apply import call
from lispy.types.environment import Environment
from lispy.types.function import Builtin, Closure, Function
from lispy.types.value import (
    Double,
    Error,
    LispValue,
    Number,
    QExpression,
    SExpression,
    String,
    Symbol,
    type_name,
)


def evaluate(env: Environment, value: LispValue) -> LispValue:
    """Reduce `value` in `env`. The sole evaluation entry point."""
    match value:
        case Symbol():
            try:
                return env.lookup(value)
            except LispyError as exc:
                return Error(str(exc))
        case SExpression():
            return evaluate_sexpr(env, value)
        case Number() | Double() | String() | Error() | QExpression() | Builtin() | Closure():
            return value
    raise TypeError(f"Cannot evaluate non-Lispy value {value!r}")


def evaluate_sexpr(env: Environment, sexpr: SExpression) -> LispValue:
    """Evaluate children in place, then apply the head to the rest."""
    cells = sexpr.cells
    for i, cell in enumerate(cells):
        cells[i] = evaluate(env, cell)

    # First error wins; later ones are dropped with the expression.
    for i, cell in enumerate(cells):
        if isinstance(cell, Error):
            return sexpr.take(i)

    if not cells:
        return sexpr
    if len(cells) == 1:
        return sexpr.take(0)

    head = sexpr.pop(0)
    if not isinstance(head, Function):
        return Error(f"expected Function, got {type_name(head)}")

    return call(env, head, sexpr, evaluate)
