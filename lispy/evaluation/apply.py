"""Application engine for Lispy.

This module centralizes function application semantics for the interpreter:
- Builtins are called directly with the calling environment and the owned
  argument list. Any LispyError they raise becomes an Error value here, so no
  exception escapes `evaluate`.
- Closures bind arguments to their formals one at a time. Fewer arguments
  than formals yields a partially applied copy (currying); `& name` collects
  the remaining arguments into a Q-expression.

Keeping this logic in one place prevents duplication between the evaluator
and builtins such as `eval`.
"""

from __future__ import annotations

from lispy import EvaluatorFn
from lispy.errors import LispyError
from lispy.types.environment import Environment
from lispy.types.function import Builtin, Closure, Function
from lispy.types.value import Error, LispValue, QExpression, SExpression, Symbol, type_name

VARIADIC = "&"
MALFORMED_VARIADIC = "'&' not followed by exactly one symbol"


def _is_variadic(formal: LispValue) -> bool:
    return isinstance(formal, Symbol) and formal.name == VARIADIC


def apply_closure(
    env: Environment,
    fn: Closure,
    args: SExpression,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Bind `args` to the formals of `fn` and evaluate or curry it.

    `fn` is consumed: its formals are popped and its environment receives the
    bindings. When every formal is bound, the closure environment is
    re-parented to `env` (the caller) and the body is evaluated there.
    Otherwise a copy of the partially bound closure is returned.
    """
    given = len(args)
    total = len(fn.formals)

    while args.cells:
        if not fn.formals.cells:
            return Error(f"too many arguments: got {given}, expected {total}")

        formal = fn.formals.pop(0)
        if _is_variadic(formal):
            if len(fn.formals) != 1:
                return Error(MALFORMED_VARIADIC)
            rest = fn.formals.pop(0)
            fn.env.define(rest, args.into(QExpression))
            break

        fn.env.define(formal, args.pop(0))

    # No variadic arguments supplied: `& name` still binds name to {}
    if fn.formals.cells and _is_variadic(fn.formals[0]):
        if len(fn.formals) != 2:
            return Error(MALFORMED_VARIADIC)
        fn.formals.pop(0)
        fn.env.define(fn.formals.pop(0), QExpression())

    if not fn.formals.cells:
        fn.env.outer = env
        return evaluate_fn(fn.env, fn.body.copy())

    return fn.copy()


def call(
    env: Environment,
    fn: Function,
    args: SExpression,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Builtin or a Closure to already evaluated arguments."""
    try:
        match fn:
            case Builtin():
                return fn(env, args)
            case Closure():
                return apply_closure(env, fn, args, evaluate_fn)
    except LispyError as exc:
        return Error(str(exc))
    return Error(f"expected Function, got {type_name(fn)}")
