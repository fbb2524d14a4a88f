"""Built-in functions for the Lispy runtime environment.

This module defines list processing, arithmetic, comparison, conditionals,
definition, lambda construction and the print/error/load primitives, plus
the registration utilities that expose them to Lisp code.

Every builtin takes `(env, args)` where `args` is an owned S-expression of
evaluated arguments. Failures are raised as LispyError subclasses and turned
into Error values by the application engine.
"""
from __future__ import annotations

import logging
import math
import operator
from typing import Callable

from lispy.errors import LispyArityError, LispyDivisionByZero, LispyTypeError
from lispy.evaluation.evaluator import evaluate
from lispy.modules.loader import load_file
from lispy.types.environment import Environment
from lispy.types.function import Builtin, BuiltinFn, Closure
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

logger = logging.getLogger(__name__)


# -------------------------------
# Argument checks
# -------------------------------
def check_count(name: str, args: SExpression, expected: int) -> None:
    if len(args) != expected:
        raise LispyArityError(
            f"Function '{name}' passed incorrect number of arguments. "
            f"Got {len(args)}, Expected {expected}."
        )


def check_type(name: str, args: SExpression, index: int, *kinds: type[LispValue]) -> None:
    if not isinstance(args[index], kinds):
        expected = " or ".join(k.type_name for k in kinds)
        raise LispyTypeError(
            f"Function '{name}' passed incorrect type for argument {index}. "
            f"Got {type_name(args[index])}, Expected {expected}."
        )


def check_not_empty(name: str, args: SExpression, index: int) -> None:
    if len(args[index]) == 0:
        raise LispyTypeError(f"Function '{name}' passed {{}} for argument {index}.")


# -------------------------------
# List operations
# -------------------------------
def builtin_list(env: Environment, args: SExpression) -> QExpression:
    return args.into(QExpression)


def builtin_head(env: Environment, args: SExpression) -> QExpression:
    """Q-expression holding only the first element of the argument."""
    check_count("head", args, 1)
    check_type("head", args, 0, QExpression)
    check_not_empty("head", args, 0)
    q = args.take(0)
    del q.cells[1:]
    return q


def builtin_tail(env: Environment, args: SExpression) -> QExpression:
    """The argument with its first element removed."""
    check_count("tail", args, 1)
    check_type("tail", args, 0, QExpression)
    check_not_empty("tail", args, 0)
    q = args.take(0)
    q.pop(0)
    return q


def builtin_eval(env: Environment, args: SExpression) -> LispValue:
    """Evaluate a Q-expression as if it were an S-expression."""
    check_count("eval", args, 1)
    check_type("eval", args, 0, QExpression)
    x = args.take(0).into(SExpression)
    return evaluate(env, x)


def builtin_join(env: Environment, args: SExpression) -> QExpression:
    for i in range(len(args)):
        check_type("join", args, i, QExpression)
    if not args.cells:
        return QExpression()
    x = args.pop(0)
    while args.cells:
        x.join(args.pop(0))
    return x


# -------------------------------
# Arithmetic
# -------------------------------
def _trunc_div(a: int, b: int) -> int:
    # C semantics: quotient truncates toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _binary(op: str, x: LispValue, y: LispValue) -> LispValue:
    if op in ("/", "%") and y.value == 0:
        raise LispyDivisionByZero("Division By Zero.")

    if isinstance(x, Double) or isinstance(y, Double):
        a, b = float(x.value), float(y.value)
        match op:
            case "+": return Double(a + b)
            case "-": return Double(a - b)
            case "*": return Double(a * b)
            case "/": return Double(a / b)
            case "%": return Double(math.fmod(a, b))

    a, b = x.value, y.value
    match op:
        case "+": return Number(a + b)
        case "-": return Number(a - b)
        case "*": return Number(a * b)
        case "/": return Number(_trunc_div(a, b))
        case "%": return Number(a - b * _trunc_div(a, b))
    raise LispyTypeError(f"Unknown operator '{op}'")


def builtin_op(env: Environment, args: SExpression, op: str) -> LispValue:
    """Fold `op` over numeric arguments; any Double makes the result a Double."""
    if not args.cells:
        raise LispyArityError(f"Function '{op}' passed no arguments.")
    for i in range(len(args)):
        check_type(op, args, i, Number, Double)

    x = args.pop(0)
    # unary minus
    if op == "-" and not args.cells:
        return Double(-x.value) if isinstance(x, Double) else Number(-x.value)

    while args.cells:
        x = _binary(op, x, args.pop(0))
    return x


def builtin_add(env: Environment, args: SExpression) -> LispValue:
    return builtin_op(env, args, "+")


def builtin_sub(env: Environment, args: SExpression) -> LispValue:
    return builtin_op(env, args, "-")


def builtin_mul(env: Environment, args: SExpression) -> LispValue:
    return builtin_op(env, args, "*")


def builtin_div(env: Environment, args: SExpression) -> LispValue:
    return builtin_op(env, args, "/")


def builtin_mod(env: Environment, args: SExpression) -> LispValue:
    return builtin_op(env, args, "%")


# -------------------------------
# Comparison
# -------------------------------
ORDERING = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def builtin_ord(env: Environment, args: SExpression, op: str) -> Number:
    """Numeric ordering of exactly two numbers; 1 for true, 0 for false."""
    check_count(op, args, 2)
    check_type(op, args, 0, Number, Double)
    check_type(op, args, 1, Number, Double)
    return Number(int(ORDERING[op](args[0].value, args[1].value)))


def builtin_gt(env: Environment, args: SExpression) -> Number:
    return builtin_ord(env, args, ">")


def builtin_lt(env: Environment, args: SExpression) -> Number:
    return builtin_ord(env, args, "<")


def builtin_ge(env: Environment, args: SExpression) -> Number:
    return builtin_ord(env, args, ">=")


def builtin_le(env: Environment, args: SExpression) -> Number:
    return builtin_ord(env, args, "<=")


def builtin_cmp(env: Environment, args: SExpression, op: str) -> Number:
    """Structural (in)equality of any two values."""
    check_count(op, args, 2)
    same = args[0] == args[1]
    return Number(int(same if op == "==" else not same))


def builtin_eq(env: Environment, args: SExpression) -> Number:
    return builtin_cmp(env, args, "==")


def builtin_ne(env: Environment, args: SExpression) -> Number:
    return builtin_cmp(env, args, "!=")


# -------------------------------
# Conditionals
# -------------------------------
def builtin_if(env: Environment, args: SExpression) -> LispValue:
    """(if cond {then} {else}): evaluate the branch picked by a non-zero cond."""
    check_count("if", args, 3)
    check_type("if", args, 0, Number, Double)
    check_type("if", args, 1, QExpression)
    check_type("if", args, 2, QExpression)

    branch = args.pop(1) if args[0].value else args.pop(2)
    return evaluate(env, branch.into(SExpression))


# -------------------------------
# Definitions and lambdas
# -------------------------------
def builtin_var(env: Environment, args: SExpression, func: str) -> SExpression:
    if not args.cells:
        raise LispyArityError(f"Function '{func}' passed no arguments.")
    check_type(func, args, 0, QExpression)

    syms = args.pop(0)
    for sym in syms:
        if not isinstance(sym, Symbol):
            raise LispyTypeError(
                f"Function '{func}' cannot define non-symbol. "
                f"Got {type_name(sym)}, Expected Symbol."
            )
    if len(syms) != len(args):
        raise LispyArityError(
            f"Function '{func}' cannot define incorrect number of values to symbols. "
            f"Got {len(args)} values for {len(syms)} symbols."
        )

    for sym in syms:
        value = args.pop(0)
        if func == "def":
            env.define_global(sym, value)
        else:
            env.define(sym, value)
    return SExpression()


def builtin_def(env: Environment, args: SExpression) -> SExpression:
    return builtin_var(env, args, "def")


def builtin_put(env: Environment, args: SExpression) -> SExpression:
    return builtin_var(env, args, "=")


def builtin_lambda(env: Environment, args: SExpression) -> Closure:
    """(\\ {formals} {body}) builds a closure with a fresh environment."""
    check_count("\\", args, 2)
    check_type("\\", args, 0, QExpression)
    check_type("\\", args, 1, QExpression)

    for formal in args[0]:
        if not isinstance(formal, Symbol):
            raise LispyTypeError(
                f"Cannot define non-symbol. Got {type_name(formal)}, Expected Symbol."
            )

    formals = args.pop(0)
    body = args.pop(0).into(SExpression)
    return Closure(formals, body, Environment())


# -------------------------------
# I/O
# -------------------------------
def builtin_load(env: Environment, args: SExpression) -> LispValue:
    check_count("load", args, 1)
    check_type("load", args, 0, String)
    return load_file(env, args[0].value)


def builtin_print(env: Environment, args: SExpression) -> SExpression:
    print(" ".join(str(cell) for cell in args))
    return SExpression()


def builtin_error(env: Environment, args: SExpression) -> Error:
    check_count("error", args, 1)
    check_type("error", args, 0, String)
    return Error(args[0].value)


# -------------------------------
# Registration
# -------------------------------
BUILTINS: dict[str, BuiltinFn] = {
    # List functions
    "list": builtin_list,
    "head": builtin_head,
    "tail": builtin_tail,
    "eval": builtin_eval,
    "join": builtin_join,
    # Mathematical functions
    "+": builtin_add,
    "-": builtin_sub,
    "*": builtin_mul,
    "/": builtin_div,
    "%": builtin_mod,
    # Comparison functions
    ">": builtin_gt,
    "<": builtin_lt,
    ">=": builtin_ge,
    "<=": builtin_le,
    "==": builtin_eq,
    "!=": builtin_ne,
    # Conditional functions
    "if": builtin_if,
    # Variable functions
    "def": builtin_def,
    "=": builtin_put,
    "\\": builtin_lambda,
    # String functions
    "load": builtin_load,
    "print": builtin_print,
    "error": builtin_error,
}


def define_builtin(env: Environment, name: str, fn: Callable[[Environment, SExpression], LispValue]) -> None:
    """Bind `name` to a Builtin wrapping `fn` in `env`."""
    env.define(name, Builtin(name, fn))


def register(env: Environment) -> None:
    for name, fn in BUILTINS.items():
        define_builtin(env, name, fn)
    logger.debug("Registered %d builtins", len(BUILTINS))
