# Core type aliases for Lispy's runtime.
#
# Values are the classes in lispy.types (Number, Double, String, Symbol, Error,
# SExpression, QExpression, Builtin, Closure). Every evaluator entry point has
# the shape `evaluate(env, value) -> value`, and builtins the shape
# `builtin(env, args) -> value` where `args` is an owned S-expression.

from typing import Callable

from lispy.types.value import LispValue
from lispy.types.environment import Environment

__version__ = "0.1.0"

# Evaluator function type: passed to the application engine and loader
EvaluatorFn = Callable[[Environment, LispValue], LispValue]
