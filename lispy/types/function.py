"""Function values: native builtins and user-defined closures."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from lispy.types.environment import Environment
from lispy.types.value import LispValue, QExpression, SExpression, write_cells

BuiltinFn = Callable[[Environment, SExpression], LispValue]


class Function(LispValue):
    __slots__ = ()
    type_name = "Function"


class Builtin(Function):
    """A native operation. Copies share the operation; equality is identity."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, args: SExpression) -> LispValue:
        return self.fn(env, args)

    def copy(self) -> Builtin:
        return self

    def __eq__(self, other) -> bool:
        if isinstance(other, Builtin):
            return self.fn is other.fn
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


class Closure(Function):
    """A first-class lambda with formal parameters, body, and private env.

    `formals` is a Q-expression of Symbols, optionally ending in `& name`.
    Binding pops formals off the front; once none remain, `body` is
    evaluated as an S-expression inside `env`.
    """

    __slots__ = ("formals", "body", "env")

    def __init__(
        self, formals: QExpression, body: SExpression, env: Environment | None = None
    ):
        self.formals: QExpression = formals
        self.body: SExpression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Closure:
        return Closure(self.formals.copy(), self.body.copy(), self.env.copy())

    def __eq__(self, other) -> bool:
        if isinstance(other, Closure):
            return self.formals == other.formals and self.body == other.body
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            write_cells(buffer, self.body.cells, "{", "}")
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Closure({str(self)!r})"
