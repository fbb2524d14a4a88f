from lispy.types.value import (
    LispValue,
    Number,
    Double,
    String,
    Symbol,
    Error,
    Expression,
    SExpression,
    QExpression,
    type_name,
    equal,
)
from lispy.types.environment import Environment
from lispy.types.function import Function, Builtin, Closure

__all__ = [
    "LispValue",
    "Number",
    "Double",
    "String",
    "Symbol",
    "Error",
    "Expression",
    "SExpression",
    "QExpression",
    "Function",
    "Builtin",
    "Closure",
    "Environment",
    "type_name",
    "equal",
]
