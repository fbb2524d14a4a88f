"""Convert a parse tree into Lispy values.

Nodes are classified by tag substring, so any front end producing the same
tagging scheme can feed the evaluator.
"""

from __future__ import annotations

from lispy.reader.parser import ParseNode, parse
from lispy.types.value import (
    INT64_MAX,
    INT64_MIN,
    Double,
    Error,
    Expression,
    LispValue,
    Number,
    QExpression,
    SExpression,
    String,
    Symbol,
    unescape,
)

BRACKETS = frozenset("(){}")


def read_number(node: ParseNode) -> LispValue:
    text = node.contents
    if "." in text:
        return Double(float(text))
    x = int(text)
    if not INT64_MIN <= x <= INT64_MAX:
        return Error("invalid number")
    return Number(x)


def read_string(node: ParseNode) -> String:
    # strip the surrounding quotes
    return String(unescape(node.contents[1:-1]))


def _skip(child: ParseNode) -> bool:
    return child.contents in BRACKETS or child.tag == "regex" or "comment" in child.tag


def read(node: ParseNode) -> LispValue:
    """Build the value for `node`; the root node reads as an S-expression."""
    if "number" in node.tag:
        return read_number(node)
    if "string" in node.tag:
        return read_string(node)
    if "symbol" in node.tag:
        return Symbol(node.contents)

    x: Expression
    if "qexpr" in node.tag:
        x = QExpression()
    elif node.tag == ">" or "sexpr" in node.tag:
        x = SExpression()
    else:
        raise ValueError(f"Cannot read parse node tagged {node.tag!r}")

    for child in node.children:
        if _skip(child):
            continue
        x.add(read(child))
    return x


def read_source(source: str, filename: str = "<input>") -> SExpression:
    """Parse and read `source`; the result holds one value per top-level form."""
    return read(parse(source, filename))
