"""Runtime values for Lispy.

Every datum the evaluator touches is an instance of one of the classes below.
Containers (S-expressions and Q-expressions) exclusively own their children:
moving a child between containers goes through `pop`/`take`/`join`, and
sharing goes through `copy`, which is always deep for data values.
"""

from __future__ import annotations

import re
import sys
from io import StringIO
from typing import ClassVar, Iterable, Iterator

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "0": "\0",
}
_UNESCAPES = {v: "\\" + k for k, v in _ESCAPES.items() if k != "'"}
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def unescape(text: str) -> str:
    """Decode C-style backslash escapes; unknown escapes are kept verbatim."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


def escape(text: str) -> str:
    return "".join(_UNESCAPES.get(ch, ch) for ch in text)


def wrap_int64(value: int) -> int:
    """Reduce `value` to signed 64-bit two's complement."""
    return ((value - INT64_MIN) % (1 << 64)) + INT64_MIN


class LispValue:
    """Base class of every runtime value."""

    __slots__ = ()
    type_name: ClassVar[str] = "Unknown"

    def copy(self) -> LispValue:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class Number(LispValue):
    __slots__ = ("value",)
    type_name = "Number"

    def __init__(self, value: int):
        self.value: int = wrap_int64(value)

    def copy(self) -> Number:
        return Number(self.value)

    def __eq__(self, other) -> bool:
        if isinstance(other, (Number, Double)):
            return self.value == other.value
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Number({self.value})"


class Double(LispValue):
    __slots__ = ("value",)
    type_name = "Double"

    def __init__(self, value: float):
        self.value: float = float(value)

    def copy(self) -> Double:
        return Double(self.value)

    def __eq__(self, other) -> bool:
        if isinstance(other, (Number, Double)):
            return self.value == other.value
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        return repr(self.value)

    def __repr__(self) -> str:
        return f"Double({self.value!r})"


class String(LispValue):
    __slots__ = ("value",)
    type_name = "String"

    def __init__(self, value: str):
        self.value: str = value

    def copy(self) -> String:
        return String(self.value)

    def __eq__(self, other) -> bool:
        if isinstance(other, String):
            return self.value == other.value
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        return f'"{escape(self.value)}"'


class Symbol(LispValue):
    __slots__ = ("name",)
    type_name = "Symbol"

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash
        self.name: str = sys.intern(name)

    def copy(self) -> Symbol:
        return Symbol(self.name)

    def __eq__(self, other) -> bool:
        if isinstance(other, Symbol):
            return self.name == other.name
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"


class Error(LispValue):
    """An error is an ordinary value; it carries nothing but its message."""

    __slots__ = ("message",)
    type_name = "Error"

    def __init__(self, message: str):
        self.message: str = message

    def copy(self) -> Error:
        return Error(self.message)

    def __eq__(self, other) -> bool:
        if isinstance(other, Error):
            return self.message == other.message
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        return f"Error: {self.message}"

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


def write_cells(buffer: StringIO, cells: Iterable[LispValue], open_: str, close: str) -> None:
    buffer.write(open_)
    buffer.write(" ".join(str(cell) for cell in cells))
    buffer.write(close)


class Expression(LispValue):
    """Ordered, mutable sequence of owned values."""

    __slots__ = ("cells",)
    open_char: ClassVar[str] = ""
    close_char: ClassVar[str] = ""

    def __init__(self, cells: Iterable[LispValue] = ()):
        self.cells: list[LispValue] = list(cells)

    def add(self, value: LispValue) -> Expression:
        self.cells.append(value)
        return self

    def pop(self, index: int = 0) -> LispValue:
        """Move the element at `index` out; the rest keep their order."""
        return self.cells.pop(index)

    def take(self, index: int = 0) -> LispValue:
        """Like `pop`, but the container is discarded afterwards."""
        value = self.cells.pop(index)
        self.cells.clear()
        return value

    def join(self, other: Expression) -> Expression:
        """Move every element of `other` onto the end of this expression."""
        self.cells.extend(other.cells)
        other.cells.clear()
        return self

    def into(self, cls: type[Expression]) -> Expression:
        """Move every element into a new, empty container of class `cls`."""
        moved = cls()
        moved.cells, self.cells = self.cells, []
        return moved

    def copy(self) -> Expression:
        return type(self)(cell.copy() for cell in self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> LispValue:
        return self.cells[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, Expression):
            return (
                type(self) is type(other)
                and len(self.cells) == len(other.cells)
                and all(a == b for a, b in zip(self.cells, other.cells))
            )
        if isinstance(other, LispValue):
            return False
        return NotImplemented

    def __str__(self) -> str:
        with StringIO() as buffer:
            write_cells(buffer, self.cells, self.open_char, self.close_char)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cells!r})"


class SExpression(Expression):
    __slots__ = ()
    type_name = "S-Expression"
    open_char = "("
    close_char = ")"


class QExpression(Expression):
    __slots__ = ()
    type_name = "Q-Expression"
    open_char = "{"
    close_char = "}"


def type_name(value: LispValue) -> str:
    """Human readable variant name, used in error messages."""
    return value.type_name


def equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality; Number and Double compare by numeric value."""
    return a == b
