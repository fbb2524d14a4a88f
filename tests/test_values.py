import pytest
from hypothesis import given, strategies as st

from lispy.types.environment import Environment
from lispy.types.function import Builtin, Closure
from lispy.types.value import (
    INT64_MAX,
    INT64_MIN,
    Double,
    Error,
    Number,
    QExpression,
    SExpression,
    String,
    Symbol,
    equal,
    type_name,
)


def _noop(env, args):
    return SExpression()


def _closure(env=None):
    return Closure(
        QExpression([Symbol("x"), Symbol("y")]),
        SExpression([Symbol("+"), Symbol("x"), Symbol("y")]),
        env,
    )


@pytest.mark.parametrize(
    "value,name",
    [
        (Number(1), "Number"),
        (Double(1.5), "Double"),
        (Error("e"), "Error"),
        (Symbol("s"), "Symbol"),
        (String("s"), "String"),
        (SExpression(), "S-Expression"),
        (QExpression(), "Q-Expression"),
        (Builtin("noop", _noop), "Function"),
        (_closure(), "Function"),
    ]
)
def test_type_name(value, name):
    assert type_name(value) == name


# -----------------------------------------------------
# Equality
# -----------------------------------------------------

def test_numeric_equality_crosses_kinds():
    assert Number(1) == Double(1.0)
    assert Double(2.0) == Number(2)
    assert Number(1) != Double(1.5)


def test_text_equality():
    assert Error("x") != Error("y")
    assert Error("x") == Error("x")
    assert Symbol("a") == Symbol("a")
    assert String("a") == String("a")
    assert Symbol("a") != String("a")
    assert String("1") != Number(1)


def test_list_equality():
    assert QExpression([Number(1), Number(2)]) == QExpression([Number(1), Double(2.0)])
    assert QExpression([Number(1)]) != QExpression([Number(1), Number(2)])
    assert SExpression([Number(1)]) != QExpression([Number(1)])
    nested = QExpression([QExpression([Symbol("a")]), String("b")])
    assert nested == nested.copy()


def test_function_equality():
    assert Builtin("a", _noop) == Builtin("b", _noop)
    assert Builtin("a", _noop) != Builtin("a", lambda env, args: SExpression())
    outer = Environment()
    outer.define("z", Number(9))
    assert _closure(Environment()) == _closure(Environment(outer))
    assert _closure() != Builtin("noop", _noop)
    other = Closure(QExpression([Symbol("x")]), SExpression([Symbol("x")]))
    assert _closure() != other


def test_equal_helper_matches_operator():
    assert equal(Number(3), Double(3.0))
    assert not equal(Number(3), Symbol("3"))


@given(st.integers(min_value=INT64_MIN, max_value=INT64_MAX))
def test_number_double_equality_follows_numeric_value(n):
    assert (Number(n) == Double(float(n))) == (n == float(n))
    assert Number(n).copy() == Number(n)


# -----------------------------------------------------
# Copy semantics
# -----------------------------------------------------

def test_expression_copy_is_deep():
    original = QExpression([Number(1), QExpression([Number(2)])])
    clone = original.copy()
    clone[1].add(Number(3))
    clone.pop(0)
    assert original == QExpression([Number(1), QExpression([Number(2)])])
    assert original[1] is not clone[0]


def test_builtin_copy_keeps_identity():
    fn = Builtin("noop", _noop)
    assert fn.copy().fn is fn.fn


def test_closure_copy_shares_parent_and_copies_bindings():
    parent = Environment()
    fn = _closure(Environment(parent))
    fn.env.define("x", QExpression([Number(1)]))

    clone = fn.copy()
    assert clone.env is not fn.env
    assert clone.env.outer is parent
    assert clone.env.vars["x"] == fn.env.vars["x"]
    assert clone.env.vars["x"] is not fn.env.vars["x"]
    assert clone.formals is not fn.formals
    assert clone.body is not fn.body
    assert clone == fn


# -----------------------------------------------------
# Container ownership helpers
# -----------------------------------------------------

def test_pop_take_join():
    s = SExpression([Number(1), Number(2), Number(3)])
    assert s.pop(1) == Number(2)
    assert s == SExpression([Number(1), Number(3)])

    assert s.take(1) == Number(3)
    assert len(s) == 0

    a = QExpression([Number(1)])
    b = QExpression([Number(2), Number(3)])
    a.join(b)
    assert a == QExpression([Number(1), Number(2), Number(3)])
    assert len(b) == 0


def test_into_moves_cells():
    s = SExpression([Number(1)])
    q = s.into(QExpression)
    assert isinstance(q, QExpression)
    assert q == QExpression([Number(1)])
    assert len(s) == 0


# -----------------------------------------------------
# Printing
# -----------------------------------------------------

@pytest.mark.parametrize(
    "value,text",
    [
        (Number(-3), "-3"),
        (Double(2.5), "2.5"),
        (String('say "hi"\n'), '"say \\"hi\\"\\n"'),
        (Symbol("foo"), "foo"),
        (Error("boom"), "Error: boom"),
        (SExpression([Symbol("+"), Number(1)]), "(+ 1)"),
        (QExpression([Number(1), QExpression()]), "{1 {}}"),
        (Builtin("noop", _noop), "<builtin>"),
        (_closure(), "(\\ {x y} {+ x y})"),
    ]
)
def test_str(value, text):
    assert str(value) == text
