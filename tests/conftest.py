import pytest

from lispy.builtin.env_builtin import register
from lispy.evaluation.evaluator import evaluate
from lispy.interpreter import Interpreter
from lispy.reader.reader import read_source
from lispy.types.environment import Environment


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Evaluate a source line against the `env` fixture, REPL style."""
    def _run(source):
        return evaluate(env, read_source(source))
    return _run


@pytest.fixture
def interp():
    """Interpreter without the standard prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def std():
    """Interpreter with the standard prelude loaded."""
    return Interpreter()
