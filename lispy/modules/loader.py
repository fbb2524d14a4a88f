from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Protocol

from lispy.config import get_load_roots, get_prelude_path
from lispy.errors import LispyLoadError, LispySyntaxError
from lispy.evaluation.evaluator import evaluate
from lispy.reader.reader import read_source
from lispy.types.environment import Environment
from lispy.types.value import Error, LispValue, SExpression

logger = logging.getLogger(__name__)

RECURSION_DEPTH_EXCEEDED = "maximum recursion depth exceeded"


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def resolve_path(filename: str) -> Optional[Path]:
    """Find `filename` as given, or underneath the LISPY_PATH roots."""
    path = Path(filename)
    if path.is_absolute():
        return path if path.is_file() else None
    for root in get_load_roots():
        candidate = root / path
        if candidate.is_file():
            return candidate
    return None


def read_file(filename: str) -> SExpression:
    path = resolve_path(filename)
    if path is None:
        raise LispyLoadError(f"'{filename}' not found")
    try:
        source = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise LispyLoadError(f"'{filename}': {exc.strerror}") from exc
    return read_source(source, str(path))


def load_file(env: Environment, filename: str) -> LispValue:
    """Evaluate every top-level form of `filename` in `env`.

    Errors produced by individual forms are printed and loading carries on;
    a file that cannot be read or parsed yields a single Error value.
    """
    try:
        program = read_file(filename)
    except (LispyLoadError, LispySyntaxError) as exc:
        logger.warning("Could not load %s: %s", filename, exc)
        return Error(f"Could not load Library {exc}")

    logger.debug("Loading %s (%d forms)", filename, len(program))
    while program.cells:
        try:
            result = evaluate(env, program.pop(0))
        except RecursionError:
            logger.debug("Recursion limit hit loading %s", filename)
            result = Error(RECURSION_DEPTH_EXCEEDED)
        if isinstance(result, Error):
            print(result)
    return SExpression()


# Prelude convenience loader

def load_prelude(itp: _HasEvalPrelude) -> None:
    path = get_prelude_path()
    if not path.is_file():
        raise FileNotFoundError(f"Cannot find prelude '{path}'")
    logger.debug("Loading prelude from %s", path)
    itp.eval_prelude(path.read_text(encoding='utf-8'))
