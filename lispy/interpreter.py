from __future__ import annotations
import logging
from typing import Literal

from lispy.builtin.env_builtin import register
from lispy.config import ensure_recursion_limit
from lispy.evaluation.evaluator import evaluate
from lispy.modules.loader import load_file, load_prelude
from lispy.reader.reader import read_source
from lispy.types.environment import Environment
from lispy.types.value import Error, LispValue

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Lispy code.
    Maintains the global Environment across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        # Each Lispy call level nests roughly a dozen Python frames
        limit = ensure_recursion_limit()
        logger.debug("Recursion limit %d", limit)

        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                load_prelude(self)
            except FileNotFoundError as exc:
                # Be permissive: no prelude found -> proceed
                logger.warning("%s; continuing without prelude", exc)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        for result in self.eval_all(code, filename='<prelude>'):
            if isinstance(result, Error):
                logger.warning("prelude: %s", result)

    def eval(self, code: str, filename: str = '<stdin>') -> LispValue:
        """Evaluate the whole input as a single S-expression, like a REPL line.

        Raises LispySyntaxError if `code` does not parse.
        """
        return evaluate(self.env, read_source(code, filename))

    def eval_all(self, code: str, filename: str = '<input>') -> list[LispValue]:
        """Evaluate each top-level form in turn and return every result."""
        program = read_source(code, filename)
        results: list[LispValue] = []
        while program.cells:
            results.append(evaluate(self.env, program.pop(0)))
        return results

    def load(self, filename: str) -> LispValue:
        return load_file(self.env, filename)
