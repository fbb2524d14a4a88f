"""Interactive read-eval-print loop and command line entry point."""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional, Sequence

# Readline support for line editing and history
try:
    import readline  # noqa: F401
except ImportError:
    pass

from lispy import __version__
from lispy.config import setup_logging
from lispy.errors import LispySyntaxError
from lispy.interpreter import Interpreter
from lispy.modules.loader import RECURSION_DEPTH_EXCEEDED
from lispy.types.value import Error

logger = logging.getLogger(__name__)

PROMPT = "lispy> "
BANNER = f"Lispy Version {__version__}\nPress Ctrl+c to Exit\n"


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lispy",
        description="Lispy - a small Lisp with S-expressions, Q-expressions and curried closures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # Interactive mode
  %(prog)s hello.lspy           # Load and run a file
  %(prog)s --no-prelude         # Start without the standard prelude
        """,
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Lispy source files to load, in order",
    )
    parser.add_argument(
        "--no-prelude",
        action="store_true",
        help="Do not load the standard prelude",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $LISPY_LOG_LEVEL or WARNING)",
    )
    return parser


def run_files(interp: Interpreter, files: Sequence[str]) -> int:
    """Load each file in turn; returns a non-zero status if any failed to load."""
    status = 0
    for filename in files:
        result = interp.load(filename)
        if isinstance(result, Error):
            print(result)
            status = 1
    return status


def repl(interp: Interpreter, read_line: Callable[[str], str] = input) -> None:
    print(BANNER)
    while True:
        try:
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line.strip():
            continue
        try:
            result = interp.eval(line)
        except LispySyntaxError as exc:
            print(exc)
            continue
        except RecursionError:
            logger.debug("Recursion limit hit evaluating %r", line)
            print(Error(RECURSION_DEPTH_EXCEEDED))
            continue
        print(result)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    interp = Interpreter(prelude=None if args.no_prelude else "auto")
    if args.files:
        return run_files(interp, args.files)
    repl(interp)
    return 0
