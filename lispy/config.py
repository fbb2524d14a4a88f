from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional


# Resolve installation dir (lispy package directory)
_LISPY_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE = _LISPY_DIR / 'prelude' / 'std.lspy'
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_RECURSION_LIMIT = 20000
_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_load_roots() -> List[Path]:
    """Directories searched by `load`, current directory first."""
    return [Path.cwd(), *paths_from_env('LISPY_PATH', [])]


def get_prelude_path() -> Path:
    roots = paths_from_env('LISPY_PRELUDE_PATH', [_DEFAULT_PRELUDE])
    # a directory means "std.lspy inside it"
    p = roots[0]
    return p / 'std.lspy' if p.is_dir() else p


def get_log_level() -> str:
    return os.environ.get('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_recursion_limit() -> int:
    raw = os.environ.get('LISPY_RECURSION_LIMIT')
    return int(raw) if raw else _DEFAULT_RECURSION_LIMIT


def ensure_recursion_limit(limit: Optional[int] = None) -> int:
    """Raise the recursion limit to at least `limit`; never lowers it."""
    limit = limit or get_recursion_limit()
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)
    return sys.getrecursionlimit()


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the command line tool.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to LISPY_LOG_LEVEL.
        log_file: Optional path to a log file. If None, logs go to stderr so
            they never mix with program output.
    """
    level = (level or get_log_level()).upper()
    numeric_level = getattr(logging, level, logging.WARNING)

    config = {
        'level': numeric_level,
        'format': _LOG_FORMAT,
    }
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        config['filename'] = log_file
    else:
        config['stream'] = sys.stderr

    logging.basicConfig(**config)
    logging.getLogger(__name__).debug("Logging initialized at %s level", level)
