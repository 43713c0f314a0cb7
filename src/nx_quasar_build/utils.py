"""
Logging and executable lookup shared by the nx-quasar commands.

Progress messages (INFO) are printed to stdout as plain text, the way a
script echoes what it is doing. Everything else, including usage and
precondition errors, goes to stderr with a timestamp, level and source. The
level comes from the LOG_LEVEL environment variable and defaults to INFO.
"""

import functools
import logging
import os
import pathlib
import shutil
import sys
from typing import Callable, TextIO

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_STDOUT_FORMAT = "%(message)s"
_STDERR_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s:%(lineno)d - %(message)s"
)


def logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger, configuring the root logger on first use.

    Args:
        name: Logger name or a module file path (`__file__`), in which case the
              file stem is used. Defaults to the current directory name.
    """
    _configure_root_logger()
    if not name:
        name = pathlib.Path.cwd().name
    elif name.endswith(".py"):
        name = pathlib.Path(name).stem
    return logging.getLogger(name)


def _stream_handler(
    stream: TextIO,
    format: str,
    filter_fn: Callable[[logging.LogRecord], bool],
) -> logging.Handler:
    handler = logging.StreamHandler(stream)  # type: ignore[arg-type]
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(format, datefmt=_DATE_FORMAT))
    handler.addFilter(filter_fn)
    return handler


def _handlers() -> list[logging.Handler]:
    """Stdout handler for INFO records and stderr handler for all other levels."""
    return [
        _stream_handler(
            sys.stdout, _STDOUT_FORMAT, lambda record: record.levelno == logging.INFO
        ),
        _stream_handler(
            sys.stderr, _STDERR_FORMAT, lambda record: record.levelno != logging.INFO
        ),
    ]


@functools.cache
def _configure_root_logger():
    log_level_env = os.getenv("LOG_LEVEL", "").upper()
    log_level = logging.getLevelNamesMapping().get(log_level_env, logging.INFO)
    logging.basicConfig(level=log_level, handlers=_handlers())


@functools.lru_cache(maxsize=None)
def which(name: str) -> pathlib.Path | None:
    """
    Locate an executable such as `yarn` or `nx` on the system path.

    Relative or absolute paths (e.g. node_modules/.bin/nx) are resolved too.
    Results are cached; a missing executable is logged once as a warning.
    """
    if path := shutil.which(name):
        return pathlib.Path(path)
    logger("utils").warning("Executable not found: %s", name)
    return None
