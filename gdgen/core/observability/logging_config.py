"""
Logging configuration — stderr diagnostics for generator runs.

gdgen is usually invoked from a build script, so the default console
output is a bare ``gdgen: message`` line at WARNING. Raising verbosity
switches to timestamped formats that name the emitting module.

Level precedence for the console:
    --debug  >  --verbose  >  --quiet  >  GDGEN_LOG_LEVEL  >  WARNING

A log file (GDGEN_LOG_FILE) gets its own level (GDGEN_LOG_FILE_LEVEL),
which may be lower than the console's.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV = "GDGEN_LOG_LEVEL"
FILE_ENV = "GDGEN_LOG_FILE"
FILE_LEVEL_ENV = "GDGEN_LOG_FILE_LEVEL"

# (max level, format, datefmt); first match wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = "gdgen: %(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Parsers the generator pulls in; only useful when debugging them
_LIBRARY_LOGGERS = ("yaml",)


def parse_level(level: str | None) -> int:
    """Numeric level for *level*; WARNING when missing or unknown."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING


def level_from_flags(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Console level name for the CLI verbosity flags.

    Falls back to ``GDGEN_LOG_LEVEL`` from *env* (``os.environ`` by
    default) when no flag is given.
    """
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if env is None else env
    return env.get(LEVEL_ENV) or "WARNING"


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_DEFAULT, None
    for ceiling, candidate, candidate_datefmt in _CONSOLE_FORMATS:
        if level <= ceiling:
            fmt, datefmt = candidate, candidate_datefmt
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install gdgen's handlers on the root logger.

    Replaces any handlers already installed, so calling it twice leaves
    one console handler.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level for the log file; defaults to *level*.
        quiet_third_party: Hold library loggers at WARNING unless the
            console runs at DEBUG.
    """
    console_level = parse_level(level)
    handlers = [_console_handler(console_level)]
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _LIBRARY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def setup_cli_logging(debug: bool, verbose: bool, quiet: bool) -> None:
    """Configure logging from CLI flags and the GDGEN_* environment."""
    setup_logging(
        level=level_from_flags(debug, verbose, quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
        quiet_third_party=not debug,
    )
