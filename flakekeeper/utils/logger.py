"""
Logging utilities for flakekeeper.

Extraction reports every skipped input and rejected lock file through the
``flakekeeper`` logger instead of raising. Library use stays silent (a
``NullHandler`` is attached); the CLI calls :func:`setup_logging` with the
number of ``-v`` flags to make those records visible on stderr.

The custom ``TRACE`` level (below DEBUG) reports entry into and exit from
each extraction.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from flakekeeper.constants import (
    TRACE,
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_lock = threading.Lock()

logging.addLevelName(TRACE, "TRACE")


def _stream_supports_color(stream: IO[str]) -> bool:
    """Return True if ANSI colors may be written to ``stream``."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return stream.isatty()
    except (AttributeError, OSError):
        return False


class ColoredFormatter(logging.Formatter):
    """Formatter that colors level names when writing to a terminal.

    Colors are keyed by level number so the custom ``TRACE`` level used
    for extraction entry and exit is colored like the standard ones.
    Whether the stream supports colors is decided once, at construction.
    """

    LEVEL_COLORS = {
        TRACE: "\033[34m",
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
        stream: Optional[IO[str]] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color and _stream_supports_color(stream or sys.stderr)

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_color else None
        if color is None:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Records are shared with other handlers
            record.levelname = levelname


def verbosity_to_level(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level.

    0 is WARNING, 1 INFO, 2 DEBUG, and 3 or more TRACE, which adds the
    entry and exit of every extraction.
    """
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    if verbosity == 2:
        return logging.DEBUG
    return TRACE


def setup_logging(
    *,
    verbosity: int = 0,
    color: bool = True,
    stream: Optional[IO[str]] = None,
) -> int:
    """Configure the ``flakekeeper`` logger for a CLI invocation.

    Skipped inputs and rejected lock files are reported as DEBUG and ERROR
    records, so ``-vv`` is the level that explains missing dependencies.
    From ``-vv`` on, records carry timestamps and logger names.

    This function is safe to call multiple times; configuration is
    protected by a process-wide lock.

    Args:
        verbosity: Number of ``-v`` flags.
        color: Color level names when the terminal allows it.
        stream: Output stream; defaults to ``sys.stderr``.

    Returns:
        The level that was set.
    """
    level = verbosity_to_level(verbosity)

    with _lock:
        root_logger = logging.getLogger("flakekeeper")
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        output = stream or sys.stderr
        handler = logging.StreamHandler(output)
        handler.setLevel(level)
        handler.setFormatter(
            ColoredFormatter(
                LOG_VERBOSE_FORMAT if verbosity >= 2 else LOG_DEFAULT_FORMAT,
                datefmt=LOG_DATE_FORMAT,
                use_color=color,
                stream=output,
            )
        )

        root_logger.addHandler(handler)
        root_logger.propagate = False

    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the flakekeeper namespace.

    Args:
        name: Logger name. Use ``__name__`` for module-relative naming.

    Returns:
        A logger instance under the ``flakekeeper`` hierarchy.
    """
    if not name or name == "flakekeeper":
        logger = logging.getLogger("flakekeeper")
    elif name.startswith("flakekeeper."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"flakekeeper.{name}")

    # Ensure library-safe behavior if logging is not configured
    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())

    return logger

