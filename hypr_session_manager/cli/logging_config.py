"""Logging configuration for the hsm CLI.

Provides:
- Configurable log levels (WARNING, INFO with --verbose, DEBUG with --debug)
- Colored output on terminals
- hyprctl call logging
- Operation timing logs
"""

import logging
import shlex
import sys
import time
from contextlib import contextmanager
from typing import List, Optional, TextIO


LOGGER_NAME = "hypr_session_manager"

# Default log format
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


# (level, format) per verbosity, quietest first
VERBOSITY = (
    (logging.WARNING, DEFAULT_FORMAT),
    (logging.INFO, VERBOSE_FORMAT),
    (logging.DEBUG, DEBUG_FORMAT),
)

# hyprctl output is truncated to this many characters in debug logs
OUTPUT_PREVIEW = 200


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure logging for the hsm CLI.

    Args:
        verbose: Enable verbose logging (INFO level)
        debug: Enable debug logging (DEBUG level, overrides verbose)
        stream: Where log lines go (default: stderr); colored only if a TTY

    Returns:
        The package's root logger

    Examples:
        >>> logger = setup_logging(verbose=True)
        >>> logger.level == logging.INFO
        True
    """
    level, log_format = VERBOSITY[2 if debug else 1 if verbose else 0]
    stream = stream or sys.stderr

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(level)

    formatter_class = ColoredFormatter if stream.isatty() else logging.Formatter
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter_class(log_format))
    logger.addHandler(handler)

    return logger


def _preview(output: str) -> str:
    output = output.strip()
    if len(output) <= OUTPUT_PREVIEW:
        return output
    return f"{output[:OUTPUT_PREVIEW]}... ({len(output)} chars)"


def log_hyprctl_call(
    args: List[str],
    returncode: Optional[int],
    stdout: str,
    stderr: str,
    logger: logging.Logger,
) -> None:
    """Log one hyprctl invocation at DEBUG level.

    Args:
        args: hyprctl arguments, without the binary
        returncode: Exit status (None if the process never ran)
        stdout: Decoded standard output
        stderr: Decoded standard error
        logger: Logger instance

    A `--batch` argument is logged one directive per line so a failed
    restore can be replayed by hand.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug(f"hyprctl call: {shlex.join(args)}")
    logger.debug(f"  Return code: {returncode}")

    if len(args) == 2 and args[0] == "--batch":
        for directive in args[1].split(";"):
            logger.debug(f"  | {directive.strip()}")

    if stdout.strip():
        logger.debug(f"  stdout: {_preview(stdout)}")
    if stderr.strip():
        logger.debug(f"  stderr: {_preview(stderr)}")


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get logger instance.

    Args:
        name: Logger name (default: hypr_session_manager)
    """
    return logging.getLogger(name)


@contextmanager
def log_timing(operation: str, logger: logging.Logger):
    """Context manager for logging operation timing.

    Examples:
        >>> with log_timing("Restore session", logger):
        ...     await restorer.restore(session)
        INFO: Restore session completed in 3021.47ms
    """
    start = time.perf_counter()
    logger.info(f"Starting: {operation}")

    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{operation} completed in {elapsed_ms:.2f}ms")
