"""Debug logging setup for the command line."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path | None, verbose: bool = False, logger_name: str = "fluentmatch"
) -> logging.Logger:
    """
    Configure and return the logger that every fluentmatch module logs under.

    Writes to debug_file when one is given. Optionally also writes to stderr.

    Args:
        debug_file: Path to a debug log file, created along with its parents.
        verbose: If True, also log to stderr.
        logger_name: Name of the logger instance (allows independent loggers in tests)

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    # Reconfiguring replaces, never stacks, handlers
    logger.handlers.clear()

    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(debug_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
