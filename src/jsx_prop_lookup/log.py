"""Logging utilities for the server and the one-shot CLI.

Everything goes to stderr: stdout carries the MCP stdio transport and the
CLI's JSON output.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = "jsx_prop_lookup"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the jsx_prop_lookup hierarchy."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(*, verbose: bool = False, level: str | None = None) -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    `verbose` forces DEBUG; otherwise `level` (a level name) is used, falling
    back to INFO for unknown names.
    """
    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = logging.getLevelName((level or "INFO").upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when configured more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(resolved)
    stream_handler.setFormatter(logging.Formatter("[jsx-prop-lookup] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
