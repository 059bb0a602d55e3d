"""Centralized logging configuration for the ``budget_tracker`` package.

This module provides two public helpers:

- ``configure_logging(...)``: attach a single handler to the package root
  logger (``"budget_tracker"``). The CLI calls it once at startup with the
  data directory's log file, so log lines never interleave with dashboard
  output; without a file it logs to a stream.
- ``get_logger(name)``: acquire a logger by name, ensuring that the package
  root logger has at least a ``NullHandler`` attached when not configured to
  avoid "No handler" warnings in library contexts.

Library modules must never attach their own handlers. They should only call
``get_logger("budget_tracker.<module>")``.
"""

from __future__ import annotations

import logging
import os
import sys
from os import PathLike
from typing import IO

_PKG_LOGGER_NAME = "budget_tracker"
_CONFIGURED = False

LOG_LEVEL_ENV = "BUDGET_TRACKER_LOG_LEVEL"
DEFAULT_FORMAT = "[%(asctime)s %(levelname)s %(name)s] %(message)s"


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        # Accept numeric strings or standard level names (INFO/DEBUG/etc.).
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv(LOG_LEVEL_ENV)
    if env_val and level is None:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
    log_file: str | PathLike[str] | None = None,
) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level-name string. If ``None``, defaults to
        the ``BUDGET_TRACKER_LOG_LEVEL`` environment variable when set,
        otherwise ``logging.INFO``.
    fmt:
        Optional logging format string (defaults to ``DEFAULT_FORMAT``).
    stream:
        Output stream when no ``log_file`` is given (defaults to ``sys.stderr``).
    log_file:
        Append log records to this file instead of a stream.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # Remove any existing NullHandlers to avoid swallowing logs after config.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream or sys.stderr)
    resolved = _parse_level(level)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, ensuring safe defaults for library use."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
