"""Runtime configuration: data directory and derived file paths.

Environment
-----------
- ``BUDGET_TRACKER_DIR``: data directory (absolute or relative). Defaults to
  ``~/.local/share/budget-tracker``.
- ``BUDGET_TRACKER_LOG_LEVEL``: read by :mod:`budget_tracker.logging_setup`.
- ``EDITOR``: read by :mod:`budget_tracker.editor`.

The CLI loads a ``.env`` from the working directory before reading these.
"""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

from .ledger_csv import write_ledger
from .logging_setup import get_logger

DATA_DIR_ENV = "BUDGET_TRACKER_DIR"
LEDGER_FILE_NAME = "expenses.csv"
LOG_FILE_NAME = "expenses.log"

_logger = get_logger("budget_tracker.config")


def get_data_dir(override: str | PathLike[str] | None = None) -> Path:
    """Return the data directory.

    Precedence: explicit ``override``, then ``BUDGET_TRACKER_DIR``, then
    ``~/.local/share/budget-tracker``.
    """

    if override is not None and str(override).strip():
        return Path(override).expanduser().resolve()
    root = os.getenv(DATA_DIR_ENV)
    if root and root.strip():
        return Path(root).expanduser().resolve()
    return Path.home() / ".local" / "share" / "budget-tracker"


def ledger_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_data_dir()) / LEDGER_FILE_NAME


def log_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_data_dir()) / LOG_FILE_NAME


def ensure_ledger_file(data_dir: Path | None = None) -> Path:
    """Create the data directory and a header-only ledger when missing."""

    d = data_dir or get_data_dir()
    d.mkdir(parents=True, exist_ok=True)
    p = ledger_path(d)
    if not p.exists():
        write_ledger(p, [])
        _logger.info("created empty ledger at %s", p)
    return p


__all__ = [
    "DATA_DIR_ENV",
    "LEDGER_FILE_NAME",
    "LOG_FILE_NAME",
    "ensure_ledger_file",
    "get_data_dir",
    "ledger_path",
    "log_path",
]
