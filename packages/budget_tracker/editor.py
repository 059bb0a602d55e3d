"""Manual editing of the ledger file in an external editor."""

from __future__ import annotations

import os
import shlex
import subprocess
from os import PathLike
from pathlib import Path

from .logging_setup import get_logger

DEFAULT_EDITOR = "nano"

_logger = get_logger("budget_tracker.editor")


def resolve_editor() -> list[str]:
    """Return the editor command from ``$EDITOR`` (default ``nano``) as argv."""

    raw = os.getenv("EDITOR", "").strip()
    return shlex.split(raw) if raw else [DEFAULT_EDITOR]


def open_in_editor(path: str | PathLike[str], *, editor: list[str] | None = None) -> int:
    """Run the editor on ``path`` and wait for it to exit; returns its exit code.

    Raises ``FileNotFoundError`` when the editor executable cannot be found.
    """

    cmd = [*(editor or resolve_editor()), os.fspath(Path(path))]
    _logger.info("opening %s with %s", path, cmd[0])
    result = subprocess.run(cmd, check=False)
    _logger.debug("editor exited with status %d", result.returncode)
    return result.returncode


__all__ = ["DEFAULT_EDITOR", "open_in_editor", "resolve_editor"]
