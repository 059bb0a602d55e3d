"""Exception types surfaced by the ledger core.

The core never logs-and-recovers: parse and validation failures are raised to
the caller (the CLI), which decides whether to abort or re-prompt.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all ledger errors."""


class ParseError(LedgerError, ValueError):
    """A persisted record could not be parsed.

    Carries the 1-based physical line number of the offending record and its
    raw text so the user can find it in the file.
    """

    def __init__(self, line_no: int, record: str, reason: str) -> None:
        self.line_no = line_no
        self.record = record
        self.reason = reason
        super().__init__(f"line {line_no}: {reason}: {record!r}")


class ValidationError(LedgerError, ValueError):
    """A transaction built through the add path was rejected.

    ``errors`` holds ``(field, message)`` pairs, one per failing field.
    """

    def __init__(self, errors: list[tuple[str, str]]) -> None:
        self.errors = list(errors)
        detail = "; ".join(f"{field}: {msg}" for field, msg in self.errors)
        super().__init__(f"invalid transaction ({detail})")


__all__ = ["LedgerError", "ParseError", "ValidationError"]
