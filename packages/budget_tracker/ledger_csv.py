"""CSV codec for the persisted ledger file.

File layout (UTF-8, RFC 4180 quoting via the stdlib :mod:`csv` module):

    Date,Description,Category,Amount
    2024-01-05,Lunch,Food,-12.00
    2024-01-10,Salary,Income,3000.00

Rules
-----
- Exactly four fields per record in the order above.
- ``Date`` is ``YYYY-MM-DD`` (``YYYY/MM/DD`` is accepted on read).
- ``Amount`` is a signed decimal with at most two places; ``-`` marks an
  expense. It is written with exactly two places.
- A leading header row is skipped on read (the legacy ``Type`` column name is
  accepted in place of ``Category``). Blank lines are ignored.
- Any other malformed record aborts the whole read with :class:`ParseError`;
  rows are never silently dropped.
"""

from __future__ import annotations

import csv
import io
import os
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import TextIO

from .errors import ParseError
from .logging_setup import get_logger
from .models import Transaction, format_amount, format_date, parse_amount, parse_date

HEADER: tuple[str, str, str, str] = ("Date", "Description", "Category", "Amount")

_HEADER_KEYS: frozenset[tuple[str, ...]] = frozenset(
    {
        ("date", "description", "category", "amount"),
        ("date", "description", "type", "amount"),
    }
)

_logger = get_logger("budget_tracker.ledger_csv")


def _is_header(row: list[str]) -> bool:
    return tuple(c.strip().lower() for c in row) in _HEADER_KEYS


def _record_text(row: list[str]) -> str:
    """Re-quote ``row`` the way it is written to the file."""

    buf = io.StringIO()
    csv.writer(buf, lineterminator="").writerow(row)
    return buf.getvalue()


def parse_ledger(f: Iterable[str]) -> list[Transaction]:
    """Parse ledger CSV lines into transactions, preserving file order."""

    reader = csv.reader(f)
    out: list[Transaction] = []
    first_record = True
    for row in reader:
        if not row or all(not c.strip() for c in row):
            continue
        if first_record:
            first_record = False
            if _is_header(row):
                continue
        raw = _record_text(row)
        line_no = reader.line_num
        if len(row) != len(HEADER):
            raise ParseError(line_no, raw, f"expected {len(HEADER)} fields, got {len(row)}")
        date_s, description, category, amount_s = row
        try:
            date = parse_date(date_s)
        except ValueError as exc:
            raise ParseError(line_no, raw, str(exc)) from exc
        try:
            amount = parse_amount(amount_s)
        except (ValueError, ArithmeticError) as exc:
            raise ParseError(line_no, raw, str(exc)) from exc
        out.append(
            Transaction(date=date, description=description, category=category, amount=amount)
        )
    return out


def serialize_ledger(transactions: Iterable[Transaction], f: TextIO) -> None:
    """Write the header and one row per transaction to ``f``."""

    writer = csv.writer(f, lineterminator="\n")
    writer.writerow(HEADER)
    for tx in transactions:
        writer.writerow(
            (format_date(tx.date), tx.description, tx.category, format_amount(tx.amount))
        )


def read_ledger(path: str | PathLike[str]) -> list[Transaction]:
    p = Path(path)
    with p.open(encoding="utf-8", newline="") as f:
        items = parse_ledger(f)
    _logger.debug("read %d transactions from %s", len(items), p)
    return items


def write_ledger(path: str | PathLike[str], transactions: Iterable[Transaction]) -> None:
    """Rewrite the ledger file atomically.

    Writes ``<path>.tmp`` first and then ``os.replace`` it into place so a
    failed write never leaves a truncated ledger behind.
    """

    p = Path(path)
    tmp = p.with_name(p.name + ".tmp")
    items = list(transactions)
    with tmp.open("w", encoding="utf-8", newline="") as f:
        serialize_ledger(items, f)
    os.replace(tmp, p)
    _logger.debug("wrote %d transactions to %s", len(items), p)


__all__ = ["HEADER", "parse_ledger", "read_ledger", "serialize_ledger", "write_ledger"]
