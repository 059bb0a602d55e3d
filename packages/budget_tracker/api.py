"""Public API of the ledger core.

These functions are the only contact surface the CLI (and any other host)
needs: load a store from disk, append a validated transaction, search, build
dashboard data, and save. Errors are raised, never logged-and-swallowed:

- :class:`~budget_tracker.errors.ParseError` from :func:`load_store`
- :class:`~budget_tracker.errors.ValidationError` from
  :func:`append_transaction`
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from os import PathLike
from pathlib import Path

import pydantic

from .aggregate import Bucket
from .engine import DashboardData, QueryEngine
from .errors import ValidationError
from .ledger_csv import read_ledger, write_ledger
from .logging_setup import get_logger
from .models import Transaction, TransactionInput
from .store import TransactionStore

_logger = get_logger("budget_tracker.api")


def load_store(path: str | PathLike[str]) -> TransactionStore:
    """Load the ledger at ``path`` into a new store.

    A missing file yields an empty store. A malformed record raises
    ``ParseError`` identifying the line; nothing is loaded in that case.
    """

    p = Path(path)
    store = TransactionStore()
    if not p.exists():
        _logger.info("ledger %s not found; starting with an empty store", p)
        return store
    store.load(read_ledger(p))
    store.mark_saved()
    return store


def save_store(store: TransactionStore, path: str | PathLike[str]) -> None:
    """Rewrite the ledger at ``path`` from the store contents."""

    write_ledger(path, store.all())
    store.mark_saved()


def validate_transaction(
    date: str | dt.date,
    description: str,
    category: str,
    amount: str | Decimal | int | float,
) -> Transaction:
    """Build a :class:`Transaction` from user-supplied values or raise ``ValidationError``."""

    try:
        model = TransactionInput(
            date=date, description=description, category=category, amount=amount
        )
    except pydantic.ValidationError as exc:
        errors = [
            (".".join(str(p) for p in err["loc"]) or "transaction", err["msg"])
            for err in exc.errors()
        ]
        raise ValidationError(errors) from exc
    return model.to_transaction()


def append_transaction(
    store: TransactionStore,
    date: str | dt.date,
    description: str,
    category: str,
    amount: str | Decimal | int | float,
) -> Transaction:
    """Validate and append one transaction to the end of ``store``.

    ``amount`` is a signed decimal in currency units (``"-12.50"``); it is
    stored as cents. The store is not saved; call :func:`save_store`.
    """

    tx = validate_transaction(date, description, category, amount)
    store.append(tx)
    _logger.debug("appended %r", tx)
    return tx


def search(store: TransactionStore, query: str) -> list[Transaction]:
    return QueryEngine(store).search(query)


def dashboard_data(
    store: TransactionStore, *, bucket: Bucket = "month", query: str | None = None
) -> DashboardData:
    return QueryEngine(store, bucket=bucket).dashboard_data(query)


__all__ = [
    "append_transaction",
    "dashboard_data",
    "load_store",
    "save_store",
    "search",
    "validate_transaction",
]
