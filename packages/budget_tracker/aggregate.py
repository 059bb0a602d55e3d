"""Aggregations that feed the dashboard.

Every function is a pure function of the transactions it is given and is
recomputed in full on each call; there is no cache to invalidate.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Literal, NamedTuple, TypeAlias

from .models import Transaction

Bucket: TypeAlias = Literal["day", "week", "month", "year"]


class IncomeExpense(NamedTuple):
    """Positive and negative sides of a set of transactions, in cents."""

    income_total: int
    """Sum of all positive amounts."""

    expense_total: int
    """Absolute value of the sum of all negative amounts."""


def totals_by_category(transactions: Iterable[Transaction]) -> dict[str, int]:
    """Signed sum of ``amount`` per category.

    Grouping is case-insensitive; the first-seen spelling of a category is used
    as its label. Keys are ordered by first appearance.
    """

    labels: dict[str, str] = {}
    sums: dict[str, int] = {}
    for tx in transactions:
        key = tx.category_key
        if key not in labels:
            labels[key] = tx.category
            sums[key] = 0
        sums[key] += tx.amount
    return {labels[key]: total for key, total in sums.items()}


def net_balance(transactions: Iterable[Transaction]) -> int:
    return sum(tx.amount for tx in transactions)


def income_vs_expense(transactions: Iterable[Transaction]) -> IncomeExpense:
    income = 0
    expense = 0
    for tx in transactions:
        if tx.amount > 0:
            income += tx.amount
        elif tx.amount < 0:
            expense -= tx.amount
    return IncomeExpense(income_total=income, expense_total=expense)


# bucket name -> (sort key, label) for a transaction date
_BUCKETS: dict[str, Callable[[Transaction], tuple[tuple[int, ...], str]]] = {
    "day": lambda tx: ((tx.date.toordinal(),), tx.date.isoformat()),
    "week": lambda tx: (
        tuple(tx.date.isocalendar())[:2],
        f"{tx.date.isocalendar()[0]:04d}-W{tx.date.isocalendar()[1]:02d}",
    ),
    "month": lambda tx: ((tx.date.year, tx.date.month), f"{tx.date.year:04d}-{tx.date.month:02d}"),
    "year": lambda tx: ((tx.date.year,), f"{tx.date.year:04d}"),
}

BUCKETS: tuple[str, ...] = tuple(_BUCKETS)


def time_series(transactions: Iterable[Transaction], bucket: Bucket = "month") -> list[tuple[str, int]]:
    """Sum ``amount`` per time bucket, oldest bucket first.

    Labels: ``day`` -> ``2024-01-05``, ``week`` -> ``2024-W01`` (ISO week),
    ``month`` -> ``2024-01``, ``year`` -> ``2024``. Buckets without
    transactions are omitted.
    """

    try:
        key_fn = _BUCKETS[bucket]
    except KeyError:
        raise ValueError(
            f"unknown time bucket {bucket!r}; expected one of: {', '.join(BUCKETS)}"
        ) from None

    sums: dict[tuple[int, ...], int] = {}
    labels: dict[tuple[int, ...], str] = {}
    for tx in transactions:
        sort_key, label = key_fn(tx)
        sums[sort_key] = sums.get(sort_key, 0) + tx.amount
        labels[sort_key] = label
    return [(labels[k], sums[k]) for k in sorted(sums)]


def split_category_totals(
    totals: Mapping[str, int],
) -> tuple[list[tuple[str, int]], list[tuple[str, int]]]:
    """Split category totals into spending and earning series for bar charts.

    Returns ``(spending, earning)``: categories with a negative total (as
    positive magnitudes) and categories with a non-negative total, each sorted
    by label.
    """

    spending = sorted((label, -total) for label, total in totals.items() if total < 0)
    earning = sorted((label, total) for label, total in totals.items() if total >= 0)
    return spending, earning


__all__ = [
    "BUCKETS",
    "Bucket",
    "IncomeExpense",
    "income_vs_expense",
    "net_balance",
    "split_category_totals",
    "time_series",
    "totals_by_category",
]
