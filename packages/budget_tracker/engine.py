"""Query engine: the seam between callers and the matcher/aggregator."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from . import aggregate, matcher
from .aggregate import Bucket, IncomeExpense
from .models import Transaction
from .store import TransactionStore


@dataclass(frozen=True, slots=True)
class DashboardData:
    """Everything a single dashboard render needs.

    ``transactions`` are the records the figures were computed over (the whole
    store, or the search results when the dashboard was filtered).
    """

    transactions: tuple[Transaction, ...]
    totals_by_category: dict[str, int]
    net_balance: int
    income_vs_expense: IncomeExpense
    time_series: list[tuple[str, int]]
    bucket: str
    spending: list[tuple[str, int]]
    earning: list[tuple[str, int]]
    query: str | None = None


class QueryEngine:
    """Stateless coordinator holding a reference to a :class:`TransactionStore`."""

    def __init__(self, store: TransactionStore, *, bucket: Bucket = "month") -> None:
        self.store = store
        self.bucket = bucket

    def search(self, query: str) -> list[Transaction]:
        return matcher.search(query, self.store.all())

    def dashboard_data(self, query: str | None = None) -> DashboardData:
        """Compute all dashboard views in one pass over the current store.

        When ``query`` is given, the views cover only the matching transactions.
        """

        txs: Sequence[Transaction]
        txs = self.search(query) if query is not None else self.store.all()
        totals = aggregate.totals_by_category(txs)
        spending, earning = aggregate.split_category_totals(totals)
        return DashboardData(
            transactions=tuple(txs),
            totals_by_category=totals,
            net_balance=aggregate.net_balance(txs),
            income_vs_expense=aggregate.income_vs_expense(txs),
            time_series=aggregate.time_series(txs, self.bucket),
            bucket=self.bucket,
            spending=spending,
            earning=earning,
            query=query,
        )


__all__ = ["DashboardData", "QueryEngine"]
