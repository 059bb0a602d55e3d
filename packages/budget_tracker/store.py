"""In-memory transaction store.

The store owns the canonical, insertion-ordered sequence of transactions for
the lifetime of the process. It is only ever touched from one thread, so there
is no locking; ``revision`` is bumped on every mutation.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .models import Transaction


class TransactionStore:
    """Ordered collection of :class:`Transaction` records.

    Mutation surface is limited to :meth:`load` (replace all) and
    :meth:`append`. Records are never reordered, merged or deduplicated.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._items: list[Transaction] = list(transactions)
        self._revision = 0
        self._saved_revision = 0

    def load(self, records: Iterable[Transaction]) -> None:
        """Replace the current contents with ``records`` (kept in order)."""

        items = list(records)
        for rec in items:
            if not isinstance(rec, Transaction):
                raise TypeError(f"expected Transaction, got {type(rec).__name__}")
        self._items = items
        self._revision += 1

    def append(self, transaction: Transaction) -> None:
        if not isinstance(transaction, Transaction):
            raise TypeError(f"expected Transaction, got {type(transaction).__name__}")
        self._items.append(transaction)
        self._revision += 1

    def all(self) -> Sequence[Transaction]:
        """Return a read-only snapshot of the transactions in store order."""

        return tuple(self._items)

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def dirty(self) -> bool:
        """``True`` when the store changed since the last :meth:`mark_saved`."""

        return self._revision != self._saved_revision

    def mark_saved(self) -> None:
        self._saved_revision = self._revision

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order (case-insensitive)."""

        seen: dict[str, str] = {}
        for tx in self._items:
            seen.setdefault(tx.category_key, tx.category)
        return list(seen.values())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._items))

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"TransactionStore(n={len(self._items)}, revision={self._revision})"


__all__ = ["TransactionStore"]
