"""Search over transactions: exact category match or fuzzy text match.

Matching is the union of independent predicates:

- :func:`category_matches`: the lower-cased category equals the lower-cased
  query.
- :func:`fuzzy_score`: the lower-cased query is an in-order (not necessarily
  contiguous) subsequence of the lower-cased text; returns a relevance
  score, or ``None`` when it is not a subsequence. :func:`search` applies it
  to both the description and the category (``"foo"`` finds ``Food``).

:func:`search` composes them. Result order:

1. Category-exact matches, in store order. A transaction that also matches
   fuzzily is placed here.
2. Fuzzy matches on description or category, by descending score (the
   better of the two); equal scores keep store order.

An empty query matches nothing.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Transaction, category_key

# Scoring weights for fuzzy_score. Higher is better.
SCORE_MATCH = 16
BONUS_CONSECUTIVE = 12
BONUS_BOUNDARY = 8
PENALTY_GAP = 1
PENALTY_LEADING = 1


def category_matches(query: str, category: str) -> bool:
    """Case-insensitive exact equality; an empty query never matches."""

    if not query:
        return False
    return category_key(query) == category_key(category)


def _boundary_bonus(text: str, j: int) -> int:
    if j == 0 or not text[j - 1].isalnum():
        return BONUS_BOUNDARY
    return 0


def fuzzy_score(query: str, text: str) -> int | None:
    """Score ``query`` as a case-insensitive subsequence of ``text``.

    Finds the best placement of the query characters in ``text`` (not just
    the leftmost one) so contiguous runs are preferred over scattered hits:

    - each matched character earns ``SCORE_MATCH``;
    - a match right after the previous one earns ``BONUS_CONSECUTIVE``;
    - a match at the start of the text or of a word earns ``BONUS_BOUNDARY``;
    - each skipped character between two matches costs ``PENALTY_GAP``;
    - each character before the first match costs ``PENALTY_LEADING``.

    Returns ``None`` when ``query`` is empty or not a subsequence.
    """

    q = query.lower()
    t = text.lower()
    n, m = len(q), len(t)
    if n == 0 or n > m:
        return None

    # prev[j]: best score with q[i-1] matched exactly at t[j] (None = impossible)
    prev: list[int | None] = [None] * m
    for j, ch in enumerate(t):
        if ch == q[0]:
            prev[j] = SCORE_MATCH + _boundary_bonus(t, j) - PENALTY_LEADING * j

    for i in range(1, n):
        cur: list[int | None] = [None] * m
        # Running max over k < j - 1 of prev[k] + PENALTY_GAP * k, so that
        # prev[k] - PENALTY_GAP * (j - k - 1) is evaluated in O(1) per j.
        best_far: int | None = None
        for j in range(1, m):
            k = j - 2
            if k >= 0 and prev[k] is not None:
                cand = prev[k] + PENALTY_GAP * k
                if best_far is None or cand > best_far:
                    best_far = cand
            if t[j] != q[i]:
                continue
            gain = SCORE_MATCH + _boundary_bonus(t, j)
            options: list[int] = []
            if prev[j - 1] is not None:
                options.append(prev[j - 1] + BONUS_CONSECUTIVE)
            if best_far is not None:
                options.append(best_far - PENALTY_GAP * (j - 1))
            if options:
                cur[j] = max(options) + gain
        prev = cur

    scores = [s for s in prev if s is not None]
    return max(scores) if scores else None


def search(query: str, transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return the transactions matching ``query`` in relevance order."""

    if not query:
        return []

    exact: list[Transaction] = []
    scored: list[tuple[int, int, Transaction]] = []
    for pos, tx in enumerate(transactions):
        if category_matches(query, tx.category):
            exact.append(tx)
            continue
        hits = [
            s
            for s in (fuzzy_score(query, tx.description), fuzzy_score(query, tx.category))
            if s is not None
        ]
        if hits:
            scored.append((max(hits), pos, tx))

    scored.sort(key=lambda item: (-item[0], item[1]))
    return exact + [tx for _score, _pos, tx in scored]


__all__ = ["category_matches", "fuzzy_score", "search"]
