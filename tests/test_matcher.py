import datetime as dt
from itertools import combinations

import pytest

from budget_tracker.matcher import category_matches, fuzzy_score, search
from budget_tracker.models import Transaction


def _tx(description: str, category: str = "Other", amount: int = -100, day: int = 1) -> Transaction:
    return Transaction(dt.date(2024, 1, day), description, category, amount)


# ---- Predicates ---------------------------------------------------------------


def test_category_match_is_exact_and_case_insensitive():
    assert category_matches("food", "Food")
    assert category_matches("FOOD", "food")
    assert not category_matches("foo", "Food")
    assert not category_matches("", "")


@pytest.mark.parametrize(
    ("query", "text"),
    [("fd", "food"), ("lnch", "Lunch"), ("LNCH", "lunch"), ("lunch", "Lunch"), ("ubt", "Uber trip")],
)
def test_fuzzy_score_matches_subsequences(query: str, text: str):
    assert fuzzy_score(query, text) is not None


@pytest.mark.parametrize(
    ("query", "text"), [("df", "food"), ("", "food"), ("lunchbox", "lunch"), ("x", "")]
)
def test_fuzzy_score_rejects_non_subsequences(query: str, text: str):
    assert fuzzy_score(query, text) is None


def test_fuzzy_score_prefers_contiguous_runs():
    assert fuzzy_score("lun", "Lunch") > fuzzy_score("lun", "Late lunch")
    assert fuzzy_score("ab", "ab") > fuzzy_score("ab", "axb")


def test_fuzzy_score_prefers_earlier_matches():
    assert fuzzy_score("cab", "cab ride") > fuzzy_score("cab", "taxi cab")


def test_fuzzy_score_finds_best_alignment_not_leftmost():
    # Leftmost placement of "ab" in "axxab" is scattered; the best one is the
    # contiguous "ab" at the end.
    assert fuzzy_score("ab", "axxab") > fuzzy_score("ab", "axxxb")


# ---- search -------------------------------------------------------------------


def test_empty_query_matches_nothing(scenario):
    assert search("", scenario) == []


def test_unmatched_query_is_empty_not_error(scenario):
    assert search("zzz", scenario) == []


def test_scenario_category_search(scenario):
    lunch = scenario[0]
    assert search("food", scenario) == [lunch]
    assert search("FOOD", scenario) == [lunch]
    # "foo" is a subsequence of the category "Food", not of "lunch"
    assert search("foo", scenario) == [lunch]


def test_scenario_lnch_matches_lunch(scenario):
    assert search("lnch", scenario) == [scenario[0]]


def test_category_search_returns_every_transaction_of_that_category():
    txs = [
        _tx("Groceries", "Food"),
        _tx("Train", "Travel"),
        _tx("Zzz unrelated", "food"),
        _tx("Dinner", "FOOD"),
    ]
    assert search("Food", txs) == [txs[0], txs[2], txs[3]]


def test_category_fuzzy_match():
    # "fd" is a subsequence of the category but not of the description.
    tx = _tx("Lunch", "Food")
    assert search("fd", [tx]) == [tx]
    assert search("fd", [_tx("Lunch", "Fun")]) == []


def test_category_fuzzy_hits_merge_with_description_hits_by_score():
    by_desc = _tx("Fresh bread", "Other")
    by_cat = _tx("Lunch", "Food")
    exact = _tx("Dinner", "fd")
    # The short gap in "Food" outscores the long one in "Fresh bread".
    assert fuzzy_score("fd", "Food") > fuzzy_score("fd", "Fresh bread")
    assert search("fd", [by_desc, by_cat, exact]) == [exact, by_cat, by_desc]


def test_fuzzy_subsequence_law():
    desc = "Coffee Shop"
    tx = _tx(desc, "Other")
    for n in range(1, 5):
        for idxs in combinations(range(len(desc)), n):
            query = "".join(desc[i] for i in idxs)
            if not query.strip():
                continue
            assert tx in search(query.upper(), [tx]), query


def test_category_matches_rank_before_fuzzy_description_matches():
    fuzzy_only = _tx("Food truck", "Fun")
    exact = _tx("Groceries", "Food")
    both = _tx("Food court", "food")
    assert search("food", [fuzzy_only, exact, both]) == [exact, both, fuzzy_only]


def test_description_matches_sorted_by_score_then_store_order():
    late = _tx("Late lunch", "Other")
    lunch_a = _tx("Lunch", "Other")
    scattered = _tx("La unch", "Other")
    lunch_b = _tx("Lunch", "Travel")
    result = search("lun", [late, lunch_a, scattered, lunch_b])
    assert result[:2] == [lunch_a, lunch_b]
    assert set(result) == {late, lunch_a, scattered, lunch_b}


def test_search_does_not_mutate_input(scenario):
    before = list(scenario)
    search("lnch", scenario)
    assert scenario == before
