import datetime as dt
from pathlib import Path

import pytest

from budget_tracker import (
    DashboardData,
    ParseError,
    QueryEngine,
    Transaction,
    TransactionStore,
    ValidationError,
    append_transaction,
    dashboard_data,
    load_store,
    save_store,
    search,
)


# ---- Store --------------------------------------------------------------------


def test_store_append_preserves_order_and_tracks_changes(scenario):
    store = TransactionStore()
    assert not store.dirty
    for tx in scenario:
        store.append(tx)
    assert list(store.all()) == scenario
    assert len(store) == 3
    assert store.dirty
    assert store.revision == 3
    store.mark_saved()
    assert not store.dirty


def test_store_load_replaces_contents(scenario):
    store = TransactionStore(scenario)
    store.load(scenario[:1])
    assert list(store) == scenario[:1]


def test_store_rejects_non_transactions():
    store = TransactionStore()
    with pytest.raises(TypeError):
        store.append(("2024-01-05", "Lunch", "Food", -1200))  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        store.load([object()])  # type: ignore[list-item]
    assert len(store) == 0


def test_store_all_is_a_snapshot(scenario_store, scenario):
    view = scenario_store.all()
    scenario_store.append(scenario[0])
    assert len(view) == 3
    assert len(scenario_store.all()) == 4


def test_store_categories_distinct_first_seen():
    store = TransactionStore(
        [
            Transaction(dt.date(2024, 1, 1), "a", "food", -1),
            Transaction(dt.date(2024, 1, 2), "b", "Fun", -1),
            Transaction(dt.date(2024, 1, 3), "c", "FOOD", -1),
        ]
    )
    assert store.categories() == ["food", "Fun"]


# ---- load / save ----------------------------------------------------------------


def test_load_missing_file_gives_empty_clean_store(tmp_path: Path):
    store = load_store(tmp_path / "nope.csv")
    assert len(store) == 0
    assert not store.dirty


def test_save_then_load_round_trip(tmp_path: Path, scenario_store):
    path = tmp_path / "expenses.csv"
    save_store(scenario_store, path)
    assert not scenario_store.dirty
    assert load_store(path).all() == scenario_store.all()


def test_load_aborts_on_malformed_record(tmp_path: Path):
    path = tmp_path / "expenses.csv"
    path.write_text(
        "Date,Description,Category,Amount\n2024-01-05,Lunch,Food,-12\n2024-01-06,Bad,Food,x\n",
        encoding="utf-8",
    )
    with pytest.raises(ParseError) as excinfo:
        load_store(path)
    assert excinfo.value.line_no == 3


# ---- append_transaction -----------------------------------------------------------


def test_append_transaction_validates_and_appends():
    store = TransactionStore()
    tx = append_transaction(store, "2024/01/05", "Lunch", "food", "-12.50")
    assert tx == Transaction(dt.date(2024, 1, 5), "Lunch", "Food", -1250)
    assert store.all() == (tx,)
    assert store.dirty


def test_append_transaction_accepts_native_values():
    store = TransactionStore()
    tx = append_transaction(store, dt.date(2024, 1, 5), "", "", 0)
    assert tx.amount == 0
    assert tx.category == ""


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [
        ({"date": ""}, "date"),
        ({"date": "2024-02-30"}, "date"),
        ({"amount": "twelve"}, "amount"),
        ({"amount": "1.999"}, "amount"),
        ({"description": None}, "description"),
        ({"category": None}, "category"),
    ],
)
def test_append_transaction_rejects_invalid_input(kwargs, field):
    store = TransactionStore()
    values = {"date": "2024-01-05", "description": "Lunch", "category": "Food", "amount": "-12"}
    values.update(kwargs)
    with pytest.raises(ValidationError) as excinfo:
        append_transaction(store, **values)
    assert [f for f, _msg in excinfo.value.errors] == [field]
    assert len(store) == 0


# ---- search / dashboard ---------------------------------------------------------------


def test_search_entry_point(scenario_store, scenario):
    assert search(scenario_store, "lnch") == [scenario[0]]
    assert search(scenario_store, "income") == [scenario[1]]
    assert search(scenario_store, "") == []


def test_dashboard_data_bundles_all_views(scenario_store, scenario):
    data = dashboard_data(scenario_store)
    assert isinstance(data, DashboardData)
    assert data.transactions == tuple(scenario)
    assert data.totals_by_category == {"Food": -1200, "Income": 300000, "Fun": -1500}
    assert data.net_balance == 297300
    assert data.income_vs_expense.income_total == 300000
    assert data.income_vs_expense.expense_total == 2700
    assert data.time_series == [("2024-01", 298800), ("2024-02", -1500)]
    assert data.spending == [("Food", 1200), ("Fun", 1500)]
    assert data.earning == [("Income", 300000)]
    assert data.query is None


def test_dashboard_data_filtered_by_query(scenario_store, scenario):
    data = dashboard_data(scenario_store, query="movie", bucket="year")
    assert data.transactions == (scenario[2],)
    assert data.net_balance == -1500
    assert data.time_series == [("2024", -1500)]
    assert data.query == "movie"


def test_engine_recomputes_after_append(scenario_store):
    engine = QueryEngine(scenario_store)
    assert engine.dashboard_data().net_balance == 297300
    append_transaction(scenario_store, "2024-02-02", "Taxi", "Travel", "-3")
    assert engine.dashboard_data().net_balance == 297000
    assert [tx.description for tx in engine.search("travel")] == ["Taxi"]


def test_unknown_bucket_surfaces_from_time_series(scenario_store):
    engine = QueryEngine(scenario_store, bucket="hour")  # type: ignore[arg-type]
    assert engine.search("lnch")
    with pytest.raises(ValueError, match="unknown time bucket"):
        engine.dashboard_data()
