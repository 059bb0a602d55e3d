"""Public interface for the ``budget_tracker`` package.

This module exposes the ledger API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .aggregate import (
    IncomeExpense,
    income_vs_expense,
    net_balance,
    split_category_totals,
    time_series,
    totals_by_category,
)
from .api import (
    append_transaction,
    dashboard_data,
    load_store,
    save_store,
    search,
    validate_transaction,
)
from .engine import DashboardData, QueryEngine
from .errors import LedgerError, ParseError, ValidationError
from .matcher import category_matches, fuzzy_score
from .models import SUGGESTED_CATEGORIES, Transaction, TransactionInput
from .store import TransactionStore

__all__ = [
    # API
    "load_store",
    "save_store",
    "append_transaction",
    "validate_transaction",
    "search",
    "dashboard_data",
    # Engine / algorithms
    "QueryEngine",
    "DashboardData",
    "category_matches",
    "fuzzy_score",
    "totals_by_category",
    "net_balance",
    "income_vs_expense",
    "time_series",
    "split_category_totals",
    "IncomeExpense",
    # Models / errors
    "Transaction",
    "TransactionInput",
    "TransactionStore",
    "SUGGESTED_CATEGORIES",
    "LedgerError",
    "ParseError",
    "ValidationError",
]
