"""Pytest configuration for test isolation.

The CLI and ``config.get_data_dir`` resolve the ledger location from
``BUDGET_TRACKER_DIR`` (default ``~/.local/share/budget-tracker``). To keep
tests hermetic and away from a real ledger, an autouse fixture points it at
the test's own temporary directory.
"""

from __future__ import annotations

import datetime as dt
import os
import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `budget_tracker` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR)] if p not in sys.path]

from budget_tracker.models import Transaction  # noqa: E402
from budget_tracker.store import TransactionStore  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("BUDGET_TRACKER_DIR", os.fspath(data_dir))
    monkeypatch.delenv("EDITOR", raising=False)
    return data_dir


@pytest.fixture
def data_dir(_isolate_data_dir: Path) -> Path:
    return _isolate_data_dir


@pytest.fixture
def scenario() -> list[Transaction]:
    """Lunch / Salary / Movie: the reference ledger used across tests."""

    return [
        Transaction(dt.date(2024, 1, 5), "Lunch", "Food", -1200),
        Transaction(dt.date(2024, 1, 10), "Salary", "Income", 300000),
        Transaction(dt.date(2024, 2, 1), "Movie", "Fun", -1500),
    ]


@pytest.fixture
def scenario_store(scenario: list[Transaction]) -> TransactionStore:
    return TransactionStore(scenario)
