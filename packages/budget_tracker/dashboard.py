"""Rich renderables for the transaction list and the dashboard.

The ledger core supplies the numbers (:class:`~budget_tracker.engine.DashboardData`);
this module only lays them out: a transaction table (newest first, stable for
equal dates; the store order itself is never changed), summary rows, and
horizontal bar charts for spending, income and the balance per time bucket.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .engine import DashboardData
from .models import Transaction, format_amount

_BAR_CHAR = "█"


def _amount_text(cents: int) -> Text:
    return Text(format_amount(cents), style="red" if cents < 0 else "green")


def transactions_table(
    transactions: Sequence[Transaction],
    *,
    title: str | Text | None = None,
    newest_first: bool = True,
) -> Table:
    rows = list(transactions)
    if newest_first:
        rows.sort(key=lambda tx: tx.date, reverse=True)

    table = Table(title=title, header_style="bold", expand=False)
    table.add_column("Date", no_wrap=True)
    table.add_column("Description", overflow="fold")
    table.add_column("Category", no_wrap=True)
    table.add_column("Amount", justify="right", no_wrap=True)
    for tx in rows:
        table.add_row(
            tx.date.isoformat(),
            Text(tx.description),
            Text(tx.category or "-"),
            _amount_text(tx.amount),
        )
    if not rows:
        table.add_row("", Text("(no transactions)", style="dim"), "", "")
    return table


def summary_table(data: DashboardData) -> Table:
    split = data.income_vs_expense
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="bold")
    table.add_column(justify="right")
    table.add_row("Net Total", _amount_text(data.net_balance))
    table.add_row("Total Spent", _amount_text(-split.expense_total))
    table.add_row("Total Earned", _amount_text(split.income_total))
    return table


def bar_chart(
    title: str, series: Sequence[tuple[str, int]], *, width: int = 30, style: str = "cyan"
) -> Panel:
    """Horizontal bars scaled to the largest absolute value in ``series``."""

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(no_wrap=True)
    table.add_column(no_wrap=True)
    table.add_column(justify="right", no_wrap=True)
    peak = max((abs(v) for _, v in series), default=0) or 1
    for label, value in series:
        n = round(abs(value) / peak * width)
        bar_style = "red" if value < 0 else style
        table.add_row(Text(label or "-"), Text(_BAR_CHAR * n, style=bar_style), format_amount(value))
    if not series:
        table.add_row(Text("(none)", style="dim"), "", "")
    return Panel(table, title=title, title_align="left")


def dashboard(data: DashboardData, *, bar_width: int = 30) -> RenderableType:
    """Compose the full dashboard for one render pass."""

    parts: list[RenderableType] = []
    if data.query is not None:
        parts.append(
            Text(f"Filter: {data.query!r} ({len(data.transactions)} matching)", style="italic")
        )
    parts.append(transactions_table(data.transactions))
    parts.append(summary_table(data))
    parts.append(bar_chart("Expenditure", data.spending, width=bar_width, style="cyan"))
    parts.append(bar_chart("Income", data.earning, width=bar_width, style="green"))
    parts.append(
        bar_chart(f"Balance by {data.bucket}", data.time_series, width=bar_width, style="green")
    )
    return Group(*parts)


__all__ = ["bar_chart", "dashboard", "summary_table", "transactions_table"]
