"""CLI for the ``budget_tracker`` package.

This module exposes callable command handlers (``cmd_dashboard``,
``cmd_search``, ``cmd_add``, ``cmd_edit``, ``cmd_logs``) and a Typer-based
console interface. Environment variables are loaded from a local ``.env``
using ``python-dotenv`` before delegating to command logic. Ledger logic lives
in ``budget_tracker.api`` and related modules.

Usage
-----
``budget-tracker``                       dashboard (same as ``dashboard``)
``budget-tracker dashboard --query fd``  dashboard over matching transactions
``budget-tracker search lunch``
``budget-tracker add --date 2024-01-05 --description Lunch --category Food --amount=-12``
``budget-tracker edit``
``budget-tracker logs --lines 20``
"""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.text import Text

from .aggregate import BUCKETS
from .api import append_transaction, dashboard_data, load_store, save_store, search
from .config import ensure_ledger_file, get_data_dir, log_path
from .dashboard import dashboard, transactions_table
from .errors import LedgerError, ParseError, ValidationError
from .logging_setup import configure_logging, get_logger
from .models import format_amount
from .store import TransactionStore

_logger = get_logger("budget_tracker.cli")

console = Console()
err_console = Console(stderr=True, soft_wrap=True)


# ---- Small module-level helpers used by CLI commands -------------------------


def _error(message: str) -> int:
    err_console.print(f"[red]Error:[/red] {message}", highlight=False)
    _logger.error(message)
    return 1


def _load(data_dir: Path) -> TransactionStore:
    return load_store(ensure_ledger_file(data_dir))


# ---- Command handlers --------------------------------------------------------


def cmd_dashboard(data_dir: Path, *, query: str | None = None, bucket: str = "month") -> int:
    """Render the dashboard, optionally restricted to transactions matching ``query``."""

    if bucket not in BUCKETS:
        return _error(f"unknown bucket {bucket!r}; choose one of: {', '.join(BUCKETS)}")
    try:
        store = _load(data_dir)
    except (LedgerError, OSError) as e:
        return _error(f"failed to load ledger: {e}")

    data = dashboard_data(store, bucket=bucket, query=query)  # type: ignore[arg-type]
    console.print(dashboard(data))
    return 0


def cmd_search(data_dir: Path, query: str) -> int:
    try:
        store = _load(data_dir)
    except (LedgerError, OSError) as e:
        return _error(f"failed to load ledger: {e}")

    results = search(store, query)
    _logger.info("search %r matched %d of %d transactions", query, len(results), len(store))
    if not results:
        console.print(f"No transactions match {query!r}.", highlight=False)
        return 0
    title = Text(f"{len(results)} match(es) for {query!r}")
    console.print(transactions_table(results, title=title, newest_first=False))
    return 0


def cmd_add(
    data_dir: Path,
    *,
    date: str | None = None,
    description: str | None = None,
    category: str | None = None,
    amount: str | None = None,
) -> int:
    """Append one transaction; fields not given are prompted for interactively."""

    try:
        path = ensure_ledger_file(data_dir)
        store = load_store(path)
    except (LedgerError, OSError) as e:
        return _error(f"failed to load ledger: {e}")

    # Deferred import: prompt_toolkit is only needed for interactive input.
    from . import term_ui

    try:
        if date is None:
            date = term_ui.prompt_date().isoformat()
        if description is None:
            description = term_ui.prompt_description()
        if category is None:
            category = term_ui.prompt_category(term_ui.category_choices(store.categories()))
        if amount is None:
            amount = term_ui.prompt_amount()
    except (EOFError, KeyboardInterrupt):
        return _error("aborted; nothing was added")

    try:
        tx = append_transaction(store, date, description, category, amount)
    except ValidationError as e:
        for field, msg in e.errors:
            err_console.print(f"  {field}: {msg}", highlight=False)
        return _error("transaction rejected")

    try:
        save_store(store, path)
    except OSError as e:
        return _error(f"failed to save ledger: {e}")

    _logger.info("added transaction %s %r %s", tx.date, tx.category, format_amount(tx.amount))
    console.print(
        f"Added {tx.date.isoformat()} {tx.description!r} [{tx.category}] "
        f"{format_amount(tx.amount)} to the ledger.",
        highlight=False,
        markup=False,
        soft_wrap=True,
    )
    return 0


def cmd_edit(data_dir: Path) -> int:
    """Open the ledger in ``$EDITOR`` and verify it still parses afterwards."""

    from .editor import open_in_editor

    try:
        path = ensure_ledger_file(data_dir)
    except OSError as e:
        return _error(f"failed to prepare ledger: {e}")

    try:
        status = open_in_editor(path)
    except FileNotFoundError as e:
        return _error(f"editor not found: {e}")
    if status != 0:
        return _error(f"editor exited with status {status}")

    try:
        store = load_store(path)
    except ParseError as e:
        return _error(f"the edited ledger does not parse ({e}); fix it with `edit`")
    except OSError as e:
        return _error(f"failed to reload ledger: {e}")

    console.print(f"Ledger OK: {len(store)} transaction(s).", highlight=False)
    return 0


def cmd_logs(data_dir: Path, *, lines: int = 50) -> int:
    path = log_path(data_dir)
    if not path.exists():
        console.print(f"No log file at {path}.", highlight=False)
        return 0
    with path.open(encoding="utf-8", errors="replace") as f:
        tail = deque(f, maxlen=max(lines, 0))
    for line in tail:
        console.print(line.rstrip("\n"), highlight=False, markup=False)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help=(
        "Personal finance ledger: dashboard, search, add and edit transactions "
        "stored in a CSV file. Loads a local .env before running."
    ),
)


def _data_dir(ctx: typer.Context) -> Path:
    return ctx.obj


def _exit(code: int) -> None:
    if code:
        raise typer.Exit(code)


@app.command("dashboard")
def dashboard_cmd(
    ctx: typer.Context,
    query: Annotated[
        str | None, typer.Option("--query", "-q", help="Only include matching transactions.")
    ] = None,
    bucket: Annotated[
        str, typer.Option(help=f"Time bucket for the balance chart ({', '.join(BUCKETS)}).")
    ] = "month",
) -> None:
    """Show transactions, totals and charts."""

    _exit(cmd_dashboard(_data_dir(ctx), query=query, bucket=bucket))


@app.command("search")
def search_cmd(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Category name or fuzzy description query.")],
) -> None:
    """Search transactions by exact category or fuzzy description."""

    _exit(cmd_search(_data_dir(ctx), query))


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    date: Annotated[
        str | None, typer.Option(help="YYYY-MM-DD or YYYY/MM/DD (prompted when omitted).")
    ] = None,
    description: Annotated[str | None, typer.Option(help="Free-text description.")] = None,
    category: Annotated[
        str | None, typer.Option(help="Category, e.g. Food, Travel, Fun, Medical, Personal.")
    ] = None,
    amount: Annotated[
        str | None, typer.Option(help="Signed amount; negative for an expense (--amount=-12.50).")
    ] = None,
) -> None:
    """Add a transaction."""

    _exit(
        cmd_add(
            _data_dir(ctx),
            date=date,
            description=description,
            category=category,
            amount=amount,
        )
    )


@app.command("edit")
def edit_cmd(ctx: typer.Context) -> None:
    """Edit the ledger file in $EDITOR (default: nano)."""

    _exit(cmd_edit(_data_dir(ctx)))


@app.command("logs")
def logs_cmd(
    ctx: typer.Context,
    lines: Annotated[int, typer.Option("--lines", "-n", help="Number of lines to show.")] = 50,
) -> None:
    """Show the tail of the log file."""

    _exit(cmd_logs(_data_dir(ctx), lines=lines))


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    data_dir: Annotated[
        Path | None,
        typer.Option(
            "--data-dir",
            help="Directory holding expenses.csv and expenses.log "
            "(env BUDGET_TRACKER_DIR; default ~/.local/share/budget-tracker).",
            file_okay=False,
        ),
    ] = None,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables), resolves the data directory, sets up
    file logging there, and shows the dashboard when no subcommand is given.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    resolved = get_data_dir(data_dir)
    try:
        resolved.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _exit(_error(f"cannot create data directory {resolved}: {e}"))
    configure_logging(log_file=log_path(resolved))
    _logger.info("==== starting (data dir %s) ====", resolved)
    ctx.obj = resolved

    if ctx.invoked_subcommand is None:
        _exit(cmd_dashboard(resolved))


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
