"""Dashboard, recent activity and monthly overview commands."""

import sqlite3
import sys
from datetime import datetime

from rich.markup import escape
from rich.table import Table

from budgeting.commands.common import console, open_gateway
from budgeting.config import get_recent_limit
from budgeting.dates import format_month_label
from budgeting.domain.ledger import OverviewStats, Transaction, period_overview, recent_transactions
from budgeting.domain.models import Category, RecordKind
from budgeting.errors import InvalidMonthError, InvalidYearError
from budgeting.store.gateway import RecordGateway


def build_transactions_table(transactions: list[Transaction], title: str = "Recent Transactions") -> Table:
    """Render the recent feed as a rich table."""
    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Type", justify="center")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Notes", style="dim")

    for txn in transactions:
        if txn.kind == "expense":
            amount_display = f"[red]-{txn.amount}[/red]"
        else:
            amount_display = f"[green]+{txn.amount}[/green]"

        table.add_row(
            txn.date,
            txn.kind,
            str(txn.id),
            escape(txn.name),
            amount_display,
            escape(txn.category) if txn.category else "[dim]-[/dim]",
            escape(txn.notes),
        )

    return table


def build_overview_table(stats: OverviewStats) -> Table:
    """Render monthly totals as a rich table."""
    table = Table(title=f"Overview: {format_month_label(stats.month, stats.year)}")
    table.add_column("", style="bold")
    table.add_column("Amount", justify="right")

    net_style = "green" if stats.is_positive else "red"
    table.add_row("Total Income", f"[green]{stats.total_income.text}[/green]")
    table.add_row("Total Expenses", f"[red]{stats.total_expenses.text}[/red]")
    table.add_row("Net Savings", f"[{net_style}]{stats.net_savings.text}[/{net_style}]")
    return table


def build_categories_table(categories: list[Category]) -> Table:
    """Render categories sorted by name."""
    table = Table(title="Categories")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="magenta")
    table.add_column("Color")

    for category in sorted(categories, key=lambda c: c.name.casefold()):
        color = f"[{category.color}]■[/{category.color}] {category.color}" if category.color else "[dim]-[/dim]"
        table.add_row(str(category.id), escape(category.name), color)

    return table


def show_refreshed_view(gateway: RecordGateway, limit: int | None = None) -> None:
    """Print the recent feed and the current month's overview."""
    if limit is None:
        limit = get_recent_limit()
    now = datetime.now()

    transactions = recent_transactions(gateway, limit)
    if transactions:
        console.print(build_transactions_table(transactions))
    else:
        console.print("[yellow]No transactions yet[/yellow]")

    console.print(build_overview_table(period_overview(gateway, now.month, now.year)))


def dashboard_command(limit: int | None = None) -> None:
    """Show categories, the current month's overview and recent activity."""
    gateway = open_gateway()

    try:
        categories = [c for c in gateway.find_all(RecordKind.CATEGORY) if isinstance(c, Category)]
        if categories:
            console.print(build_categories_table(categories))
        show_refreshed_view(gateway, limit)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def recent_command(limit: int | None = None) -> None:
    """List recent expenses and income, newest first."""
    gateway = open_gateway()

    try:
        if limit is None:
            limit = get_recent_limit()
        transactions = recent_transactions(gateway, limit)

        if not transactions:
            console.print("[yellow]No transactions found[/yellow]")
            return

        console.print(build_transactions_table(transactions, f"Recent Transactions (showing {len(transactions)})"))

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def overview_command(month: int | None = None, year: int | None = None) -> None:
    """Show income, expenses and net savings for a month (default: current month)."""
    gateway = open_gateway()
    now = datetime.now()

    try:
        stats = period_overview(
            gateway,
            month if month is not None else now.month,
            year if year is not None else now.year,
        )
        console.print(build_overview_table(stats))

    except (InvalidMonthError, InvalidYearError) as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
