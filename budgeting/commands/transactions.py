"""Expense and income commands (add, edit, delete)."""

import sqlite3
import sys
from dataclasses import replace

from rich.markup import escape

from budgeting.commands.common import (
    console,
    load_recent_limit,
    open_gateway,
    print_validation_errors,
    resolve_category,
)
from budgeting.commands.dashboard import show_refreshed_view
from budgeting.domain.currency import format_currency
from budgeting.domain.models import Expense, Income, RecordKind
from budgeting.domain.validation import validate_expense, validate_income
from budgeting.errors import NotFoundError


def add_expense_command(
    name: str,
    amount: str,
    date: str = "",
    category: str | None = None,
    notes: str = "",
) -> None:
    """Record an expense.

    Args:
        name: What the money was spent on.
        amount: Amount in dollars, e.g. "12.34" or "$1,000".
        date: Expense date (YYYY-MM-DD). Blank means today.
        category: Optional category name or id.
        notes: Free-text notes.
    """
    amount_cents, expense_date, errors = validate_expense(name, amount, date)
    if errors.has_errors():
        print_validation_errors(errors)
        sys.exit(1)

    gateway = open_gateway()
    limit = load_recent_limit()

    try:
        category_id = resolve_category(gateway, category)
        expense = gateway.create(
            RecordKind.EXPENSE,
            Expense(
                name=name.strip(),
                amount=amount_cents,
                expense_date=expense_date,
                category_id=category_id,
                notes=notes,
            ),
        )
        console.print(
            f"[green]✓[/green] Expense {expense.id} added: "
            f"{escape(expense.name)} {format_currency(amount_cents)} on {expense_date}"
        )
        show_refreshed_view(gateway, limit)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to create expense: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def edit_expense_command(
    expense_id: int,
    name: str,
    amount: str,
    date: str = "",
    category: str | None = None,
    notes: str = "",
) -> None:
    """Replace every field of an existing expense.

    Fields not given are cleared or defaulted, exactly as when adding.
    """
    amount_cents, expense_date, errors = validate_expense(name, amount, date)
    if errors.has_errors():
        print_validation_errors(errors)
        sys.exit(1)

    gateway = open_gateway()
    limit = load_recent_limit()

    try:
        existing = gateway.find_by_id(RecordKind.EXPENSE, expense_id)
        category_id = resolve_category(gateway, category)
        updated = replace(
            existing,
            name=name.strip(),
            amount=amount_cents,
            expense_date=expense_date,
            category_id=category_id,
            notes=notes,
        )
        gateway.replace(RecordKind.EXPENSE, updated)
        console.print(f"[green]✓[/green] Expense {expense_id} updated")
        show_refreshed_view(gateway, limit)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to update expense: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def delete_expense_command(expense_id: int) -> None:
    """Delete an expense."""
    gateway = open_gateway()
    limit = load_recent_limit()

    try:
        gateway.delete_by_id(RecordKind.EXPENSE, expense_id)
        console.print(f"[green]✓[/green] Expense {expense_id} deleted")
        show_refreshed_view(gateway, limit)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to delete expense: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def add_income_command(name: str, amount: str, date: str = "", notes: str = "") -> None:
    """Record income.

    Args:
        name: Where the money came from.
        amount: Amount in dollars.
        date: Income date (YYYY-MM-DD). Blank means today.
        notes: Free-text notes.
    """
    amount_cents, income_date, errors = validate_income(name, amount, date)
    if errors.has_errors():
        print_validation_errors(errors)
        sys.exit(1)

    gateway = open_gateway()
    limit = load_recent_limit()

    try:
        income = gateway.create(
            RecordKind.INCOME,
            Income(name=name.strip(), amount=amount_cents, income_date=income_date, notes=notes),
        )
        console.print(
            f"[green]✓[/green] Income {income.id} added: "
            f"{escape(income.name)} {format_currency(amount_cents)} on {income_date}"
        )
        show_refreshed_view(gateway, limit)

    except sqlite3.Error as e:
        console.print(f"[red]Failed to create income: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def edit_income_command(income_id: int, name: str, amount: str, date: str = "", notes: str = "") -> None:
    """Replace every field of an existing income."""
    amount_cents, income_date, errors = validate_income(name, amount, date)
    if errors.has_errors():
        print_validation_errors(errors)
        sys.exit(1)

    gateway = open_gateway()
    limit = load_recent_limit()

    try:
        existing = gateway.find_by_id(RecordKind.INCOME, income_id)
        updated = replace(existing, name=name.strip(), amount=amount_cents, income_date=income_date, notes=notes)
        gateway.replace(RecordKind.INCOME, updated)
        console.print(f"[green]✓[/green] Income {income_id} updated")
        show_refreshed_view(gateway, limit)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to update income: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def delete_income_command(income_id: int) -> None:
    """Delete an income."""
    gateway = open_gateway()
    limit = load_recent_limit()

    try:
        gateway.delete_by_id(RecordKind.INCOME, income_id)
        console.print(f"[green]✓[/green] Income {income_id} deleted")
        show_refreshed_view(gateway, limit)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to delete income: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
