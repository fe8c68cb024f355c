"""CLI entry point for budgeting."""

import typer

from budgeting.commands.admin import health_command, init_command
from budgeting.commands.categories import (
    add_category_command,
    delete_category_command,
    edit_category_command,
    list_categories_command,
)
from budgeting.commands.dashboard import dashboard_command, overview_command, recent_command
from budgeting.commands.transactions import (
    add_expense_command,
    add_income_command,
    delete_expense_command,
    delete_income_command,
    edit_expense_command,
    edit_income_command,
)
from budgeting.config import get_log_level
from budgeting.logs import configure_logging

app = typer.Typer(
    name="budgeting",
    help="Track your income and expenses, and see where your month stands",
    add_completion=False,
)
expense_app = typer.Typer(help="Add, edit and delete your expenses.")
income_app = typer.Typer(help="Add, edit and delete your income.")
category_app = typer.Typer(help="Manage your expense categories.")

app.add_typer(expense_app, name="expense")
app.add_typer(income_app, name="income")
app.add_typer(category_app, name="category")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Track your income and expenses, and see where your month stands."""
    try:
        level = "DEBUG" if verbose else get_log_level()
        configure_logging(level)
    except ValueError:
        configure_logging("WARNING")


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update the database schema only"),
) -> None:
    """Initialize the budgeting database and configuration."""
    init_command(force, migrate)


@app.command(name="health")
def health() -> None:
    """Check that your database is reachable."""
    health_command()


@app.command(name="dashboard")
def dashboard(
    limit: int = typer.Option(None, "--limit", "-n", help="Transactions to show (default from config)"),
) -> None:
    """Show your categories, this month's overview and recent activity."""
    dashboard_command(limit)


@app.command(name="recent")
def recent(
    limit: int = typer.Option(None, "--limit", "-n", help="Transactions to show (default from config)"),
) -> None:
    """List your recent expenses and income, newest first."""
    recent_command(limit)


@app.command(name="overview")
def overview(
    month: int = typer.Option(None, "--month", "-m", help="Month number 1-12 (default: this month)"),
    year: int = typer.Option(None, "--year", "-y", help="Year (default: this year)"),
) -> None:
    """Show your total income, expenses and net savings for a month."""
    overview_command(month, year)


@expense_app.command(name="add")
def expense_add(
    name: str,
    amount: str,
    date: str = typer.Option("", "--date", "-d", help="Expense date YYYY-MM-DD (default: today)"),
    category: str = typer.Option(None, "--category", "-c", help="Category name or id"),
    notes: str = typer.Option("", "--notes", help="Free-text notes"),
) -> None:
    """Record an expense."""
    add_expense_command(name, amount, date, category, notes)


@expense_app.command(name="edit")
def expense_edit(
    expense_id: int,
    name: str,
    amount: str,
    date: str = typer.Option("", "--date", "-d", help="Expense date YYYY-MM-DD (default: today)"),
    category: str = typer.Option(None, "--category", "-c", help="Category name or id (omit to clear)"),
    notes: str = typer.Option("", "--notes", help="Free-text notes"),
) -> None:
    """Replace an expense with new values."""
    edit_expense_command(expense_id, name, amount, date, category, notes)


@expense_app.command(name="delete")
def expense_delete(expense_id: int) -> None:
    """Delete an expense."""
    delete_expense_command(expense_id)


@income_app.command(name="add")
def income_add(
    name: str,
    amount: str,
    date: str = typer.Option("", "--date", "-d", help="Income date YYYY-MM-DD (default: today)"),
    notes: str = typer.Option("", "--notes", help="Free-text notes"),
) -> None:
    """Record income."""
    add_income_command(name, amount, date, notes)


@income_app.command(name="edit")
def income_edit(
    income_id: int,
    name: str,
    amount: str,
    date: str = typer.Option("", "--date", "-d", help="Income date YYYY-MM-DD (default: today)"),
    notes: str = typer.Option("", "--notes", help="Free-text notes"),
) -> None:
    """Replace an income with new values."""
    edit_income_command(income_id, name, amount, date, notes)


@income_app.command(name="delete")
def income_delete(income_id: int) -> None:
    """Delete an income."""
    delete_income_command(income_id)


@category_app.command(name="list")
def category_list() -> None:
    """List your categories."""
    list_categories_command()


@category_app.command(name="add")
def category_add(
    name: str,
    color: str = typer.Option("", "--color", help="Hex color, e.g. #FF5733"),
) -> None:
    """Create a category."""
    add_category_command(name, color)


@category_app.command(name="edit")
def category_edit(
    category_id: int,
    name: str,
    color: str = typer.Option("", "--color", help="Hex color, e.g. #FF5733"),
) -> None:
    """Rename or recolor a category."""
    edit_category_command(category_id, name, color)


@category_app.command(name="delete")
def category_delete(category_id: int) -> None:
    """Delete a category. Its expenses are kept without a category."""
    delete_category_command(category_id)


if __name__ == "__main__":
    app()
