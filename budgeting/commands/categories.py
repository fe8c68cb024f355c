"""Category commands (list, add, edit, delete)."""

import sqlite3
import sys
from dataclasses import replace

from rich.markup import escape

from budgeting.commands.common import console, open_gateway, print_validation_errors
from budgeting.commands.dashboard import build_categories_table
from budgeting.domain.models import Category, RecordKind
from budgeting.domain.validation import category_name_taken, validate_category
from budgeting.errors import NotFoundError
from budgeting.store.gateway import RecordGateway


def _all_categories(gateway: RecordGateway) -> list[Category]:
    return [c for c in gateway.find_all(RecordKind.CATEGORY) if isinstance(c, Category)]


def _print_categories(gateway: RecordGateway) -> None:
    categories = _all_categories(gateway)
    if not categories:
        console.print("[yellow]No categories yet[/yellow]")
        return
    console.print(build_categories_table(categories))


def list_categories_command() -> None:
    """List categories."""
    gateway = open_gateway()

    try:
        _print_categories(gateway)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def add_category_command(name: str, color: str = "") -> None:
    """Create a category.

    Args:
        name: Category name, unique regardless of case.
        color: Optional #RRGGBB color.
    """
    errors = validate_category(name, color)
    if errors.has_errors():
        print_validation_errors(errors)
        sys.exit(1)

    gateway = open_gateway()

    try:
        if category_name_taken(_all_categories(gateway), name):
            console.print("[red]Category with this name already exists[/red]", style="bold")
            sys.exit(1)

        category = gateway.create(RecordKind.CATEGORY, Category(name=name.strip(), color=color.strip()))
        console.print(f"[green]✓[/green] Created category: {escape(category.name)}")
        _print_categories(gateway)

    except sqlite3.Error as e:
        console.print(f"[red]Failed to create category: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def edit_category_command(category_id: int, name: str, color: str = "") -> None:
    """Replace a category's name and color."""
    errors = validate_category(name, color)
    if errors.has_errors():
        print_validation_errors(errors)
        sys.exit(1)

    gateway = open_gateway()

    try:
        if category_name_taken(_all_categories(gateway), name, exclude_id=category_id):
            console.print("[red]Category with this name already exists[/red]", style="bold")
            sys.exit(1)

        existing = gateway.find_by_id(RecordKind.CATEGORY, category_id)
        gateway.replace(RecordKind.CATEGORY, replace(existing, name=name.strip(), color=color.strip()))
        console.print(f"[green]✓[/green] Category {category_id} updated")
        _print_categories(gateway)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to update category: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def delete_category_command(category_id: int) -> None:
    """Delete a category. Its expenses are kept and become uncategorized."""
    gateway = open_gateway()

    try:
        gateway.delete_by_id(RecordKind.CATEGORY, category_id)
        console.print(f"[green]✓[/green] Category {category_id} deleted")
        _print_categories(gateway)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Failed to delete category: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
