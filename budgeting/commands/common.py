"""Helpers shared by the command modules."""

import sys

from rich.console import Console
from rich.markup import escape

from budgeting.config import get_database_path, get_recent_limit
from budgeting.domain.models import Category, RecordKind
from budgeting.domain.validation import ValidationErrors
from budgeting.errors import NotFoundError
from budgeting.store.gateway import RecordGateway
from budgeting.store.schema import database_exists
from budgeting.store.sqlite import SqliteGateway

console = Console()


def open_gateway() -> SqliteGateway:
    """Open the configured database, exiting if it has not been initialized."""
    db_path = get_database_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'budgeting init' first.[/red]", style="bold")
        sys.exit(1)
    return SqliteGateway(db_path)


def load_recent_limit() -> int:
    """Read the dashboard limit, exiting with a message if the config is invalid."""
    try:
        return get_recent_limit()
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def print_validation_errors(errors: ValidationErrors) -> None:
    """Print every validation error, one per line."""
    console.print("[red]Validation failed:[/red]", style="bold")
    for error in errors:
        console.print(f"  [red]•[/red] {error.field}: {error.message}")


def resolve_category(gateway: RecordGateway, value: str | None) -> int | None:
    """Turn a category id or name into a category id.

    Args:
        gateway: Record store.
        value: Category id, category name (any case), or None/blank for no category.
            Digits are tried as an id first, then as a name.

    Returns:
        The category id, or None when no category was given.

    Raises:
        NotFoundError: If no category matches.
    """
    if value is None or not value.strip():
        return None

    value = value.strip()
    categories = [c for c in gateway.find_all(RecordKind.CATEGORY) if isinstance(c, Category)]

    if value.isdigit():
        for category in categories:
            if category.id == int(value):
                return category.id

    wanted = value.casefold()
    for category in categories:
        if category.name.casefold() == wanted:
            return category.id

    raise NotFoundError(RecordKind.CATEGORY, value)
