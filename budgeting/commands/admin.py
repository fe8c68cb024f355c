"""Admin commands for init and health checks."""

import sqlite3
import sys
from pathlib import Path

from rich.markup import escape

from budgeting.commands.common import console
from budgeting.config import create_default_config, get_config_path, get_database_path
from budgeting.store.schema import init_database
from budgeting.store.sqlite import SqliteGateway


def run_migration(db_path: Path) -> None:
    """Bring an existing database's schema up to date."""
    console.print(f"[cyan]Running migrations on {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Migrations complete")
    console.print("[dim]Database schema is up to date[/dim]")


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config.

    The config records db_path, so a custom database location survives --force.
    """
    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path, db_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, migrate: bool = False) -> None:
    """Initialize budgeting database and configuration."""
    config_path = get_config_path()
    db_path = get_database_path(config_path)

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Migration path: update existing database only
        if migrate:
            if not db_exists:
                console.print("[red]No database found to migrate[/red]", style="bold")
                console.print(f"[dim]Expected location: {db_path}[/dim]")
                sys.exit(1)
            run_migration(db_path)
            return

        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'budgeting init --force' to overwrite[/yellow]")
            console.print("[yellow]Or 'budgeting init --migrate' to update database schema only[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def health_command() -> None:
    """Check that the database is reachable."""
    db_path = get_database_path()

    try:
        SqliteGateway(db_path).ping()
    except sqlite3.Error as e:
        console.print(f"[red]Database unhealthy: {escape(str(e))}[/red]", style="bold")
        console.print(f"[dim]Database: {db_path}[/dim]")
        sys.exit(1)

    console.print("[green]OK[/green]")
