"""Database schema initialization and migrations."""

import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "budgeting" / "budgeting.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Parent tables are created before the tables that reference them.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("PRAGMA foreign_keys = ON")

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE COLLATE NOCASE,
                color TEXT NOT NULL DEFAULT '',
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS recurring_expenses (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                amount INTEGER NOT NULL,
                category_id INTEGER REFERENCES categories(id) ON DELETE SET NULL,
                cadence TEXT NOT NULL CHECK (cadence IN ('monthly', 'semi-annual', 'annual')),
                start_date TEXT NOT NULL,
                next_date TEXT NOT NULL,
                end_date TEXT,
                active INTEGER NOT NULL DEFAULT 1,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS recurring_incomes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                amount INTEGER NOT NULL,
                cadence TEXT NOT NULL CHECK (cadence IN ('monthly', 'semi-annual', 'annual')),
                start_date TEXT NOT NULL,
                next_date TEXT NOT NULL,
                end_date TEXT,
                active INTEGER NOT NULL DEFAULT 1,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS expenses (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                amount INTEGER NOT NULL,
                category_id INTEGER REFERENCES categories(id) ON DELETE SET NULL,
                expense_date TEXT NOT NULL,
                notes TEXT NOT NULL DEFAULT '',
                recurring_id INTEGER REFERENCES recurring_expenses(id) ON DELETE SET NULL,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS incomes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                amount INTEGER NOT NULL,
                income_date TEXT NOT NULL,
                notes TEXT NOT NULL DEFAULT '',
                recurring_id INTEGER REFERENCES recurring_incomes(id) ON DELETE SET NULL,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        # Indexes for the dashboard's date ordered and date ranged reads
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_expense_date ON expenses(expense_date)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_expense_category ON expenses(category_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_expense_recurring ON expenses(recurring_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_income_date ON incomes(income_date)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_income_recurring ON incomes(recurring_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_recurring_expense_next ON recurring_expenses(next_date)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_recurring_income_next ON recurring_incomes(next_date)")

        conn.commit()
        logger.debug("Schema ready at %s", db_path)

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
