"""SQLite implementation of the record gateway."""

import logging
import sqlite3
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from budgeting.domain.models import (
    Cadence,
    Category,
    Cents,
    Expense,
    Income,
    Record,
    RecordKind,
    RecurringExpense,
    RecurringIncome,
)
from budgeting.errors import NotFoundError
from budgeting.store.gateway import date_field_for
from budgeting.store.schema import get_db_path

logger = logging.getLogger(__name__)


def _date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _to_sql(value: Any) -> Any:
    """Convert a record field to its column value."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _category_from_row(row: sqlite3.Row) -> Category:
    return Category(
        id=row["id"],
        name=row["name"],
        color=row["color"],
        created_at=_timestamp(row["created_at"]),
    )


def _expense_from_row(row: sqlite3.Row) -> Expense:
    return Expense(
        id=row["id"],
        name=row["name"],
        amount=Cents(row["amount"]),
        category_id=row["category_id"],
        expense_date=date.fromisoformat(row["expense_date"]),
        notes=row["notes"],
        recurring_id=row["recurring_id"],
        created_at=_timestamp(row["created_at"]),
    )


def _income_from_row(row: sqlite3.Row) -> Income:
    return Income(
        id=row["id"],
        name=row["name"],
        amount=Cents(row["amount"]),
        income_date=date.fromisoformat(row["income_date"]),
        notes=row["notes"],
        recurring_id=row["recurring_id"],
        created_at=_timestamp(row["created_at"]),
    )


def _recurring_expense_from_row(row: sqlite3.Row) -> RecurringExpense:
    return RecurringExpense(
        id=row["id"],
        name=row["name"],
        amount=Cents(row["amount"]),
        category_id=row["category_id"],
        cadence=Cadence(row["cadence"]),
        start_date=date.fromisoformat(row["start_date"]),
        next_date=date.fromisoformat(row["next_date"]),
        end_date=_date(row["end_date"]),
        active=bool(row["active"]),
        created_at=_timestamp(row["created_at"]),
    )


def _recurring_income_from_row(row: sqlite3.Row) -> RecurringIncome:
    return RecurringIncome(
        id=row["id"],
        name=row["name"],
        amount=Cents(row["amount"]),
        cadence=Cadence(row["cadence"]),
        start_date=date.fromisoformat(row["start_date"]),
        next_date=date.fromisoformat(row["next_date"]),
        end_date=_date(row["end_date"]),
        active=bool(row["active"]),
        created_at=_timestamp(row["created_at"]),
    )


@dataclass(frozen=True)
class _Table:
    """How one record kind maps onto a table."""

    name: str
    columns: tuple[str, ...]  # writable columns, excluding id and created_at
    from_row: Callable[[sqlite3.Row], Record]


_TABLES: dict[RecordKind, _Table] = {
    RecordKind.CATEGORY: _Table("categories", ("name", "color"), _category_from_row),
    RecordKind.EXPENSE: _Table(
        "expenses",
        ("name", "amount", "category_id", "expense_date", "notes", "recurring_id"),
        _expense_from_row,
    ),
    RecordKind.INCOME: _Table(
        "incomes",
        ("name", "amount", "income_date", "notes", "recurring_id"),
        _income_from_row,
    ),
    RecordKind.RECURRING_EXPENSE: _Table(
        "recurring_expenses",
        ("name", "amount", "category_id", "cadence", "start_date", "next_date", "end_date", "active"),
        _recurring_expense_from_row,
    ),
    RecordKind.RECURRING_INCOME: _Table(
        "recurring_incomes",
        ("name", "amount", "cadence", "start_date", "next_date", "end_date", "active"),
        _recurring_income_from_row,
    ),
}


class SqliteGateway:
    """Record gateway backed by a single SQLite file.

    Each call opens its own connection, so one instance can be shared by
    concurrent readers; SQLite serializes the writers.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection with row factory and foreign keys enabled."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    def _write(self, sql: str, params: tuple[Any, ...]) -> tuple[int | None, int]:
        """Run one statement in its own transaction.

        Returns:
            Tuple of (lastrowid, rowcount).
        """
        with self._connect() as conn:
            try:
                cursor = conn.execute(sql, params)
                conn.commit()
                return cursor.lastrowid, cursor.rowcount
            except sqlite3.Error:
                conn.rollback()
                raise

    def _select(
        self, kind: RecordKind, where: str = "", params: tuple[Any, ...] = (), order: str = "id"
    ) -> list[Record]:
        table = _TABLES[kind]
        query = f"SELECT * FROM {table.name}"
        if where:
            query += f" WHERE {where}"
        query += f" ORDER BY {order}"
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        logger.debug("Retrieved %d %s records", len(rows), kind.value)
        return [table.from_row(row) for row in rows]

    def find_all(self, kind: RecordKind) -> list[Record]:
        """Return every record of a kind, oldest id first.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        return self._select(kind)

    def find_by_id(self, kind: RecordKind, record_id: int) -> Record:
        """Return one record by id.

        Raises:
            NotFoundError: If no record has this id.
            sqlite3.Error: If database operation fails.
        """
        records = self._select(kind, "id = ?", (record_id,))
        if not records:
            raise NotFoundError(kind, record_id)
        return records[0]

    def find_in_range(
        self, kind: RecordKind, field: str, start: date | datetime, end: date | datetime
    ) -> list[Record]:
        """Return records whose date field lies in [start, end].

        Dates carry no time of day, so datetime bounds are compared by their
        calendar date.

        Raises:
            ValueError: If field is not a date column of this kind.
            sqlite3.Error: If database operation fails.
        """
        if field not in _TABLES[kind].columns or not field.endswith("_date"):
            raise ValueError(f"{field!r} is not a date field of {kind.value}")

        since = start.date() if isinstance(start, datetime) else start
        until = end.date() if isinstance(end, datetime) else end
        return self._select(
            kind,
            f"{field} BETWEEN ? AND ?",
            (since.isoformat(), until.isoformat()),
            order=f"{field}, id",
        )

    def find_latest(self, kind: RecordKind, limit: int) -> list[Record]:
        """Return up to limit records, newest date first, ties by highest id.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        if limit <= 0:
            return []
        field = date_field_for(kind)
        table = _TABLES[kind]
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM {table.name} ORDER BY {field} DESC, id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        logger.debug("Retrieved %d latest %s records", len(rows), kind.value)
        return [table.from_row(row) for row in rows]

    def create(self, kind: RecordKind, record: Record) -> Record:
        """Insert a record and return the stored copy with id and created_at.

        Raises:
            sqlite3.IntegrityError: On constraint violations, e.g. a duplicate category name.
            sqlite3.Error: If database operation fails.
        """
        table = _TABLES[kind]
        placeholders = ", ".join("?" for _ in table.columns)
        params = tuple(_to_sql(getattr(record, column)) for column in table.columns)
        record_id, _ = self._write(
            f"INSERT INTO {table.name} ({', '.join(table.columns)}) VALUES ({placeholders})",
            params,
        )
        if record_id is None:
            raise sqlite3.DatabaseError(f"No id assigned to new {kind.value}")
        logger.info("Added %s %d", kind.value, record_id)
        return self.find_by_id(kind, record_id)

    def replace(self, kind: RecordKind, record: Record) -> None:
        """Overwrite every writable field of an existing record.

        Raises:
            ValueError: If the record has no id.
            NotFoundError: If no record has this id.
            sqlite3.Error: If database operation fails.
        """
        if record.id is None:
            raise ValueError(f"Cannot replace a {kind.value} without an id")

        table = _TABLES[kind]
        assignments = ", ".join(f"{column} = ?" for column in table.columns)
        params = tuple(_to_sql(getattr(record, column)) for column in table.columns)
        _, updated = self._write(f"UPDATE {table.name} SET {assignments} WHERE id = ?", (*params, record.id))
        if updated == 0:
            raise NotFoundError(kind, record.id)
        logger.info("Replaced %s %d", kind.value, record.id)

    def delete_by_id(self, kind: RecordKind, record_id: int) -> None:
        """Delete a record. Foreign keys pointing at it are set to NULL.

        Raises:
            NotFoundError: If no record has this id.
            sqlite3.Error: If database operation fails.
        """
        table = _TABLES[kind]
        _, deleted = self._write(f"DELETE FROM {table.name} WHERE id = ?", (record_id,))
        if deleted == 0:
            raise NotFoundError(kind, record_id)
        logger.info("Deleted %s %d", kind.value, record_id)

    def ping(self) -> None:
        """Check the database file exists and holds the schema.

        Raises:
            sqlite3.Error: If the database cannot be opened or queried.
        """
        conn = sqlite3.connect(f"{self.db_path.resolve().as_uri()}?mode=rw", uri=True)
        try:
            conn.execute("SELECT 1 FROM categories LIMIT 1").fetchall()
        finally:
            conn.close()
