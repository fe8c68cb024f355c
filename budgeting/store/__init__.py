"""Database store layer - provides persistence for the application.

This module re-exports the gateway contract, its SQLite implementation and
the schema helpers for easy importing.
"""

from budgeting.store.gateway import DATE_FIELDS, RecordGateway, date_field_for
from budgeting.store.schema import database_exists, get_db_path, init_database
from budgeting.store.sqlite import SqliteGateway

__all__ = [
    # Gateway
    "DATE_FIELDS",
    "RecordGateway",
    "SqliteGateway",
    "date_field_for",
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
]
