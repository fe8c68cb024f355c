"""Shared fixtures."""

from pathlib import Path

import pytest

from budgeting.store.schema import init_database
from budgeting.store.sqlite import SqliteGateway


@pytest.fixture
def gateway(tmp_path: Path) -> SqliteGateway:
    """A gateway over a freshly initialized database."""
    db_path = tmp_path / "budgeting.db"
    init_database(db_path)
    return SqliteGateway(db_path)
