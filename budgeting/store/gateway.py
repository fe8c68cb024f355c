"""The record store contract the domain reads from and writes through."""

from datetime import date, datetime
from typing import Protocol

from budgeting.domain.models import Record, RecordKind


class RecordGateway(Protocol):
    """Create/read/update/delete of opaque records, grouped by kind.

    Writes touch exactly one record. Store failures propagate unchanged.
    """

    def find_all(self, kind: RecordKind) -> list[Record]:
        """Return every record of a kind."""
        ...

    def find_by_id(self, kind: RecordKind, record_id: int) -> Record:
        """Return one record.

        Raises:
            NotFoundError: If no record has this id.
        """
        ...

    def find_in_range(
        self, kind: RecordKind, field: str, start: date | datetime, end: date | datetime
    ) -> list[Record]:
        """Return records whose date field lies in [start, end], both ends inclusive."""
        ...

    def find_latest(self, kind: RecordKind, limit: int) -> list[Record]:
        """Return up to limit records, newest date first, ties by highest id first."""
        ...

    def create(self, kind: RecordKind, record: Record) -> Record:
        """Insert a record and return it with its assigned id."""
        ...

    def replace(self, kind: RecordKind, record: Record) -> None:
        """Overwrite every field of an existing record.

        Raises:
            NotFoundError: If no record has this id.
        """
        ...

    def delete_by_id(self, kind: RecordKind, record_id: int) -> None:
        """Delete a record. Dependent references become absent.

        Raises:
            NotFoundError: If no record has this id.
        """
        ...

    def ping(self) -> None:
        """Raise if the store is unreachable."""
        ...


# Date column used for ordering and ranges, per kind
DATE_FIELDS: dict[RecordKind, str] = {
    RecordKind.EXPENSE: "expense_date",
    RecordKind.INCOME: "income_date",
    RecordKind.RECURRING_EXPENSE: "next_date",
    RecordKind.RECURRING_INCOME: "next_date",
}


def date_field_for(kind: RecordKind) -> str:
    """Return the date column of a dated record kind."""
    try:
        return DATE_FIELDS[kind]
    except KeyError:
        raise ValueError(f"{kind.value} records have no date field") from None
