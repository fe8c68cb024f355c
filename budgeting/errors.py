"""Exceptions shared across the store and the domain."""

from budgeting.domain.models import RecordKind


class NotFoundError(LookupError):
    """Raised when a record does not exist in the store.

    The key is usually the record id; lookups by name pass the name.
    """

    def __init__(self, kind: RecordKind, record_id: int | str) -> None:
        super().__init__(f"{kind.value} {record_id!s} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidMonthError(ValueError):
    """Raised when a month number falls outside 1..12."""

    def __init__(self, month: int) -> None:
        super().__init__(f"Month must be between 1 and 12, got {month}")
        self.month = month


class InvalidYearError(ValueError):
    """Raised when a year falls outside the supported range."""

    def __init__(self, year: int, min_year: int, max_year: int) -> None:
        super().__init__(f"Year must be between {min_year} and {max_year}, got {year}")
        self.year = year
